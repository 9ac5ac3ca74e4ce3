from patrimonio.data.core.patrimonio_base import PatrimonioBase
from patrimonio import db


class Movimentacao(PatrimonioBase):
    __tablename__ = 'movimentacoes'

    bem_id = db.Column(db.String(36), db.ForeignKey('bens.id', ondelete='RESTRICT'), nullable=False, index=True)
    # Snapshot of the asset at the time of the movement
    tombo = db.Column(db.String(100), nullable=False)
    nome_item = db.Column(db.String(200), nullable=False)
    tipo_id = db.Column(db.String(36), db.ForeignKey('tipos_movimentacao.id', ondelete='RESTRICT'), nullable=False)
    pessoa = db.Column(db.String(200), nullable=False)
    contato = db.Column(db.String(200), nullable=False)
    pastoral = db.Column(db.String(200), nullable=False)
    observacao = db.Column(db.Text, nullable=True)
    data_emprestimo = db.Column(db.Date, nullable=False)
    data_devolucao = db.Column(db.Date, nullable=True)
    usuario_id = db.Column(db.String(36), db.ForeignKey('usuarios.id', ondelete='SET NULL'), nullable=True)

    # Relationships (no backrefs)
    bem = db.relationship('Bem', lazy='joined')
    tipo = db.relationship('TipoMovimentacao', lazy='joined')
    usuario = db.relationship('Usuario', lazy='joined')

    @property
    def is_returned(self):
        return self.data_devolucao is not None

    def __repr__(self):
        return f'<Movimentacao {self.tombo} {self.data_emprestimo}>'
