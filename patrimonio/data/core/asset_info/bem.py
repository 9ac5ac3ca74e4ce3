from patrimonio.data.core.patrimonio_base import PatrimonioBase
from patrimonio import db


class Bem(PatrimonioBase):
    __tablename__ = 'bens'

    tombo = db.Column(db.String(100), unique=True, nullable=False)
    nome = db.Column(db.String(200), nullable=False)
    categoria_id = db.Column(db.String(36), db.ForeignKey('categorias.id', ondelete='RESTRICT'), nullable=False)
    localizacao_id = db.Column(db.String(36), db.ForeignKey('localizacoes.id', ondelete='RESTRICT'), nullable=False)
    sala = db.Column(db.String(100), nullable=False)
    # Base64 encoded images
    imagem_tombo = db.Column(db.Text, nullable=True)
    foto_bem = db.Column(db.Text, nullable=True)
    ativo = db.Column(db.Boolean, default=True, nullable=False)

    # Relationships (no backrefs)
    categoria = db.relationship('Categoria', lazy='joined')
    localizacao = db.relationship('Localizacao', lazy='joined')

    def __repr__(self):
        return f'<Bem {self.tombo}>'
