from patrimonio.data.core.patrimonio_base import PatrimonioBase
from patrimonio import db
from werkzeug.security import generate_password_hash, check_password_hash


class Usuario(PatrimonioBase):
    __tablename__ = 'usuarios'
    __serialize_exclude__ = frozenset({'senha_hash'})

    email = db.Column(db.String(120), unique=True, nullable=False)
    senha_hash = db.Column(db.String(255), nullable=False)
    perfil_id = db.Column(db.String(36), db.ForeignKey('perfis.id', ondelete='RESTRICT'), nullable=False)
    email_recuperacao = db.Column(db.String(120), nullable=True)
    temp_password = db.Column(db.Boolean, default=False, nullable=False)
    ativo = db.Column(db.Boolean, default=True, nullable=False)

    # Relationships (no backrefs)
    perfil = db.relationship('Perfil', lazy='joined')

    def set_password(self, password):
        self.senha_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.senha_hash, password)

    def __repr__(self):
        return f'<Usuario {self.email}>'
