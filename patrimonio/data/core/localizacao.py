from patrimonio.data.core.patrimonio_base import ReferenceBase
from patrimonio import db


class Localizacao(ReferenceBase):
    __tablename__ = 'localizacoes'

    endereco = db.Column(db.Text, nullable=True)
    responsavel = db.Column(db.String(120), nullable=True)
    telefone = db.Column(db.String(40), nullable=True)
