from patrimonio.data.core.patrimonio_base import ReferenceBase
from patrimonio import db


class Perfil(ReferenceBase):
    __tablename__ = 'perfis'

    # resource -> action -> bool, stored and returned but not enforced
    permissoes = db.Column(db.JSON, nullable=False, default=dict)
