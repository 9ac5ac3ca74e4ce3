from patrimonio.data.core.patrimonio_base import ReferenceBase
from patrimonio import db


class TipoMovimentacao(ReferenceBase):
    __tablename__ = 'tipos_movimentacao'

    requer_devolucao = db.Column(db.Boolean, default=False, nullable=False)
