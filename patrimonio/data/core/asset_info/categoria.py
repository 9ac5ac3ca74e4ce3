from patrimonio.data.core.patrimonio_base import ReferenceBase


class Categoria(ReferenceBase):
    __tablename__ = 'categorias'
