from typing import Optional
from pydantic import StrictBool
from patrimonio.presentation.schemas.base import NonEmptyStr, RequestSchema, UpdateSchema, UUIDStr


class BemCreateSchema(RequestSchema):
    tombo: NonEmptyStr
    nome: NonEmptyStr
    categoria_id: UUIDStr
    localizacao_id: UUIDStr
    sala: NonEmptyStr
    imagem_tombo: Optional[str] = None
    foto_bem: Optional[str] = None


class BemUpdateSchema(UpdateSchema):
    nullable_fields = frozenset({'imagem_tombo', 'foto_bem'})

    tombo: Optional[NonEmptyStr] = None
    nome: Optional[NonEmptyStr] = None
    categoria_id: Optional[UUIDStr] = None
    localizacao_id: Optional[UUIDStr] = None
    sala: Optional[NonEmptyStr] = None
    imagem_tombo: Optional[str] = None
    foto_bem: Optional[str] = None
    ativo: Optional[StrictBool] = None
