from typing import Optional
from pydantic import Field, StrictBool
from patrimonio.presentation.schemas.base import NonEmptyStr, Permissoes, RequestSchema, UpdateSchema


class ReferenceCreateSchema(RequestSchema):
    nome: NonEmptyStr
    descricao: Optional[str] = None


class ReferenceUpdateSchema(UpdateSchema):
    nullable_fields = frozenset({'descricao'})

    nome: Optional[NonEmptyStr] = None
    descricao: Optional[str] = None
    ativo: Optional[StrictBool] = None


class LocalizacaoCreateSchema(ReferenceCreateSchema):
    endereco: Optional[str] = None
    responsavel: Optional[str] = None
    telefone: Optional[str] = None


class LocalizacaoUpdateSchema(ReferenceUpdateSchema):
    nullable_fields = frozenset({'descricao', 'endereco', 'responsavel', 'telefone'})

    endereco: Optional[str] = None
    responsavel: Optional[str] = None
    telefone: Optional[str] = None


class PerfilCreateSchema(ReferenceCreateSchema):
    permissoes: Permissoes = Field(default_factory=dict)


class PerfilUpdateSchema(ReferenceUpdateSchema):
    permissoes: Optional[Permissoes] = None


class TipoMovimentacaoCreateSchema(ReferenceCreateSchema):
    requer_devolucao: StrictBool = False


class TipoMovimentacaoUpdateSchema(ReferenceUpdateSchema):
    requer_devolucao: Optional[StrictBool] = None
