from typing import Optional
from pydantic import model_validator
from pydantic_core import PydanticCustomError
from patrimonio.presentation.schemas.base import (
    IsoDate,
    NonEmptyStr,
    Observacao,
    RequestSchema,
    UpdateSchema,
    UUIDStr,
)


class MovimentacaoCreateSchema(RequestSchema):
    bem_id: UUIDStr
    # Snapshot fields default to the asset's current values
    tombo: Optional[NonEmptyStr] = None
    nome_item: Optional[NonEmptyStr] = None
    tipo_id: UUIDStr
    pessoa: NonEmptyStr
    contato: NonEmptyStr
    pastoral: NonEmptyStr
    observacao: Optional[Observacao] = None
    data_emprestimo: IsoDate
    data_devolucao: Optional[IsoDate] = None


class MovimentacaoUpdateSchema(UpdateSchema):
    """
    Only the return date and the note may change. A null return date leaves
    the stored one untouched; a null note clears it.
    """

    nullable_fields = frozenset({'data_devolucao', 'observacao'})

    data_devolucao: Optional[IsoDate] = None
    observacao: Optional[Observacao] = None

    @model_validator(mode='after')
    def _require_change(self):
        if not self.model_fields_set:
            raise PydanticCustomError('empty_update', 'Informe dataDevolucao ou observacao')
        return self

    def to_data(self):
        data = super().to_data()
        if data.get('data_devolucao') is None:
            data.pop('data_devolucao', None)
        return data
