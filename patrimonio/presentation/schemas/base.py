"""
Base request schemas

Fields are snake_case in Python and camelCase on the wire (``alias_generator``);
unknown keys are ignored. Update schemas only report the keys the client sent,
and refuse explicit nulls for non-nullable columns.
"""

import re
import uuid
from datetime import date
from typing import Annotated, Any, ClassVar, Dict
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    StrictBool,
    StringConstraints,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

ISO_DATE = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def _check_uuid(value: str) -> str:
    try:
        uuid.UUID(value)
    except ValueError:
        raise PydanticCustomError('uuid_format', 'ID inválido')
    return value


def _check_iso_date(value: Any) -> Any:
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not ISO_DATE.match(value):
        raise PydanticCustomError('date_format', 'Data deve estar no formato YYYY-MM-DD')
    return value


UUIDStr = Annotated[str, AfterValidator(_check_uuid)]
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
IsoDate = Annotated[date, BeforeValidator(_check_iso_date)]
Observacao = Annotated[str, StringConstraints(max_length=500)]
Permissoes = Dict[str, Dict[str, StrictBool]]


class RequestSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore')

    def to_data(self) -> Dict[str, Any]:
        return self.model_dump()


class UpdateSchema(RequestSchema):
    """Partial update: every field optional, only sent keys are applied"""

    nullable_fields: ClassVar[frozenset] = frozenset()

    @field_validator('*')
    @classmethod
    def _reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name not in cls.nullable_fields:
            raise PydanticCustomError('null_not_allowed', 'Campo não pode ser nulo')
        return value

    def to_data(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)
