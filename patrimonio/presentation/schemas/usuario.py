from typing import Annotated, Optional
from pydantic import EmailStr, StrictBool, StringConstraints
from patrimonio.presentation.schemas.base import RequestSchema, UpdateSchema, UUIDStr


class UsuarioCreateSchema(RequestSchema):
    email: EmailStr
    password: Annotated[str, StringConstraints(min_length=6)]
    perfil_id: UUIDStr
    email_recuperacao: Optional[EmailStr] = None


class UsuarioUpdateSchema(UpdateSchema):
    nullable_fields = frozenset({'email_recuperacao'})

    email: Optional[EmailStr] = None
    perfil_id: Optional[UUIDStr] = None
    email_recuperacao: Optional[EmailStr] = None
    ativo: Optional[StrictBool] = None
