from typing import Annotated
from pydantic import EmailStr, StringConstraints
from patrimonio.presentation.schemas.base import RequestSchema


class LoginSchema(RequestSchema):
    email: EmailStr
    password: Annotated[str, StringConstraints(min_length=1)]


class RecoverPasswordSchema(RequestSchema):
    email: EmailStr
    email_recuperacao: EmailStr


class ChangePasswordSchema(RequestSchema):
    nova_senha: Annotated[str, StringConstraints(min_length=6)]
