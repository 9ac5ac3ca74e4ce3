"""
Role Access Policy

Admin gate evaluated against the user row re-read on every request, so a
role change or deactivation takes effect without waiting for token expiry.
"""

from typing import Optional
from patrimonio.buisness.errors import AuthorizationError, EntityNotFoundError

ADMIN_ROLE_NAME = 'ADMIN'


class RoleAccessPolicy:

    @classmethod
    def has_admin_role(cls, role_name: Optional[str]) -> bool:
        return role_name == ADMIN_ROLE_NAME

    @classmethod
    def check_admin(cls, user_found: bool, ativo: bool, role_name: Optional[str]) -> None:
        """
        Raises:
            EntityNotFoundError: USER_NOT_FOUND if the principal's row vanished
            AuthorizationError: USER_INACTIVE or FORBIDDEN
        """
        if not user_found:
            raise EntityNotFoundError('Usuário não encontrado', code='USER_NOT_FOUND')
        if not ativo:
            raise AuthorizationError('Usuário inativo', code='USER_INACTIVE')
        if not cls.has_admin_role(role_name):
            raise AuthorizationError(
                'Acesso negado. Apenas administradores podem realizar esta ação',
                code='FORBIDDEN',
            )
