"""
Account Protection Policy

Guards the default administrator account and the password recovery handshake.
"""

from typing import Optional
from patrimonio.buisness.errors import AccountProtectionError

DEFAULT_ADMIN_EMAIL = 'admin@email.com'


class AccountProtectionPolicy:

    @classmethod
    def is_default_admin(cls, email: str) -> bool:
        return email == DEFAULT_ADMIN_EMAIL

    @classmethod
    def check_update(cls, current_email: str, new_email: Optional[str]) -> None:
        """
        The default admin keeps its email; every other field may change.

        Raises:
            AccountProtectionError: CANNOT_UPDATE_ADMIN
        """
        if cls.is_default_admin(current_email) and new_email is not None and new_email != current_email:
            raise AccountProtectionError(
                'Não é possível alterar o email do administrador padrão',
                code='CANNOT_UPDATE_ADMIN',
            )

    @classmethod
    def check_delete(cls, email: str) -> None:
        """
        Raises:
            AccountProtectionError: CANNOT_DELETE_ADMIN
        """
        if cls.is_default_admin(email):
            raise AccountProtectionError(
                'Não é possível excluir o administrador padrão',
                code='CANNOT_DELETE_ADMIN',
            )

    @classmethod
    def recovery_email_matches(cls, stored: Optional[str], provided: str) -> bool:
        if not stored:
            return False
        return stored.strip().lower() == provided.strip().lower()

    @classmethod
    def check_recovery_email(cls, stored: Optional[str], provided: str) -> None:
        """
        Raises:
            AccountProtectionError: INVALID_RECOVERY_EMAIL
        """
        if not cls.recovery_email_matches(stored, provided):
            raise AccountProtectionError(
                'Email de recuperação não confere',
                code='INVALID_RECOVERY_EMAIL',
            )
