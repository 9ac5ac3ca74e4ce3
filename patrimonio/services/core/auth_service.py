"""
Authentication Service

Login, password recovery and change, and the admin gate. Login failures are
indistinguishable to the caller: unknown email, inactive account and wrong
password all raise the same INVALID_CREDENTIALS error.
"""

from typing import Tuple
from flask import current_app
from patrimonio import db
from werkzeug.security import generate_password_hash, check_password_hash
from patrimonio.data.core.user_info.usuario import Usuario
from patrimonio.buisness.errors import AuthenticationError, EntityNotFoundError
from patrimonio.buisness.policies import AccountProtectionPolicy, RoleAccessPolicy
from patrimonio.buisness.auth.tokens import issue_token
from patrimonio.buisness.auth.passwords import generate_temp_password
from patrimonio.services.core.lookups import commit_or_rollback
from patrimonio.services.core.usuario_service import UsuarioService
from patrimonio.utils.logger import get_logger

logger = get_logger("patrimonio.services.auth")

_dummy_hash = None


def _equalize_timing(password: str) -> None:
    """Spend one hash check when there is no user, so timing does not reveal unknown emails."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = generate_password_hash('patrimonio-timing-placeholder')
    check_password_hash(_dummy_hash, password)


def _invalid_credentials() -> AuthenticationError:
    return AuthenticationError('Credenciais inválidas', code='INVALID_CREDENTIALS')


class AuthService:
    """Service for credentials and tokens"""

    @staticmethod
    def login(email: str, password: str) -> Tuple[str, Usuario]:
        """
        Returns:
            tuple: (token, usuario)

        Raises:
            AuthenticationError: INVALID_CREDENTIALS
        """
        usuario = Usuario.query.filter_by(email=email, ativo=True).first()
        if usuario is None:
            _equalize_timing(password)
            logger.warning(f"Failed login for {email}: unknown or inactive account")
            raise _invalid_credentials()

        if not usuario.check_password(password):
            logger.warning(f"Failed login for {email}: wrong password")
            raise _invalid_credentials()

        config = current_app.config
        token = issue_token(
            usuario.id,
            usuario.email,
            usuario.perfil_id,
            config['JWT_SECRET'],
            expires_hours=config['JWT_EXPIRES_HOURS'],
        )
        logger.info(f"User {usuario.email} logged in")
        return token, usuario

    @staticmethod
    def recover_password(email: str, email_recuperacao: str) -> str:
        """
        Issue a temporary password. The plaintext is returned once and only its
        hash is stored.

        Raises:
            EntityNotFoundError: USER_NOT_FOUND for unknown or inactive accounts
            AccountProtectionError: INVALID_RECOVERY_EMAIL
        """
        usuario = Usuario.query.filter_by(email=email, ativo=True).first()
        if usuario is None:
            logger.warning(f"Password recovery for unknown account {email}")
            raise EntityNotFoundError('Usuário não encontrado', code='USER_NOT_FOUND')

        if not AccountProtectionPolicy.recovery_email_matches(usuario.email_recuperacao, email_recuperacao):
            logger.warning(f"Password recovery for {email} with mismatched recovery email")
        AccountProtectionPolicy.check_recovery_email(usuario.email_recuperacao, email_recuperacao)

        temp_password = generate_temp_password()
        usuario.set_password(temp_password)
        usuario.temp_password = True
        commit_or_rollback()

        logger.info(f"Temporary password issued for {usuario.email}")
        return temp_password

    @staticmethod
    def change_password(usuario_id: str, nova_senha: str) -> None:
        """
        Raises:
            EntityNotFoundError: USER_NOT_FOUND
        """
        usuario = AuthService.current_user(usuario_id)
        usuario.set_password(nova_senha)
        usuario.temp_password = False
        commit_or_rollback()
        logger.info(f"Password changed for {usuario.email}")

    @staticmethod
    def current_user(usuario_id: str) -> Usuario:
        """
        Raises:
            EntityNotFoundError: USER_NOT_FOUND
        """
        return UsuarioService.get(usuario_id)

    @staticmethod
    def check_admin(usuario_id: str) -> Usuario:
        """
        Re-read the user and require the ADMIN role.

        Raises:
            EntityNotFoundError: USER_NOT_FOUND
            AuthorizationError: USER_INACTIVE / FORBIDDEN
        """
        usuario = db.session.get(Usuario, usuario_id)
        role_name = usuario.perfil.nome if usuario is not None and usuario.perfil else None
        RoleAccessPolicy.check_admin(
            usuario is not None,
            usuario.ativo if usuario is not None else False,
            role_name,
        )
        return usuario
