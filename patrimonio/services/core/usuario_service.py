"""
User Service

Administration of user accounts. Mutations are admin-only at the route level;
the default admin account is protected by AccountProtectionPolicy.
"""

from typing import Any, Dict, List
from patrimonio import db
from patrimonio.data.core.user_info.usuario import Usuario
from patrimonio.data.core.user_info.perfil import Perfil
from patrimonio.buisness.policies import AccountProtectionPolicy, UniquenessPolicy
from patrimonio.services.core.lookups import get_or_404, get_active_or_404, commit_or_rollback
from patrimonio.utils.logger import get_logger

logger = get_logger("patrimonio.services.usuarios")


class UsuarioService:
    """Service for user lookups and account administration"""

    @staticmethod
    def list_all() -> List[Usuario]:
        """All users (active and inactive), newest first"""
        return Usuario.query.order_by(Usuario.created_at.desc()).all()

    @staticmethod
    def get(usuario_id: str) -> Usuario:
        return get_or_404(Usuario, usuario_id, code='USER_NOT_FOUND', message='Usuário não encontrado')

    @staticmethod
    def email_taken(email: str) -> bool:
        return db.session.query(Usuario.id).filter(Usuario.email == email).first() is not None

    @staticmethod
    def _check_perfil(perfil_id: str) -> None:
        get_active_or_404(Perfil, perfil_id, code='PERFIL_NOT_FOUND', message='Perfil não encontrado')

    @staticmethod
    def create(data: Dict[str, Any]) -> Usuario:
        """
        Args:
            data: email, password, perfil_id and optional email_recuperacao

        Raises:
            UniquenessConflictError: USER_EXISTS
            EntityNotFoundError: PERFIL_NOT_FOUND
        """
        UniquenessPolicy.check_available(
            UsuarioService.email_taken(data['email']),
            code='USER_EXISTS',
            message='Usuário com este email já existe',
        )
        UsuarioService._check_perfil(data['perfil_id'])

        usuario = Usuario.create_from_dict(dict(data, temp_password=False, ativo=True))
        logger.info(f"Created usuario {usuario.id} ({usuario.email})")
        return usuario

    @staticmethod
    def update(usuario_id: str, updates: Dict[str, Any]) -> Usuario:
        """
        Raises:
            EntityNotFoundError: USER_NOT_FOUND / PERFIL_NOT_FOUND
            AccountProtectionError: CANNOT_UPDATE_ADMIN, or CANNOT_DELETE_ADMIN when deactivating the default admin
            UniquenessConflictError: EMAIL_IN_USE
        """
        usuario = UsuarioService.get(usuario_id)

        AccountProtectionPolicy.check_update(usuario.email, updates.get('email'))
        if updates.get('ativo') is False:
            AccountProtectionPolicy.check_delete(usuario.email)
        if UniquenessPolicy.is_changing(usuario.email, updates.get('email')):
            UniquenessPolicy.check_available(
                UsuarioService.email_taken(updates['email']),
                code='EMAIL_IN_USE',
                message='Email já está em uso',
            )
        if updates.get('perfil_id') is not None:
            UsuarioService._check_perfil(updates['perfil_id'])

        changed = usuario.apply_updates(updates, skip_fields=['senha_hash', 'temp_password'])
        commit_or_rollback()
        logger.info(f"Updated usuario {usuario.id}: {', '.join(changed) or 'no changes'}")
        return usuario

    @staticmethod
    def delete(usuario_id: str) -> None:
        """
        Raises:
            EntityNotFoundError: USER_NOT_FOUND
            AccountProtectionError: CANNOT_DELETE_ADMIN
        """
        usuario = UsuarioService.get(usuario_id)
        AccountProtectionPolicy.check_delete(usuario.email)

        usuario.ativo = False
        commit_or_rollback()
        logger.info(f"Soft-deleted usuario {usuario.id} ({usuario.email})")
