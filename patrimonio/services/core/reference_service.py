"""
Reference Data Service

Shared CRUD contract of the lookup tables: roles, categories, locations and
movement types. Each table gets a subclass naming its model and how to count
the live rows that still reference one of its entries.
"""

from typing import Any, Dict, List
from sqlalchemy import func
from patrimonio import db
from patrimonio.data.core.user_info.perfil import Perfil
from patrimonio.data.core.user_info.usuario import Usuario
from patrimonio.data.core.asset_info.categoria import Categoria
from patrimonio.data.core.asset_info.bem import Bem
from patrimonio.data.core.localizacao import Localizacao
from patrimonio.data.core.movement_info.tipo_movimentacao import TipoMovimentacao
from patrimonio.data.core.movement_info.movimentacao import Movimentacao
from patrimonio.buisness.policies import UniquenessPolicy, DependencyGuardPolicy
from patrimonio.services.core.lookups import get_or_404, commit_or_rollback
from patrimonio.utils.logger import get_logger

logger = get_logger("patrimonio.services.reference")


class ReferenceService:
    """Base service; subclasses set ``model``, ``label`` and ``dependent_label``"""

    model = None
    label = 'registro'
    dependent_label = 'registros'

    @classmethod
    def list_active(cls) -> List[Any]:
        return cls.model.query.filter_by(ativo=True).order_by(cls.model.nome.asc()).all()

    @classmethod
    def get(cls, row_id: str):
        return get_or_404(cls.model, row_id, message=f'{cls.label.capitalize()} não encontrado(a)')

    @classmethod
    def _nome_taken(cls, nome: str) -> bool:
        return db.session.query(cls.model.id).filter(cls.model.nome == nome).first() is not None

    @classmethod
    def create(cls, data: Dict[str, Any]):
        """
        Raises:
            UniquenessConflictError: ALREADY_EXISTS if the name is taken (active or not)
        """
        UniquenessPolicy.check_available(
            cls._nome_taken(data['nome']),
            code='ALREADY_EXISTS',
            message=f'{cls.label.capitalize()} com este nome já existe',
        )
        row = cls.model.create_from_dict(data)
        logger.info(f"Created {cls.model.__name__} {row.id} ({row.nome})")
        return row

    @classmethod
    def update(cls, row_id: str, updates: Dict[str, Any]):
        """
        Raises:
            EntityNotFoundError: NOT_FOUND
            UniquenessConflictError: NAME_IN_USE when renaming onto an existing name
            DependencyError: HAS_DEPENDENCIES when deactivating a row still in use
        """
        row = cls.get(row_id)

        if UniquenessPolicy.is_changing(row.nome, updates.get('nome')):
            UniquenessPolicy.check_available(
                cls._nome_taken(updates['nome']),
                code='NAME_IN_USE',
                message='Nome já está em uso',
            )

        if updates.get('ativo') is False:
            cls._check_can_deactivate(row)

        changed = row.apply_updates(updates)
        commit_or_rollback()
        logger.info(f"Updated {cls.model.__name__} {row.id}: {', '.join(changed) or 'no changes'}")
        return row

    @classmethod
    def count_dependents(cls, row) -> int:
        raise NotImplementedError

    @classmethod
    def _check_can_deactivate(cls, row) -> None:
        dependent_count = cls.count_dependents(row)
        if dependent_count:
            logger.warning(f"Refused to deactivate {cls.model.__name__} {row.id}: {dependent_count} dependents")
        DependencyGuardPolicy.check(f'este(a) {cls.label}', dependent_count, cls.dependent_label)

    @classmethod
    def delete(cls, row_id: str) -> None:
        """
        Soft-delete a row.

        Raises:
            EntityNotFoundError: NOT_FOUND
            DependencyError: HAS_DEPENDENCIES while live rows reference it
        """
        row = cls.get(row_id)
        cls._check_can_deactivate(row)

        row.ativo = False
        commit_or_rollback()
        logger.info(f"Soft-deleted {cls.model.__name__} {row.id} ({row.nome})")


class PerfilService(ReferenceService):
    model = Perfil
    label = 'perfil'
    dependent_label = 'usuários ativos'

    @classmethod
    def count_dependents(cls, row) -> int:
        return Usuario.query.filter_by(perfil_id=row.id, ativo=True).count()


class CategoriaService(ReferenceService):
    model = Categoria
    label = 'categoria'
    dependent_label = 'bens ativos'

    @classmethod
    def count_dependents(cls, row) -> int:
        return Bem.query.filter_by(categoria_id=row.id, ativo=True).count()


class LocalizacaoService(ReferenceService):
    model = Localizacao
    label = 'localização'
    dependent_label = 'bens ativos'

    @classmethod
    def count_dependents(cls, row) -> int:
        return Bem.query.filter_by(localizacao_id=row.id, ativo=True).count()


class TipoMovimentacaoService(ReferenceService):
    model = TipoMovimentacao
    label = 'tipo de movimentação'
    dependent_label = 'empréstimos em aberto'

    @classmethod
    def count_dependents(cls, row) -> int:
        # Only loan types can have open movements
        if not row.requer_devolucao:
            return 0
        return db.session.query(func.count(Movimentacao.id)).filter(
            Movimentacao.tipo_id == row.id,
            Movimentacao.data_devolucao.is_(None),
        ).scalar()
