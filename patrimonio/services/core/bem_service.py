"""
Asset Service

CRUD for bens. Every write re-checks that the referenced category and
location exist and are active.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy import func
from patrimonio import db
from patrimonio.data.core.asset_info.bem import Bem
from patrimonio.data.core.asset_info.categoria import Categoria
from patrimonio.data.core.localizacao import Localizacao
from patrimonio.data.core.movement_info.movimentacao import Movimentacao
from patrimonio.data.core.movement_info.tipo_movimentacao import TipoMovimentacao
from patrimonio.buisness.errors import EntityNotFoundError
from patrimonio.buisness.policies import LoanLifecyclePolicy, UniquenessPolicy
from patrimonio.services.core.lookups import get_or_404, get_active_or_404, commit_or_rollback
from patrimonio.utils.logger import get_logger

logger = get_logger("patrimonio.services.bens")


class BemService:
    """Service for asset lookups and writes"""

    @staticmethod
    def list_active() -> List[Bem]:
        """Active assets, newest first"""
        return Bem.query.filter_by(ativo=True).order_by(Bem.created_at.desc()).all()

    @staticmethod
    def get(bem_id: str) -> Bem:
        return get_or_404(Bem, bem_id, code='BEM_NOT_FOUND', message='Bem não encontrado')

    @staticmethod
    def get_by_tombo(tombo: str) -> Bem:
        """
        Raises:
            EntityNotFoundError: BEM_NOT_FOUND if no active asset carries this tag
        """
        bem = Bem.query.filter_by(tombo=tombo, ativo=True).first()
        if bem is None:
            raise EntityNotFoundError('Bem não encontrado', code='BEM_NOT_FOUND')
        return bem

    @staticmethod
    def tombo_taken(tombo: str) -> bool:
        # Tags stay reserved by soft-deleted assets too
        return db.session.query(Bem.id).filter(Bem.tombo == tombo).first() is not None

    @staticmethod
    def count_open_loans(bem_id: str) -> int:
        """Movements of this asset with no return date under a return-requiring type"""
        return db.session.query(func.count(Movimentacao.id)).join(
            TipoMovimentacao, Movimentacao.tipo_id == TipoMovimentacao.id
        ).filter(
            Movimentacao.bem_id == bem_id,
            Movimentacao.data_devolucao.is_(None),
            TipoMovimentacao.requer_devolucao.is_(True),
        ).scalar()

    @staticmethod
    def _check_references(categoria_id: Optional[str], localizacao_id: Optional[str]) -> None:
        if categoria_id is not None:
            get_active_or_404(Categoria, categoria_id, code='CATEGORIA_NOT_FOUND',
                              message='Categoria não encontrada')
        if localizacao_id is not None:
            get_active_or_404(Localizacao, localizacao_id, code='LOCALIZACAO_NOT_FOUND',
                              message='Localização não encontrada')

    @staticmethod
    def _check_can_deactivate(bem: Bem) -> None:
        open_loans = BemService.count_open_loans(bem.id)
        if open_loans:
            logger.warning(f"Refused to deactivate bem {bem.id}: {open_loans} open loan(s)")
        LoanLifecyclePolicy.check_can_delete_asset(open_loans)

    @staticmethod
    def create(data: Dict[str, Any]) -> Bem:
        """
        Raises:
            UniquenessConflictError: TOMBO_EXISTS
            EntityNotFoundError: CATEGORIA_NOT_FOUND / LOCALIZACAO_NOT_FOUND
        """
        UniquenessPolicy.check_available(
            BemService.tombo_taken(data['tombo']),
            code='TOMBO_EXISTS',
            message='Já existe um bem com este número de tombo',
        )
        BemService._check_references(data['categoria_id'], data['localizacao_id'])

        bem = Bem.create_from_dict(dict(data, ativo=True))
        logger.info(f"Created bem {bem.id} (tombo {bem.tombo})")
        return bem

    @staticmethod
    def update(bem_id: str, updates: Dict[str, Any]) -> Bem:
        """
        Raises:
            EntityNotFoundError: BEM_NOT_FOUND / CATEGORIA_NOT_FOUND / LOCALIZACAO_NOT_FOUND
            UniquenessConflictError: TOMBO_IN_USE
            LoanStateError: HAS_ACTIVE_LOANS when deactivating an asset on loan
        """
        bem = BemService.get(bem_id)

        if UniquenessPolicy.is_changing(bem.tombo, updates.get('tombo')):
            UniquenessPolicy.check_available(
                BemService.tombo_taken(updates['tombo']),
                code='TOMBO_IN_USE',
                message='Tombo já está em uso',
            )
        BemService._check_references(updates.get('categoria_id'), updates.get('localizacao_id'))
        if updates.get('ativo') is False:
            BemService._check_can_deactivate(bem)

        changed = bem.apply_updates(updates)
        commit_or_rollback()
        logger.info(f"Updated bem {bem.id}: {', '.join(changed) or 'no changes'}")
        return bem

    @staticmethod
    def delete(bem_id: str) -> None:
        """
        Soft-delete an asset.

        Raises:
            EntityNotFoundError: BEM_NOT_FOUND
            LoanStateError: HAS_ACTIVE_LOANS while the asset is on loan
        """
        bem = BemService.get(bem_id)
        BemService._check_can_deactivate(bem)

        bem.ativo = False
        commit_or_rollback()
        logger.info(f"Soft-deleted bem {bem.id} (tombo {bem.tombo})")
