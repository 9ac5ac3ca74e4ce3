"""
Movement Service

Creates loans and other movements and registers returns. The loan/return
rules live in LoanLifecyclePolicy; this service gathers the facts (open loan
count, stored dates) and persists the outcome.

Opening a loan locks the asset row before the open loans are counted, so
concurrent requests for the same asset serialize on databases with row
locks (PostgreSQL). SQLite ignores FOR UPDATE.
"""

from datetime import date
from typing import Any, Dict, List, Optional
from sqlalchemy import select
from patrimonio import db
from patrimonio.data.core.asset_info.bem import Bem
from patrimonio.data.core.movement_info.movimentacao import Movimentacao
from patrimonio.data.core.movement_info.tipo_movimentacao import TipoMovimentacao
from patrimonio.buisness.policies import LoanLifecyclePolicy
from patrimonio.services.core.bem_service import BemService
from patrimonio.services.core.lookups import get_or_404, get_active_or_404, commit_or_rollback
from patrimonio.utils.logger import get_logger

logger = get_logger("patrimonio.services.movimentacoes")


class MovimentacaoService:
    """Service for movement history, loans and returns"""

    @staticmethod
    def list_all() -> List[Movimentacao]:
        """All movements, newest first"""
        return Movimentacao.query.order_by(Movimentacao.created_at.desc()).all()

    @staticmethod
    def list_open_loans() -> List[Movimentacao]:
        """Open loans, most recent loan date first"""
        return Movimentacao.query.join(
            TipoMovimentacao, Movimentacao.tipo_id == TipoMovimentacao.id
        ).filter(
            Movimentacao.data_devolucao.is_(None),
            TipoMovimentacao.requer_devolucao.is_(True),
        ).order_by(Movimentacao.data_emprestimo.desc()).all()

    @staticmethod
    def get(movimentacao_id: str) -> Movimentacao:
        return get_or_404(Movimentacao, movimentacao_id, code='MOVIMENTACAO_NOT_FOUND',
                          message='Movimentação não encontrada')

    @staticmethod
    def _lock_asset(bem_id: str) -> None:
        db.session.execute(select(Bem.id).where(Bem.id == bem_id).with_for_update())

    @staticmethod
    def create(data: Dict[str, Any], usuario_id: Optional[str]) -> Movimentacao:
        """
        Create a movement. A movement of a return-requiring type opens a loan.

        Args:
            data: Validated fields (snake_case)
            usuario_id: Id of the registering user

        Raises:
            EntityNotFoundError: BEM_NOT_FOUND / TIPO_NOT_FOUND
            LoanStateError: ITEM_ALREADY_ON_LOAN / INVALID_RETURN_DATE
        """
        tipo = get_active_or_404(TipoMovimentacao, data['tipo_id'], code='TIPO_NOT_FOUND',
                                 message='Tipo de movimentação não encontrado')

        try:
            MovimentacaoService._lock_asset(data['bem_id'])
            bem = get_active_or_404(Bem, data['bem_id'], code='BEM_NOT_FOUND', message='Bem não encontrado')

            open_loans = BemService.count_open_loans(bem.id) if tipo.requer_devolucao else 0
            if open_loans:
                logger.warning(f"Rejected loan for bem {bem.id}: already on loan")
            LoanLifecyclePolicy.check_can_open_loan(tipo.requer_devolucao, open_loans)
            LoanLifecyclePolicy.check_return_date(data['data_emprestimo'], data.get('data_devolucao'))

            record = dict(data)
            record['tombo'] = data.get('tombo') or bem.tombo
            record['nome_item'] = data.get('nome_item') or bem.nome
            record['usuario_id'] = usuario_id

            movimentacao = Movimentacao.create_from_dict(record, commit=False)
            db.session.commit()
        except Exception:
            # Release the row lock
            db.session.rollback()
            raise

        logger.info(
            f"Created movimentacao {movimentacao.id} for bem {bem.id} "
            f"(tipo {tipo.nome}, usuario {usuario_id})"
        )
        return movimentacao

    @staticmethod
    def _register_return(movimentacao: Movimentacao, data_devolucao: date) -> None:
        if movimentacao.is_returned:
            logger.warning(f"Rejected return for movimentacao {movimentacao.id}: already returned")
        LoanLifecyclePolicy.check_can_register_return(
            movimentacao.data_emprestimo,
            movimentacao.data_devolucao,
            data_devolucao,
        )
        movimentacao.data_devolucao = data_devolucao

    @staticmethod
    def update(movimentacao_id: str, updates: Dict[str, Any]) -> Movimentacao:
        """
        Set the return date and/or the note. A stored return date is never overwritten.

        Raises:
            EntityNotFoundError: MOVIMENTACAO_NOT_FOUND
            LoanStateError: ALREADY_RETURNED / INVALID_RETURN_DATE
        """
        movimentacao = MovimentacaoService.get(movimentacao_id)

        if updates.get('data_devolucao') is not None:
            MovimentacaoService._register_return(movimentacao, updates['data_devolucao'])
        if 'observacao' in updates:
            movimentacao.observacao = updates['observacao']

        commit_or_rollback()
        logger.info(f"Updated movimentacao {movimentacao.id}: {', '.join(sorted(updates))}")
        return movimentacao

    @staticmethod
    def register_return(movimentacao_id: str) -> Movimentacao:
        """
        Close a loan with today's date.

        Raises:
            EntityNotFoundError: MOVIMENTACAO_NOT_FOUND
            LoanStateError: ALREADY_RETURNED
        """
        movimentacao = MovimentacaoService.get(movimentacao_id)
        MovimentacaoService._register_return(movimentacao, date.today())

        commit_or_rollback()
        logger.info(f"Registered return for movimentacao {movimentacao.id} on {movimentacao.data_devolucao}")
        return movimentacao
