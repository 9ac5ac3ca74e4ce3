"""
Loan Lifecycle Policy

An asset is On-loan while one of its movements has no return date under a
movement type that requires return, and Available otherwise. The state is
derived from movement history; these rules receive the facts already read
from storage and raise when a transition is not allowed.
"""

from datetime import date
from typing import Optional
from patrimonio.buisness.errors import LoanStateError


class LoanLifecyclePolicy:
    """
    Rules for opening loans, registering returns and deleting loaned assets.
    """

    @classmethod
    def can_open_loan(cls, requer_devolucao: bool, open_loan_count: int) -> bool:
        if not requer_devolucao:
            return True
        return open_loan_count == 0

    @classmethod
    def check_can_open_loan(cls, requer_devolucao: bool, open_loan_count: int) -> None:
        """
        Check that a new movement may be created for the asset.

        The check applies to every movement of a return-requiring type, even one
        created with its return date already filled in.

        Raises:
            LoanStateError: ITEM_ALREADY_ON_LOAN if the asset already has an open loan
        """
        if not cls.can_open_loan(requer_devolucao, open_loan_count):
            raise LoanStateError(
                'Este item já está emprestado e ainda não foi devolvido',
                code='ITEM_ALREADY_ON_LOAN',
            )

    @classmethod
    def check_return_date(cls, data_emprestimo: date, data_devolucao: Optional[date]) -> None:
        """
        Raises:
            LoanStateError: INVALID_RETURN_DATE if the return precedes the loan
        """
        if data_devolucao is not None and data_devolucao < data_emprestimo:
            raise LoanStateError(
                'A data de devolução não pode ser anterior à data de empréstimo',
                code='INVALID_RETURN_DATE',
            )

    @classmethod
    def check_can_register_return(
        cls,
        data_emprestimo: date,
        current_data_devolucao: Optional[date],
        new_data_devolucao: date,
    ) -> None:
        """
        Check a return registration. A stored return date is never overwritten.

        Raises:
            LoanStateError: ALREADY_RETURNED or INVALID_RETURN_DATE
        """
        if current_data_devolucao is not None:
            raise LoanStateError('Este item já foi devolvido', code='ALREADY_RETURNED')
        cls.check_return_date(data_emprestimo, new_data_devolucao)

    @classmethod
    def check_can_delete_asset(cls, open_loan_count: int) -> None:
        """
        Raises:
            LoanStateError: HAS_ACTIVE_LOANS while the asset is on loan
        """
        if open_loan_count > 0:
            raise LoanStateError(
                'Não é possível excluir um bem com empréstimos ativos',
                code='HAS_ACTIVE_LOANS',
            )
