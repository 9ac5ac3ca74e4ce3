"""
Dependency Guard Policy

A row cannot be soft-deleted while live rows still point at it.
"""

from patrimonio.buisness.errors import DependencyError


class DependencyGuardPolicy:

    @classmethod
    def check(cls, entity_label: str, dependent_count: int, dependent_label: str) -> None:
        """
        Args:
            entity_label: Human name of the row being deleted ("categoria")
            dependent_count: Number of live referencing rows
            dependent_label: Human name of the referencing rows ("bens ativos")

        Raises:
            DependencyError: HAS_DEPENDENCIES
        """
        if dependent_count > 0:
            raise DependencyError(
                f'Não é possível excluir {entity_label}: existem {dependent_count} {dependent_label} vinculados',
                code='HAS_DEPENDENCIES',
            )
