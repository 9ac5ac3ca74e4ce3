"""
Uniqueness Policy

Read-then-write guard for single-column unique values (tombo, email, nome).
The unique constraints in the schema remain the backstop.
"""

from typing import Any
from patrimonio.buisness.errors import UniquenessConflictError


class UniquenessPolicy:

    @classmethod
    def is_changing(cls, current_value: Any, requested_value: Any) -> bool:
        """True when an update actually asks for a different value."""
        return requested_value is not None and requested_value != current_value

    @classmethod
    def check_available(cls, taken: bool, code: str, message: str) -> None:
        """
        Raises:
            UniquenessConflictError: If the value is already taken
        """
        if taken:
            raise UniquenessConflictError(message, code=code)
