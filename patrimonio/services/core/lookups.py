"""
Row lookup helpers shared by the services
"""

from patrimonio import db
from patrimonio.buisness.errors import EntityNotFoundError


def get_or_404(model, row_id, code='NOT_FOUND', message='Registro não encontrado'):
    """
    Fetch a row by primary key, active or not.

    Raises:
        EntityNotFoundError: If no row has this id
    """
    row = db.session.get(model, row_id) if row_id else None
    if row is None:
        raise EntityNotFoundError(message, code=code)
    return row


def get_active_or_404(model, row_id, code='NOT_FOUND', message='Registro não encontrado'):
    """
    Fetch a row that may be referenced by a write: it must exist and be active.

    Raises:
        EntityNotFoundError: If the row is missing or soft-deleted
    """
    row = db.session.get(model, row_id) if row_id else None
    if row is None or not row.ativo:
        raise EntityNotFoundError(message, code=code)
    return row


def commit_or_rollback():
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
