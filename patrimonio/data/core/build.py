"""
Core models build module
Registers the core models with SQLAlchemy and provides the seed helpers used by
patrimonio.build
"""

from patrimonio import db
from patrimonio.utils.logger import get_logger

logger = get_logger("patrimonio.models.core")


def build_models():
    """
    Import every core model so its table is registered on db.metadata.
    Called from create_app(); db.create_all() is left to the build script.
    """
    import patrimonio.data.core.user_info.perfil
    import patrimonio.data.core.user_info.usuario
    import patrimonio.data.core.asset_info.categoria
    import patrimonio.data.core.localizacao
    import patrimonio.data.core.asset_info.bem
    import patrimonio.data.core.movement_info.tipo_movimentacao
    import patrimonio.data.core.movement_info.movimentacao

    logger.debug("Core models registered")


def insert_reference_rows(model, rows):
    """
    Idempotently insert lookup rows keyed by ``nome``.

    Args:
        model: A ReferenceBase subclass
        rows (dict): Mapping of seed key -> row data

    Returns:
        int: Number of rows created
    """
    created_count = 0
    for row_data in rows.values():
        _, created = model.find_or_create_from_dict(row_data, lookup_fields=['nome'], commit=False)
        if created:
            created_count += 1
            logger.info(f"Inserted {model.__name__}: {row_data.get('nome')}")
    return created_count


def insert_essential_user(user_data, password):
    """
    Create a seed user, resolving its role by name.

    Raises:
        LookupError: If the named role has not been seeded
    """
    from patrimonio.data.core.user_info.perfil import Perfil
    from patrimonio.data.core.user_info.usuario import Usuario

    existing = Usuario.query.filter_by(email=user_data['email']).first()
    if existing:
        return existing, False

    perfil = Perfil.query.filter_by(nome=user_data['perfil']).first()
    if perfil is None:
        raise LookupError(f"{user_data['perfil']} perfil not found. Seed perfis first.")

    data = {key: value for key, value in user_data.items() if key != 'perfil'}
    data.update(perfil_id=perfil.id, password=password, temp_password=False, ativo=True)
    user = Usuario.create_from_dict(data, commit=False)
    logger.info(f"Inserted essential user: {user.email}")
    return user, True
