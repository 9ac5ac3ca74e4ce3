#!/usr/bin/env python3
"""
Main build orchestrator
Creates the tables and inserts the critical data the API cannot run without
"""

from patrimonio import create_app, db
from pathlib import Path
from flask import current_app
import json
from patrimonio.utils.logger import get_logger

logger = get_logger("patrimonio.build")

CRITICAL_DATA_FILE = Path(__file__).parent / 'data' / 'core' / 'build_data_critical.json'


def load_critical_data(path=CRITICAL_DATA_FILE):
    """
    Load the seed document.

    Raises:
        FileNotFoundError: If critical data file not found
    """
    if not path.exists():
        error_msg = f"Critical data file not found: {path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def verify_critical_data():
    """
    Verify that critical data is present in the database

    Returns:
        bool: True if the ADMIN role, a loan movement type and the default admin exist
    """
    from patrimonio.data.core.user_info.perfil import Perfil
    from patrimonio.data.core.user_info.usuario import Usuario
    from patrimonio.buisness.policies.account_protection import DEFAULT_ADMIN_EMAIL
    from patrimonio.data.core.movement_info.tipo_movimentacao import TipoMovimentacao

    admin_perfil = Perfil.query.filter_by(nome='ADMIN').first()
    if not admin_perfil:
        logger.warning("ADMIN perfil not found")
        return False

    if not Usuario.query.filter_by(email=DEFAULT_ADMIN_EMAIL).first():
        logger.warning("Default admin user not found")
        return False

    if not TipoMovimentacao.query.filter_by(requer_devolucao=True).first():
        logger.warning("No movement type requiring return found")
        return False

    logger.info("Critical data verification passed")
    return True


def insert_critical_data(critical_data=None):
    """
    Insert critical data that must always be present

    Roles first, then movement types, then the default admin (which looks up
    its role by name).

    Raises:
        RuntimeError: If critical data insertion fails (stops application)
    """
    from patrimonio.data.core.build import insert_reference_rows, insert_essential_user
    from patrimonio.data.core.user_info.perfil import Perfil
    from patrimonio.data.core.movement_info.tipo_movimentacao import TipoMovimentacao

    if critical_data is None:
        critical_data = load_critical_data()

    if verify_critical_data():
        logger.info("Critical data already present, skipping insertion")
        return

    logger.warning("Critical data missing, attempting insertion...")
    essential = critical_data.get('Essential', {})

    try:
        insert_reference_rows(Perfil, essential.get('Perfis', {}))
        insert_reference_rows(TipoMovimentacao, essential.get('Tipos_Movimentacao', {}))

        admin_password = current_app.config['ADMIN_PASSWORD']
        for user_data in essential.get('Users', {}).values():
            insert_essential_user(user_data, admin_password)

        db.session.commit()
        logger.info("Successfully inserted critical data")
    except Exception as e:
        db.session.rollback()
        error_msg = f"Critical data insertion failed: {e}"
        logger.error(error_msg)
        raise RuntimeError(error_msg) from e

    if not verify_critical_data():
        error_msg = "Critical data insertion completed but verification failed"
        logger.error(error_msg)
        raise RuntimeError(error_msg)


def insert_reference_data(critical_data=None):
    """Insert the default categories and locations (skipped with --no-seed)."""
    from patrimonio.data.core.build import insert_reference_rows
    from patrimonio.data.core.asset_info.categoria import Categoria
    from patrimonio.data.core.localizacao import Localizacao

    if critical_data is None:
        critical_data = load_critical_data()

    reference = critical_data.get('Reference', {})
    try:
        created = insert_reference_rows(Categoria, reference.get('Categorias', {}))
        created += insert_reference_rows(Localizacao, reference.get('Localizacoes', {}))
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info(f"Reference data seeded ({created} new rows)")


def build_database(app=None, seed_reference=True):
    """
    Build tables and seed data.

    Args:
        app (Flask, optional): Application to build against; created when omitted
        seed_reference (bool): Whether to insert default categories and locations
            Note: Critical data is ALWAYS checked and inserted regardless of flags
    """
    if app is None:
        app = create_app()

    with app.app_context():
        logger.info(f"Starting database build (seed_reference={seed_reference})")

        db.create_all()
        logger.info("All database tables created")

        critical_data = load_critical_data()

        logger.info("Verifying and inserting critical data (always required)...")
        try:
            insert_critical_data(critical_data)
        except Exception as e:
            logger.error(f"Critical data insertion failed: {e}")
            logger.error("Application cannot continue without critical data. Stopping build.")
            raise

        if seed_reference:
            insert_reference_data(critical_data)

        logger.info("Database build completed successfully")


if __name__ == '__main__':
    build_database()
