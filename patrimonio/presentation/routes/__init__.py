"""
Routes package
One blueprint per resource, all under /api except the health probe
"""

from patrimonio.utils.logger import get_logger

logger = get_logger("patrimonio.routes")


def init_app(app):
    """Initialize all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")

    from . import bens, movimentacoes, usuarios, health
    from .reference import build_reference_blueprints

    app.register_blueprint(health.bp)
    app.register_blueprint(bens.bp, url_prefix='/api/bens')
    app.register_blueprint(movimentacoes.bp, url_prefix='/api/movimentacoes')
    app.register_blueprint(usuarios.bp, url_prefix='/api/users')

    for url_prefix, blueprint in build_reference_blueprints():
        app.register_blueprint(blueprint, url_prefix=url_prefix)

    logger.info("All route blueprints registered")
