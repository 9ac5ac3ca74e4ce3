from flask import Flask, request
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from sqlalchemy import event
import os
from pathlib import Path
from patrimonio.utils.logger import get_logger

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
limiter = Limiter(key_func=get_remote_address)


def _env_flag(name, default='False'):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


def _database_uri(instance_dir):
    """
    Prefer an explicit DATABASE_URL; otherwise keep a SQLite file inside the
    project's instance/ directory.
    """
    db_env = os.environ.get('DATABASE_URL')
    if db_env:
        # Hosted Postgres providers still hand out the legacy scheme
        if db_env.startswith('postgres://'):
            db_env = db_env.replace('postgres://', 'postgresql://', 1)
        return db_env
    instance_dir.mkdir(parents=True, exist_ok=True)
    default_db_path = instance_dir / 'patrimonio.db'
    return f"sqlite:///{str(default_db_path.resolve())}"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_app(config=None):
    """
    Application factory.

    Args:
        config (dict, optional): Overrides applied after the environment has
            been read and before the extensions are bound (used by tests).
    """
    base_dir = Path(__file__).parent.parent
    instance_dir = base_dir / 'instance'

    app = Flask(__name__, instance_path=str(instance_dir))

    logger = get_logger("patrimonio")
    logger.info("Initializing Flask application")

    # Configuration
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY')
    app.config['APP_ENV'] = os.environ.get('APP_ENV', 'development')

    app.config['JWT_SECRET'] = os.environ.get('JWT_SECRET')
    app.config['JWT_EXPIRES_HOURS'] = int(os.environ.get('JWT_EXPIRES_HOURS', '24'))
    app.config['JWT_LEEWAY'] = int(os.environ.get('JWT_LEEWAY', '60'))

    app.config['FRONTEND_URL'] = os.environ.get('FRONTEND_URL', 'http://localhost:5173')
    app.config['ADMIN_PASSWORD'] = os.environ.get('ADMIN_PASSWORD', 'admin123')

    app.config['RATELIMIT_ENABLED'] = _env_flag('RATELIMIT_ENABLED', 'True')
    app.config['RATELIMIT_STORAGE_URI'] = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    app.config['AUTH_RATE_LIMIT'] = os.environ.get('AUTH_RATE_LIMIT', '10 per minute')

    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    # Keep the envelope keys in insertion order
    app.json.sort_keys = False

    if config:
        app.config.update(config)

    # SECURITY: Require SECRET_KEY - no fallback
    if not app.config['SECRET_KEY']:
        logger.critical("SECRET_KEY not set in environment! Application cannot start.")
        raise RuntimeError("SECRET_KEY environment variable is required")

    if not app.config['JWT_SECRET']:
        app.config['JWT_SECRET'] = app.config['SECRET_KEY']

    if not app.config.get('SQLALCHEMY_DATABASE_URI'):
        app.config['SQLALCHEMY_DATABASE_URI'] = _database_uri(instance_dir)

    if not app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite'):
        app.config.setdefault('SQLALCHEMY_ENGINE_OPTIONS', {'pool_pre_ping': True})

    if app.config['APP_ENV'] == 'development':
        logger.warning("APP_ENV=development: internal error messages are returned to clients")

    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    limiter.init_app(app)

    with app.app_context():
        if db.engine.dialect.name == 'sqlite':
            event.listen(db.engine, 'connect', _enable_sqlite_foreign_keys)
        logger.debug(f"Database configured: {db.engine.dialect.name}")

    logger.debug("Extensions initialized")

    # Import models to ensure they're registered with SQLAlchemy
    from patrimonio.data.core.build import build_models
    build_models()

    # Register blueprints
    from patrimonio.auth import auth
    from patrimonio.presentation.routes import init_app as init_routes
    from patrimonio.presentation.errors import register_error_handlers

    app.register_blueprint(auth, url_prefix='/api/auth')
    init_routes(app)
    register_error_handlers(app)

    @app.before_request
    def log_request():
        logger.debug(f"{request.method} {request.path}")

    # CORS and security headers on every response
    @app.after_request
    def set_response_headers(response):
        response.headers['Access-Control-Allow-Origin'] = app.config['FRONTEND_URL']
        response.headers['Access-Control-Allow-Credentials'] = 'true'
        response.headers['Access-Control-Allow-Headers'] = 'Authorization, Content-Type'
        response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, PATCH, DELETE, OPTIONS'
        response.headers['Vary'] = 'Origin'

        # Prevent MIME-sniffing
        response.headers['X-Content-Type-Options'] = 'nosniff'
        # The API is never framed
        response.headers['X-Frame-Options'] = 'DENY'
        return response

    logger.info("Flask application initialization complete")

    return app
