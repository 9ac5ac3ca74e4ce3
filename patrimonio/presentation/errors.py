"""
Error handlers

Translate domain errors, HTTP errors raised by Flask/Werkzeug, rate limit
rejections and storage integrity errors into the JSON error envelope.
"""

from flask import current_app, request
from flask_limiter.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException
from patrimonio import db
from patrimonio.buisness.errors import PatrimonioDomainError
from patrimonio.presentation.responses import send_error
from patrimonio.utils.logging_sanitizer import sanitize_exception_message
from patrimonio.utils.logger import get_logger

logger = get_logger("patrimonio.presentation.errors")

HTTP_ERROR_CODES = {
    400: 'BAD_REQUEST',
    401: 'UNAUTHORIZED',
    403: 'FORBIDDEN',
    404: 'NOT_FOUND',
    405: 'METHOD_NOT_ALLOWED',
    413: 'PAYLOAD_TOO_LARGE',
    415: 'UNSUPPORTED_MEDIA_TYPE',
}

HTTP_ERROR_MESSAGES = {
    404: 'Rota não encontrada',
    405: 'Método não permitido',
}


def classify_integrity_error(error):
    """
    Map a driver integrity error onto (status, code, message).

    Unique violations become 409 CONFLICT and foreign key violations 400
    FOREIGN_KEY_ERROR; anything else is treated as a conflict.
    """
    text = str(getattr(error, 'orig', error)).lower()
    if 'foreign key' in text:
        return 400, 'FOREIGN_KEY_ERROR', 'Registro referenciado não existe ou está em uso'
    if 'unique' in text or 'duplicate' in text:
        return 409, 'CONFLICT', 'Registro duplicado'
    return 409, 'CONFLICT', 'Violação de integridade dos dados'


def register_error_handlers(app):
    """Attach the JSON error handlers to the app"""

    @app.errorhandler(PatrimonioDomainError)
    def handle_domain_error(error):
        logger.warning(f"{request.method} {request.path} -> {error.status_code} {error.code}: {error.message}")
        return send_error(error.message, error.status_code, error.code, error.details)

    @app.errorhandler(RateLimitExceeded)
    def handle_rate_limit(error):
        logger.warning(f"Rate limit exceeded on {request.path} from {request.remote_addr}")
        return send_error('Muitas tentativas. Tente novamente mais tarde.', 429, 'RATE_LIMIT_EXCEEDED')

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(error):
        db.session.rollback()
        status_code, code, message = classify_integrity_error(error)
        logger.error(f"Integrity error on {request.method} {request.path}: {sanitize_exception_message(error)}")
        return send_error(message, status_code, code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        code = HTTP_ERROR_CODES.get(error.code, 'HTTP_ERROR')
        message = HTTP_ERROR_MESSAGES.get(error.code, error.description)
        logger.info(f"{request.method} {request.path} -> {error.code}")
        return send_error(message, error.code, code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        logger.exception(f"Unhandled error on {request.method} {request.path}")
        if current_app.config.get('APP_ENV') == 'development':
            message = sanitize_exception_message(error)
        else:
            message = 'Erro interno do servidor'
        return send_error(message, 500, 'INTERNAL_SERVER_ERROR')
