"""
Route guards

Each route declares an ordered chain of steps, e.g.
``@chain(authenticate, require_admin, validate_body(BemCreateSchema))``.
A step short-circuits the request by raising a domain error; the error
handlers turn it into the JSON envelope.
"""

from functools import wraps
from flask import g, request
from flask_login import current_user
from pydantic import ValidationError
from patrimonio.buisness.errors import AuthenticationError, RequestValidationError
from patrimonio.services.core.auth_service import AuthService
from patrimonio.utils.logging_sanitizer import sanitize_dict
from patrimonio.utils.logger import get_logger

logger = get_logger("patrimonio.presentation.middleware")


def chain(*steps):
    """Run ``steps`` in order before the view"""
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            for step in steps:
                step()
            return view(*args, **kwargs)
        return wrapper
    return decorator


def authenticate():
    """
    Require a valid bearer token. The token itself is decoded by the
    Flask-Login request loader; a failure it recorded is re-raised here.
    """
    if current_user.is_authenticated:
        return
    failure = g.get('auth_failure')
    if failure is not None:
        raise failure
    raise AuthenticationError('Token não fornecido', code='MISSING_TOKEN')


def require_admin():
    """Must follow ``authenticate``. The role is read from the database, not the token."""
    g.usuario = AuthService.check_admin(current_user.id)


def format_validation_errors(error):
    return [
        {'field': '.'.join(str(part) for part in err['loc']), 'message': err['msg']}
        for err in error.errors()
    ]


def validate_body(schema):
    """Parse the JSON body with ``schema`` and store the result in ``g.body``"""
    def step():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise RequestValidationError(
                'Corpo da requisição deve ser um objeto JSON',
                details=[{'field': '', 'message': 'Objeto JSON esperado'}],
            )

        logger.debug(f"{request.method} {request.path} body: {sanitize_dict(payload)}")
        try:
            g.body = schema.model_validate(payload)
        except ValidationError as e:
            raise RequestValidationError(details=format_validation_errors(e))
    return step
