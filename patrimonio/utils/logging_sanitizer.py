"""
Logging Sanitizer Utility

Redacts passwords, tokens and other secrets from request payloads before they
reach the log handlers.
"""

from typing import Any, Dict, Mapping


# Field names (compared case-insensitively) whose values are never logged
SENSITIVE_FIELDS = {
    'password',
    'senha',
    'novasenha',
    'senhaatual',
    'senhatemporaria',
    'new_password',
    'current_password',
    'password_hash',
    'senha_hash',
    'secret',
    'token',
    'authorization',
    'access_token',
    'refresh_token',
    'api_key',
    'jwt_secret',
}

REDACTED = '[REDACTED]'


def is_sensitive(key: str) -> bool:
    return key.lower().replace('-', '_') in SENSITIVE_FIELDS


def sanitize_value(value: Any, redact_text: str = REDACTED) -> Any:
    """Recursively sanitize dicts and lists; scalars are returned untouched."""
    if isinstance(value, Mapping):
        return sanitize_dict(value, redact_text)
    if isinstance(value, (list, tuple)):
        return [sanitize_value(item, redact_text) for item in value]
    return value


def sanitize_dict(data: Mapping[str, Any], redact_text: str = REDACTED) -> Dict[str, Any]:
    """
    Sanitize a dictionary by replacing sensitive field values with redaction text.

    Args:
        data: Dictionary to sanitize
        redact_text: Text to use for redacted values (default: '[REDACTED]')

    Returns:
        Sanitized copy with sensitive values replaced

    Example:
        >>> sanitize_dict({'email': 'admin@email.com', 'password': 'admin123'})
        {'email': 'admin@email.com', 'password': '[REDACTED]'}
    """
    if not data:
        return dict(data) if data is not None else data

    sanitized = {}
    for key, value in data.items():
        if is_sensitive(str(key)):
            sanitized[key] = redact_text
        else:
            sanitized[key] = sanitize_value(value, redact_text)
    return sanitized


def sanitize_headers(headers: Mapping[str, str], redact_text: str = REDACTED) -> Dict[str, str]:
    """Sanitize request headers (``Authorization`` in particular) for safe logging."""
    return sanitize_dict(dict(headers), redact_text)


def sanitize_exception_message(exception: Exception) -> str:
    """
    Sanitize exception messages so they don't leak sensitive data.

    Args:
        exception: Exception to sanitize

    Returns:
        The message, or a placeholder when it mentions a sensitive field
    """
    message = str(exception)
    lowered = message.lower()
    if any(field in lowered for field in SENSITIVE_FIELDS):
        return f"{type(exception).__name__}: [Message contains sensitive data]"
    return message
