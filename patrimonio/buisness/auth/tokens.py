"""
Signed bearer tokens (HS256) carrying the principal {id, email, perfilId}
"""

from datetime import datetime, timedelta, timezone
import jwt
from jwt import ExpiredSignatureError, ImmatureSignatureError, InvalidTokenError
from patrimonio.buisness.errors import AuthenticationError
from patrimonio.utils.logger import get_logger

logger = get_logger("patrimonio.buisness.auth.tokens")

ALGORITHM = "HS256"


def issue_token(user_id, email, perfil_id, secret, expires_hours=24):
    """
    Create a token for a user.

    Args:
        user_id (str): Usuario.id, stored as ``sub``
        email (str): Usuario.email
        perfil_id (str): Usuario.perfil_id
        secret (str): Signing key
        expires_hours (int): Lifetime in hours

    Returns:
        str: Encoded JWT
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "email": email,
        "perfilId": perfil_id,
        "iat": now,
        "exp": now + timedelta(hours=expires_hours),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_token(token, secret, leeway=60):
    """
    Verify signature and expiry and return the principal claims.

    Returns:
        dict: {'id', 'email', 'perfilId'}

    Raises:
        AuthenticationError: INVALID_TOKEN for any bad, expired or incomplete token
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            options={"require": ["exp", "iat", "sub"]},
            leeway=leeway,
        )
    except ExpiredSignatureError:
        logger.info("Rejected expired token")
        raise AuthenticationError('Token expirado', code='INVALID_TOKEN')
    except ImmatureSignatureError:
        logger.warning("Rejected token issued in the future; check the system clock")
        raise AuthenticationError('Token inválido', code='INVALID_TOKEN')
    except InvalidTokenError as e:
        logger.info(f"Rejected invalid token: {e}")
        raise AuthenticationError('Token inválido', code='INVALID_TOKEN')

    return {
        "id": payload["sub"],
        "email": payload.get("email"),
        "perfilId": payload.get("perfilId"),
    }


def extract_bearer_token(authorization_header):
    """
    Split an ``Authorization`` header value.

    Raises:
        AuthenticationError: MISSING_TOKEN or INVALID_TOKEN_FORMAT
    """
    if not authorization_header:
        raise AuthenticationError('Token não fornecido', code='MISSING_TOKEN')

    parts = authorization_header.split()
    if len(parts) != 2 or parts[0] != 'Bearer':
        raise AuthenticationError(
            'Formato de token inválido. Use: Bearer <token>',
            code='INVALID_TOKEN_FORMAT',
        )
    return parts[1]
