import secrets
import string

TEMP_PASSWORD_LENGTH = 6
TEMP_PASSWORD_ALPHABET = string.ascii_uppercase + string.digits


def generate_temp_password(length=TEMP_PASSWORD_LENGTH):
    """Random uppercase alphanumeric password handed out by password recovery."""
    return ''.join(secrets.choice(TEMP_PASSWORD_ALPHABET) for _ in range(length))
