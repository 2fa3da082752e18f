import secrets
import string
from typing import Optional

import bcrypt

from ..errors import BadRequestError
from ..settings.globals import SHARE_TOKEN_LENGTH

TOKEN_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def generate_token(length: int = SHARE_TOKEN_LENGTH) -> str:
    """Random link token drawn uniformly from [A-Za-z0-9].

    No lookup against existing tokens is done, 62^15 leaves collisions
    negligible.
    """
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


def hash_password(password: str) -> str:
    """Salted bcrypt hash of a viewer password."""
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_BYTES:
        raise BadRequestError(
            f"Password must not be longer than {BCRYPT_MAX_BYTES} bytes"
        )
    return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """Check a password against a stored hash using bcrypt's own compare."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed hash or over-long password
        return False
