"""Password hashing with bcrypt."""
from typing import Optional

import bcrypt

_ENCODING = "utf-8"


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of the password as text."""
    return bcrypt.hashpw(password.encode(_ENCODING), bcrypt.gensalt()).decode(_ENCODING)


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """
    Check a password against a stored hash.

    Accounts created without a password (null hash) and values that are not
    bcrypt hashes never verify.
    """
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode(_ENCODING), password_hash.encode(_ENCODING))
    except ValueError:
        return False
