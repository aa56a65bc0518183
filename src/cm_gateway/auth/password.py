"""Password hashing using the ``bcrypt`` library directly.

Used at registration, login and by the password-reset flow, which stores the
new hash through the account repository.
"""

import bcrypt


def hash_password(plain: str) -> str:
    """Hash a plain-text password with a fresh salt. Returns a utf-8 hash string."""
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
