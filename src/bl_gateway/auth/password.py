"""Password hashing utilities using bcrypt.

Users store only ``passwordHash``; plain passwords never reach the store and
authentication compares through ``verify_password``.
"""

import bcrypt


def hash_password(plain: str) -> str:
    """Hash a plain-text password with a fresh bcrypt salt. Returns a utf-8 hash string."""
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plain-text password against a bcrypt hash; malformed hashes never match."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False
