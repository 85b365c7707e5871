"""Password hashing built on bcrypt."""

from __future__ import annotations

import bcrypt

# bcrypt only considers the first 72 bytes of a password; longer ones are
# refused rather than truncated.
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: int = 12) -> str:
    """Return a salted bcrypt hash of ``password``.

    Args:
        password: Plaintext password. Never stored or logged.
        rounds: Log2 cost factor, fixed by server configuration.

    Returns:
        The modular-crypt encoded hash (``$2b$...``).

    Raises:
        ValueError: the password is longer than ``MAX_PASSWORD_BYTES``.
    """
    if password_too_long(password):
        raise ValueError(f"password exceeds {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """Return True if ``password`` matches ``password_hash``; False otherwise."""
    if password_too_long(password):
        # No stored hash can have been made from it.
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii"))
    except ValueError:
        # Corrupt or non-bcrypt hash in storage.
        return False
