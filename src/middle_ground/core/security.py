"""Password hashing and bearer token helpers."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

import nacl.pwhash
from jose import JWTError, jwt
from nacl.exceptions import InvalidkeyError

from middle_ground.core.settings import settings


def hash_password(password: str) -> str:
    """Return an argon2id hash of ``password`` suitable for storage."""
    return nacl.pwhash.str(password.encode("utf-8")).decode("ascii")


def verify_password(password_hash: str, password: str) -> bool:
    """Check ``password`` against a hash produced by :func:`hash_password`."""
    try:
        return nacl.pwhash.verify(password_hash.encode("ascii"), password.encode("utf-8"))
    except InvalidkeyError:
        return False


def create_access_token(username: str, expires_minutes: int | None = None) -> str:
    """Issue a signed JWT whose subject is ``username``.

    Args:
        username: Authenticated principal placed in the ``sub`` claim.
        expires_minutes: Lifetime override; defaults to the configured value.

    Returns:
        Encoded JWT string.
    """
    minutes = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    expire = datetime.now(UTC) + timedelta(minutes=minutes)
    payload = {"sub": username, "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str | None:
    """Return the username carried by ``token``, or ``None`` if it is invalid."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        return None
    return subject
