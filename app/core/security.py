"""Password hashing and the access/refresh JWT pair handed out at login."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import bcrypt
from jose import JWTError, jwt

from app.config import settings


ALGORITHM = "HS256"
ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"
BCRYPT_ROUNDS = 10


class InvalidTokenError(Exception):
    """Raised when a JWT is malformed, expired, or of the wrong kind."""


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def get_password_hash(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _lifetime(token_type: str) -> timedelta:
    if token_type == REFRESH_TOKEN:
        return timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    return timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)


def encode_token(subject: Any, token_type: str, lifetime: timedelta | None = None) -> str:
    """Sign a token of ``token_type`` for ``subject`` (a user id)."""

    issued_at = datetime.now(timezone.utc)
    claims: Dict[str, Any] = {
        "sub": str(subject),
        "type": token_type,
        "iat": issued_at,
        "exp": issued_at + (lifetime or _lifetime(token_type)),
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=ALGORITHM)


def create_access_token(subject: Any) -> str:
    return encode_token(subject, ACCESS_TOKEN)


def create_refresh_token(subject: Any) -> str:
    return encode_token(subject, REFRESH_TOKEN)


def decode_token(token: str, expected_type: str) -> Dict[str, Any]:
    """Verify signature, expiry and kind of ``token`` and return its claims.

    A refresh token is never accepted where an access token is expected, and
    vice versa.
    """

    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise InvalidTokenError(str(exc)) from exc
    if claims.get("type") != expected_type:
        raise InvalidTokenError(f"Expected a {expected_type} token")
    return claims
