# src/app/services/security.py
"""
Password hashing and bearer tokens.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

from src.app.domain.errors import InvalidTokenError

TOKEN_ALGORITHM = "HS256"
USER_ID_CLAIM = "userId"
DEFAULT_BCRYPT_ROUNDS = 12


def make_password_context(rounds: int = DEFAULT_BCRYPT_ROUNDS) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(context: CryptContext, password: str) -> str:
    return context.hash(password)


def verify_password(context: CryptContext, password: str, password_hash: str) -> bool:
    try:
        return context.verify(password, password_hash)
    except ValueError:
        # malformed or foreign hash
        return False


def create_access_token(
    user_id: str,
    secret: str,
    ttl_hours: int = 24,
    now: datetime | None = None,
) -> str:
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        USER_ID_CLAIM: user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=ttl_hours),
    }
    return jwt.encode(payload, secret, algorithm=TOKEN_ALGORITHM)


def decode_access_token(token: str, secret: str) -> str:
    """
    Validate a bearer token and return the user id it was issued for.

    Raises:
        InvalidTokenError: bad signature, expired, or no user id claim
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[TOKEN_ALGORITHM])
    except jwt.ExpiredSignatureError as exc:
        raise InvalidTokenError("Token expired") from exc
    except jwt.PyJWTError as exc:
        raise InvalidTokenError() from exc

    user_id = payload.get(USER_ID_CLAIM)
    if not user_id or not isinstance(user_id, str):
        raise InvalidTokenError("Token has no user id")
    return user_id
