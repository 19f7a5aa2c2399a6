# utils/security.py
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

import config

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class InvalidTokenError(Exception):
    """Token is malformed, tampered with, or expired."""


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


@lru_cache(maxsize=1)
def get_dummy_password_hash() -> str:
    """Hash checked against when no account matches, so lookups cost the same."""
    return pwd_context.hash("not-a-real-password")


def create_access_token(subject: int, expires_delta: Optional[timedelta] = None) -> str:
    """
    Signed bearer token for a user id.
    - sub: internal user id (string, as JWT requires)
    - exp: short-lived and non-refreshable; a new login issues a new token
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(seconds=config.ACCESS_TOKEN_EXPIRE_SECONDS)
    payload: Dict[str, Any] = {
        "sub": str(subject),
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> int:
    """Returns the user id carried by a valid token."""
    try:
        payload = jwt.decode(
            token,
            config.JWT_SECRET_KEY,
            algorithms=[config.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError("Invalid token") from e

    try:
        return int(payload["sub"])
    except (TypeError, ValueError) as e:
        raise InvalidTokenError("Invalid token subject") from e
