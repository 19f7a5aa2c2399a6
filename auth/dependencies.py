# auth/dependencies.py

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

import models
from database import get_db
from repositories.users import UserRepository
from utils.security import InvalidTokenError, decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_user_repo(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> int:
    """Authorization: Bearer <token> -> user id. Pure check against the signing key."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("No token provided")
    try:
        return decode_access_token(credentials.credentials)
    except InvalidTokenError as e:
        raise _unauthorized(str(e)) from e


def get_current_user(
    user_id: int = Depends(get_current_user_id),
    repo: UserRepository = Depends(get_user_repo),
) -> models.User:
    user = repo.get_user_by_id(user_id=user_id)
    if not user:
        # token outlived the account
        raise _unauthorized("User not found")
    return user
