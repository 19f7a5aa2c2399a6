# repositories/users.py
import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import models
from schemas.user import UserCreate
from utils.security import get_dummy_password_hash, get_password_hash, verify_password

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_user_by_email(self, email: str) -> models.User | None:
        return self.db.query(models.User).filter(models.User.email == email).first()

    def get_user_by_username(self, username: str) -> models.User | None:
        return self.db.query(models.User).filter(models.User.username == username).first()

    def get_user_by_id(self, user_id: int) -> models.User | None:
        return self.db.query(models.User).filter(models.User.id == user_id).first()

    def create_user(self, user: UserCreate) -> models.User:
        """Creates a user; 409 when the username or email is already taken."""
        if self.get_user_by_username(user.username):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists")
        if self.get_user_by_email(user.email):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

        db_user = models.User(
            username=user.username,
            email=user.email,
            hashed_password=get_password_hash(user.password),
        )
        try:
            self.db.add(db_user)
            self.db.commit()
        except IntegrityError:
            # lost a race against a concurrent registration
            self.db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists")
        self.db.refresh(db_user)
        logger.info("Registered user id=%s username=%s", db_user.id, db_user.username)
        return db_user

    def authenticate(self, email: str, password: str) -> models.User | None:
        db_user = self.get_user_by_email(email)
        if db_user is None:
            # same bcrypt cost whether or not the email is registered
            verify_password(password, get_dummy_password_hash())
            return None
        if not verify_password(password, db_user.hashed_password):
            return None
        return db_user

    def get_profile_counts(self, user_id: int) -> dict:
        """Post count plus likes and comments received across the user's posts."""
        post_count = self.db.scalar(
            select(func.count(models.Post.id)).where(models.Post.user_id == user_id)
        )
        total_likes = self.db.scalar(
            select(func.count(models.Like.id))
            .join(models.Post, models.Like.post_id == models.Post.id)
            .where(models.Post.user_id == user_id)
        )
        total_comments = self.db.scalar(
            select(func.count(models.Comment.id))
            .join(models.Post, models.Comment.post_id == models.Post.id)
            .where(models.Post.user_id == user_id)
        )
        return {
            "post_count": post_count or 0,
            "total_likes": total_likes or 0,
            "total_comments": total_comments or 0,
        }

    def update_password(self, db_user: models.User, old_password: str, new_password: str) -> None:
        if not verify_password(old_password, db_user.hashed_password):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Old password is incorrect")
        if not new_password.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="New password is required")
        try:
            db_user.hashed_password = get_password_hash(new_password)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Password changed for user id=%s", db_user.id)

    def update_profile_picture(self, db_user: models.User, image_path: str) -> models.User:
        try:
            db_user.profile_picture = image_path
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(db_user)
        return db_user

    def get_upload_paths(self, user_id: int) -> List[str]:
        """Profile picture and post images owned by the user."""
        paths = [
            row.image
            for row in self.db.query(models.Post.image).filter(models.Post.user_id == user_id).all()
        ]
        picture = self.db.query(models.User.profile_picture).filter(models.User.id == user_id).scalar()
        if picture:
            paths.append(picture)
        return paths

    def delete_user(self, user_id: int) -> bool:
        """Removes the account; posts, likes, comments, saves and swipes cascade in the store."""
        try:
            deleted = self.db.query(models.User).filter(models.User.id == user_id).delete(
                synchronize_session=False
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        if deleted:
            logger.info("Deleted account id=%s", user_id)
        return bool(deleted)
