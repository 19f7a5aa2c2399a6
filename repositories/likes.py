# repositories/likes.py
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import models


class LikeRepository:
    def __init__(self, db: Session):
        self.db = db

    def _ensure_post(self, post_id: int) -> None:
        exists = self.db.query(models.Post.id).filter(models.Post.id == post_id).first()
        if not exists:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")

    def like(self, post_id: int, user_id: int) -> bool:
        """Insert-if-absent. Returns False when the like already existed."""
        self._ensure_post(post_id)
        existing = (
            self.db.query(models.Like.id)
            .filter(models.Like.post_id == post_id, models.Like.user_id == user_id)
            .first()
        )
        if existing:
            return False
        try:
            self.db.add(models.Like(post_id=post_id, user_id=user_id))
            self.db.commit()
        except IntegrityError:
            # a concurrent request inserted the same pair first
            self.db.rollback()
            return False
        return True

    def unlike(self, post_id: int, user_id: int) -> bool:
        """Delete-if-present. Returns False when there was nothing to remove."""
        try:
            deleted = (
                self.db.query(models.Like)
                .filter(models.Like.post_id == post_id, models.Like.user_id == user_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return bool(deleted)

    def get_liked_post_ids(self, user_id: int) -> List[int]:
        rows = (
            self.db.query(models.Like.post_id)
            .filter(models.Like.user_id == user_id)
            .order_by(models.Like.post_id)
            .all()
        )
        return [row.post_id for row in rows]
