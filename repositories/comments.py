# repositories/comments.py
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

import models


class CommentRepository:
    def __init__(self, db: Session):
        self.db = db

    def add_comment(self, post_id: int, user_id: int, content: str) -> models.Comment:
        if not content or not content.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Comment content is required")
        if not self.db.query(models.Post.id).filter(models.Post.id == post_id).first():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")

        db_comment = models.Comment(post_id=post_id, user_id=user_id, content=content.strip())
        try:
            self.db.add(db_comment)
            self.db.commit()
            self.db.refresh(db_comment)
            return db_comment
        except Exception:
            self.db.rollback()
            raise

    def get_comments(self, post_id: int) -> List[dict]:
        """Oldest first, with the commenter's username and picture."""
        rows = (
            self.db.query(
                models.Comment.id,
                models.Comment.post_id,
                models.Comment.user_id,
                models.Comment.content,
                models.Comment.created_at,
                models.User.username,
                models.User.profile_picture,
            )
            .join(models.User, models.Comment.user_id == models.User.id)
            .filter(models.Comment.post_id == post_id)
            .order_by(models.Comment.created_at.asc(), models.Comment.id.asc())
            .all()
        )
        return [dict(row._mapping) for row in rows]
