# repositories/posts.py
import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

import models

logger = logging.getLogger(__name__)


class PostRepository:
    def __init__(self, db: Session):
        self.db = db

    def _feed_query(self):
        """Posts joined with owner info and correlated like/comment counts, newest first."""
        like_count = (
            select(func.count(models.Like.id))
            .where(models.Like.post_id == models.Post.id)
            .correlate(models.Post)
            .scalar_subquery()
        )
        comment_count = (
            select(func.count(models.Comment.id))
            .where(models.Comment.post_id == models.Post.id)
            .correlate(models.Post)
            .scalar_subquery()
        )
        return (
            self.db.query(
                models.Post.id,
                models.Post.user_id,
                models.Post.image,
                models.Post.caption,
                models.Post.created_at,
                models.User.username,
                models.User.profile_picture,
                like_count.label("like_count"),
                comment_count.label("comment_count"),
            )
            .join(models.User, models.Post.user_id == models.User.id)
            .order_by(models.Post.created_at.desc(), models.Post.id.desc())
        )

    def get_all_posts(self) -> List[dict]:
        return [dict(row._mapping) for row in self._feed_query().all()]

    def get_posts_by_user(self, user_id: int) -> List[dict]:
        rows = self._feed_query().filter(models.Post.user_id == user_id).all()
        return [dict(row._mapping) for row in rows]

    def get_post(self, post_id: int) -> Optional[models.Post]:
        return self.db.query(models.Post).filter(models.Post.id == post_id).first()

    def create_post(self, user_id: int, image_path: str, caption: str) -> models.Post:
        db_post = models.Post(user_id=user_id, image=image_path, caption=caption.strip())
        try:
            self.db.add(db_post)
            self.db.commit()
            self.db.refresh(db_post)
            return db_post
        except Exception:
            self.db.rollback()
            raise

    def delete_post(self, post_id: int, user_id: int) -> str:
        """
        Deletes in one statement scoped by owner. When nothing matched,
        tells apart someone else's post (403) from a missing one (404).
        Likes and comments cascade in the store.
        Returns the image path of the removed post.
        """
        image_path = (
            self.db.query(models.Post.image)
            .filter(models.Post.id == post_id, models.Post.user_id == user_id)
            .scalar()
        )
        try:
            deleted = (
                self.db.query(models.Post)
                .filter(models.Post.id == post_id, models.Post.user_id == user_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        if deleted:
            logger.info("User %s deleted post %s", user_id, post_id)
            return image_path
        if self.get_post(post_id) is not None:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only delete your own posts")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
