# repositories/saved_recipes.py
import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

import models

logger = logging.getLogger(__name__)


class SavedRecipeRepository:
    def __init__(self, db: Session):
        self.db = db

    def save_recipe(self, user_id: int, title: str, content: str) -> models.SavedRecipe:
        if not title or not title.strip() or not content or not content.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing recipe title or content")

        db_recipe = models.SavedRecipe(user_id=user_id, title=title.strip(), content=content)
        try:
            self.db.add(db_recipe)
            self.db.commit()
            self.db.refresh(db_recipe)
            return db_recipe
        except Exception:
            self.db.rollback()
            raise

    def get_saved_recipes(self, user_id: int) -> List[models.SavedRecipe]:
        return (
            self.db.query(models.SavedRecipe)
            .filter(models.SavedRecipe.user_id == user_id)
            .order_by(models.SavedRecipe.saved_at.desc(), models.SavedRecipe.id.desc())
            .all()
        )

    def delete_saved_recipe(self, recipe_id: int, user_id: int) -> None:
        """Ownership is part of the delete itself: no row matching both ids means 404."""
        try:
            deleted = (
                self.db.query(models.SavedRecipe)
                .filter(models.SavedRecipe.id == recipe_id, models.SavedRecipe.user_id == user_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        if not deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Recipe not found or doesn't belong to user",
            )
        logger.info("User %s deleted saved recipe %s", user_id, recipe_id)
