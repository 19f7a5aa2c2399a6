# repositories/recipes.py
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

import models


class RecipeRepository:
    """Recipe catalogue plus the swipe events recorded against it."""

    def __init__(self, db: Session):
        self.db = db

    def get_all_recipes(self) -> List[models.Recipe]:
        return self.db.query(models.Recipe).order_by(models.Recipe.id).all()

    def get_recipe(self, recipe_id: int) -> Optional[models.Recipe]:
        return self.db.query(models.Recipe).filter(models.Recipe.id == recipe_id).first()

    def get_recipe_or_404(self, recipe_id: int) -> models.Recipe:
        db_recipe = self.get_recipe(recipe_id)
        if not db_recipe:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
        return db_recipe

    # --- Swipes ---

    def add_swipe(self, user_id: int, recipe_id: int, liked: bool) -> models.SwipeRecord:
        """Appends an event; swiping the same recipe again adds another row."""
        self.get_recipe_or_404(recipe_id)
        db_swipe = models.SwipeRecord(user_id=user_id, recipe_id=recipe_id, liked=liked)
        try:
            self.db.add(db_swipe)
            self.db.commit()
            self.db.refresh(db_swipe)
            return db_swipe
        except Exception:
            self.db.rollback()
            raise

    def get_today_swipe_count(self, user_id: int) -> int:
        # store-side clock on both sides; postgres sessions are pinned to UTC in database.py
        count = (
            self.db.query(func.count(models.SwipeRecord.id))
            .filter(
                models.SwipeRecord.user_id == user_id,
                func.date(models.SwipeRecord.swiped_at) == func.date(func.current_timestamp()),
            )
            .scalar()
        )
        return count or 0

    def get_liked_dishes(self, user_id: int) -> List[dict]:
        """Each liked recipe once, with the latest time it was liked."""
        liked_at = func.max(models.SwipeRecord.swiped_at).label("liked_at")
        rows = (
            self.db.query(
                models.Recipe.id.label("recipe_id"),
                models.Recipe.name,
                models.Recipe.details,
                models.Recipe.image_url,
                liked_at,
            )
            .join(models.SwipeRecord, models.SwipeRecord.recipe_id == models.Recipe.id)
            .filter(models.SwipeRecord.user_id == user_id, models.SwipeRecord.liked.is_(True))
            .group_by(models.Recipe.id, models.Recipe.name, models.Recipe.details, models.Recipe.image_url)
            .order_by(liked_at.desc(), models.Recipe.id.desc())
            .all()
        )
        return [dict(row._mapping) for row in rows]
