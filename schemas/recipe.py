# schemas/recipe.py
from datetime import datetime
from typing import Optional

from schemas.base import CamelModel


# --- Saved recipes (free-form, often AI generated on the client) ---
class SavedRecipeCreate(CamelModel):
    title: str
    content: str


class SavedRecipe(CamelModel):
    id: int
    title: str
    content: str
    saved_at: datetime


# --- Catalogue & swipes ---
class Recipe(CamelModel):
    id: int
    name: str
    details: Optional[str] = None
    image_url: Optional[str] = None


class SwipeCreate(CamelModel):
    recipe_id: int
    liked: bool


class LikedDish(CamelModel):
    recipe_id: int
    name: str
    details: Optional[str] = None
    image_url: Optional[str] = None
    liked_at: datetime


class SwipeCount(CamelModel):
    count: int
