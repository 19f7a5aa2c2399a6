# api/routes/recipes.py

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

import models
from schemas.base import Message
from schemas.recipe import LikedDish, Recipe, SavedRecipe, SavedRecipeCreate, SwipeCount, SwipeCreate
from repositories.recipes import RecipeRepository
from repositories.saved_recipes import SavedRecipeRepository
from services.photo_search import PhotoSearchClient, get_photo_search_client
from database import get_db
from auth.dependencies import get_current_user

router = APIRouter(tags=["Recipes"])


def get_saved_repo(db: Session = Depends(get_db)) -> SavedRecipeRepository:
    return SavedRecipeRepository(db=db)


def get_recipe_repo(db: Session = Depends(get_db)) -> RecipeRepository:
    return RecipeRepository(db=db)


# === Saved recipes (owner only) ===

@router.post("/saveRecipe", response_model=Message, status_code=status.HTTP_201_CREATED)
def save_recipe(
    recipe_create: SavedRecipeCreate,
    repo: SavedRecipeRepository = Depends(get_saved_repo),
    current_user: models.User = Depends(get_current_user)
):
    repo.save_recipe(user_id=current_user.id, title=recipe_create.title, content=recipe_create.content)
    return {"message": "Recipe saved successfully"}


@router.get("/savedRecipes", response_model=List[SavedRecipe])
def get_saved_recipes(
    repo: SavedRecipeRepository = Depends(get_saved_repo),
    current_user: models.User = Depends(get_current_user)
):
    return repo.get_saved_recipes(user_id=current_user.id)


@router.delete("/savedRecipes/{recipe_id}", response_model=Message)
def delete_saved_recipe(
    recipe_id: int,
    repo: SavedRecipeRepository = Depends(get_saved_repo),
    current_user: models.User = Depends(get_current_user)
):
    repo.delete_saved_recipe(recipe_id=recipe_id, user_id=current_user.id)
    return {"message": "Recipe deleted successfully"}


# === Catalogue ===

@router.get("/recipes", response_model=List[Recipe])
def get_all_recipes(repo: RecipeRepository = Depends(get_recipe_repo)):
    return repo.get_all_recipes()


@router.get("/recipes/{recipe_id}", response_model=Recipe)
async def get_recipe(
    recipe_id: int,
    repo: RecipeRepository = Depends(get_recipe_repo),
    photos: PhotoSearchClient = Depends(get_photo_search_client)
):
    """
    Catalogue recipe detail.
    - Recipes without a stored image get one from photo search (placeholder on any failure).
    """
    db_recipe = repo.get_recipe_or_404(recipe_id)
    recipe = Recipe.model_validate(db_recipe)
    if not recipe.image_url:
        recipe.image_url = await photos.find_image(recipe.name)
    return recipe


# === Swipes (caller taken from the token, never the body) ===

@router.post("/user/swipe", response_model=Message, status_code=status.HTTP_201_CREATED)
def record_swipe(
    swipe: SwipeCreate,
    repo: RecipeRepository = Depends(get_recipe_repo),
    current_user: models.User = Depends(get_current_user)
):
    repo.add_swipe(user_id=current_user.id, recipe_id=swipe.recipe_id, liked=swipe.liked)
    return {"message": "Swipe saved successfully!"}


@router.get("/user/liked-dishes", response_model=List[LikedDish])
def get_liked_dishes(
    repo: RecipeRepository = Depends(get_recipe_repo),
    current_user: models.User = Depends(get_current_user)
):
    return repo.get_liked_dishes(user_id=current_user.id)


@router.get("/user/swipe-count", response_model=SwipeCount)
def get_today_swipe_count(
    repo: RecipeRepository = Depends(get_recipe_repo),
    current_user: models.User = Depends(get_current_user)
):
    """Swipes recorded today. Informational; no limit is enforced on it."""
    return {"count": repo.get_today_swipe_count(user_id=current_user.id)}
