# tests/test_recipes.py

from unittest.mock import patch, AsyncMock

import pytest

import models
from services.photo_search import PhotoSearchClient


# --- Saved recipes ---

async def test_save_list_delete_recipe(ac, auth):
    headers = await auth()

    saved = await ac.post("/saveRecipe", json={"title": "Soup", "content": "Boil water"}, headers=headers)
    assert saved.status_code == 201

    recipes = (await ac.get("/savedRecipes", headers=headers)).json()
    assert len(recipes) == 1
    assert recipes[0]["title"] == "Soup"
    assert recipes[0]["content"] == "Boil water"
    assert "savedAt" in recipes[0]

    deleted = await ac.delete(f"/savedRecipes/{recipes[0]['id']}", headers=headers)
    assert deleted.status_code == 200
    assert (await ac.get("/savedRecipes", headers=headers)).json() == []


async def test_delete_other_users_recipe_is_not_found(ac, auth):
    alice = await auth()
    bob = await auth(username="bob", email="b@x.com", password="pw2")
    await ac.post("/saveRecipe", json={"title": "Soup", "content": "Boil water"}, headers=alice)
    recipe_id = (await ac.get("/savedRecipes", headers=alice)).json()[0]["id"]

    response = await ac.delete(f"/savedRecipes/{recipe_id}", headers=bob)

    assert response.status_code == 404
    assert "message" in response.json()
    assert len((await ac.get("/savedRecipes", headers=alice)).json()) == 1


async def test_saved_recipes_are_private(ac, auth):
    alice = await auth()
    bob = await auth(username="bob", email="b@x.com", password="pw2")
    await ac.post("/saveRecipe", json={"title": "Soup", "content": "Boil water"}, headers=alice)

    assert (await ac.get("/savedRecipes", headers=bob)).json() == []


@pytest.mark.parametrize("body", [{"title": "Soup"}, {"title": "", "content": "x"}, {"title": "Soup", "content": " "}])
async def test_save_recipe_missing_fields(ac, auth, body):
    headers = await auth()

    response = await ac.post("/saveRecipe", json=body, headers=headers)

    assert response.status_code == 400
    assert "error" in response.json()


async def test_saved_recipes_require_token(ac):
    assert (await ac.get("/savedRecipes")).status_code == 401


# --- Catalogue & swipes ---

@pytest.fixture
def catalogue(db_session):
    recipes = [
        models.Recipe(name="Ramen", details="Noodles in broth", image_url="https://img.example/ramen.jpg"),
        models.Recipe(name="Tacos", details="Corn tortillas"),
    ]
    db_session.add_all(recipes)
    db_session.commit()
    return [r.id for r in recipes]


async def test_list_recipes(ac, catalogue):
    response = await ac.get("/recipes")

    assert response.status_code == 200
    assert [r["name"] for r in response.json()] == ["Ramen", "Tacos"]


async def test_recipe_with_stored_image_skips_photo_search(ac, catalogue):
    with patch.object(PhotoSearchClient, "find_image", new_callable=AsyncMock) as mock_find:
        response = await ac.get(f"/recipes/{catalogue[0]}")

    assert response.status_code == 200
    assert response.json()["imageUrl"] == "https://img.example/ramen.jpg"
    mock_find.assert_not_called()


async def test_recipe_without_image_uses_photo_search(ac, catalogue):
    with patch.object(PhotoSearchClient, "find_image", new_callable=AsyncMock) as mock_find:
        mock_find.return_value = "https://images.example/tacos.jpg"
        response = await ac.get(f"/recipes/{catalogue[1]}")

    assert response.status_code == 200
    assert response.json()["imageUrl"] == "https://images.example/tacos.jpg"
    mock_find.assert_awaited_once_with("Tacos")


async def test_missing_recipe(ac):
    response = await ac.get("/recipes/123")

    assert response.status_code == 404


async def test_swipes_accumulate_and_liked_dishes(ac, auth, catalogue, db_session):
    headers = await auth()
    ramen, tacos = catalogue

    for recipe_id, liked in [(ramen, True), (ramen, True), (tacos, False)]:
        response = await ac.post("/user/swipe", json={"recipeId": recipe_id, "liked": liked}, headers=headers)
        assert response.status_code == 201

    assert db_session.query(models.SwipeRecord).count() == 3

    liked = (await ac.get("/user/liked-dishes", headers=headers)).json()
    assert [d["recipeId"] for d in liked] == [ramen]
    assert liked[0]["name"] == "Ramen"
    assert "likedAt" in liked[0]

    count = (await ac.get("/user/swipe-count", headers=headers)).json()
    assert count == {"count": 3}


async def test_swipe_count_is_per_user(ac, auth, catalogue):
    alice = await auth()
    bob = await auth(username="bob", email="b@x.com", password="pw2")
    await ac.post("/user/swipe", json={"recipeId": catalogue[0], "liked": True}, headers=alice)

    assert (await ac.get("/user/swipe-count", headers=bob)).json() == {"count": 0}
    assert (await ac.get("/user/liked-dishes", headers=bob)).json() == []


async def test_swipe_unknown_recipe(ac, auth):
    headers = await auth()

    response = await ac.post("/user/swipe", json={"recipeId": 99, "liked": True}, headers=headers)

    assert response.status_code == 404


# --- Photo search fallback ---

async def test_photo_search_without_key_returns_placeholder():
    client = PhotoSearchClient(access_key="", placeholder_url="https://placeholder/img")

    assert await client.find_image("Tacos") == "https://placeholder/img"

