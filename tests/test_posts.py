# tests/test_posts.py

from unittest.mock import patch

from repositories.posts import PostRepository


async def test_end_to_end_post_like_delete(ac, auth):
    """register -> login -> post -> like -> delete"""
    headers = await auth(username="alice", email="a@x.com", password="pw1")

    files = {"image": ("pasta.jpg", b"\xff\xd8\xff\xe0pasta", "image/jpeg")}
    created = await ac.post("/posts", data={"caption": "Pasta"}, files=files, headers=headers)
    assert created.status_code == 201
    post = created.json()
    assert post["caption"] == "Pasta"
    assert post["image"].startswith("http://test/uploads/")

    feed = (await ac.get("/posts")).json()
    assert len(feed) == 1
    assert feed[0]["caption"] == "Pasta"
    assert feed[0]["likeCount"] == 0
    assert feed[0]["commentCount"] == 0
    assert feed[0]["username"] == "alice"

    liked = await ac.post("/like", json={"postId": post["id"]}, headers=headers)
    assert liked.status_code == 200
    assert (await ac.get("/posts")).json()[0]["likeCount"] == 1

    deleted = await ac.delete(f"/posts/{post['id']}", headers=headers)
    assert deleted.status_code == 200
    assert (await ac.get("/posts")).json() == []


async def test_create_post_requires_token(ac):
    files = {"image": ("pasta.jpg", b"data", "image/jpeg")}

    response = await ac.post("/posts", data={"caption": "Pasta"}, files=files)

    assert response.status_code == 401


async def test_create_post_missing_caption(ac, auth):
    headers = await auth()
    files = {"image": ("pasta.jpg", b"data", "image/jpeg")}

    response = await ac.post("/posts", data={"caption": "   "}, files=files, headers=headers)

    assert response.status_code == 400
    assert "error" in response.json()


async def test_create_post_missing_image(ac, auth):
    headers = await auth()

    response = await ac.post("/posts", data={"caption": "Pasta"}, headers=headers)

    assert response.status_code == 400


async def test_feed_is_newest_first(ac, auth, new_post):
    headers = await auth()
    first = await new_post(headers, caption="First")
    second = await new_post(headers, caption="Second")

    feed = (await ac.get("/posts")).json()

    assert [p["id"] for p in feed] == [second["id"], first["id"]]


async def test_my_posts_filters_to_caller(ac, auth, new_post):
    alice = await auth()
    bob = await auth(username="bob", email="b@x.com", password="pw2")
    await new_post(alice, caption="Alice's")
    await new_post(bob, caption="Bob's")

    response = await ac.get("/myPosts", headers=bob)

    assert response.status_code == 200
    assert [p["caption"] for p in response.json()] == ["Bob's"]


async def test_delete_post_as_non_owner_is_forbidden(ac, auth, new_post):
    alice = await auth()
    bob = await auth(username="bob", email="b@x.com", password="pw2")
    post = await new_post(alice)

    response = await ac.delete(f"/posts/{post['id']}", headers=bob)

    assert response.status_code == 403
    assert "message" in response.json()
    assert len((await ac.get("/posts")).json()) == 1


async def test_delete_missing_post(ac, auth):
    headers = await auth()

    response = await ac.delete("/posts/999", headers=headers)

    assert response.status_code == 404


async def test_delete_post_removes_likes_and_comments(ac, auth, new_post, db_session):
    import models

    alice = await auth()
    post = await new_post(alice)
    await ac.post("/like", json={"postId": post["id"]}, headers=alice)
    await ac.post("/comment", json={"postId": post["id"], "content": "mine"}, headers=alice)

    await ac.delete(f"/posts/{post['id']}", headers=alice)

    assert db_session.query(models.Like).count() == 0
    assert db_session.query(models.Comment).count() == 0
    assert (await ac.get(f"/comments/{post['id']}")).json() == []


async def test_delete_post_removes_image_file(ac, auth, new_post, uploaded_files):
    headers = await auth()
    post = await new_post(headers)
    name = post["image"].rsplit("/", 1)[1]
    assert name in uploaded_files()

    await ac.delete(f"/posts/{post['id']}", headers=headers)

    assert name not in uploaded_files()


async def test_rejected_delete_keeps_image_file(ac, auth, new_post, uploaded_files):
    alice = await auth()
    bob = await auth(username="bob", email="b@x.com", password="pw2")
    post = await new_post(alice)

    response = await ac.delete(f"/posts/{post['id']}", headers=bob)

    assert response.status_code == 403
    assert post["image"].rsplit("/", 1)[1] in uploaded_files()


async def test_failed_post_insert_leaves_no_file(ac_no_raise, auth, uploaded_files):
    headers = await auth()
    before = uploaded_files()
    files = {"image": ("pasta.jpg", b"\xff\xd8\xff\xe0pasta", "image/jpeg")}

    with patch.object(PostRepository, "create_post", side_effect=RuntimeError("db down")):
        response = await ac_no_raise.post("/posts", data={"caption": "Pasta"}, files=files, headers=headers)

    assert response.status_code == 500
    assert uploaded_files() == before
