# api/routes/posts.py

from typing import List
from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from sqlalchemy.orm import Session

import models
from schemas.base import Message
from schemas.post import Post, PostCreated
from repositories.posts import PostRepository
from database import get_db
from auth.dependencies import get_current_user
from utils.uploads import delete_upload, public_url, save_upload

router = APIRouter(tags=["Posts"])


def get_repo(db: Session = Depends(get_db)) -> PostRepository:
    return PostRepository(db=db)


def _with_urls(request: Request, rows: List[dict]) -> List[dict]:
    return [
        {
            **row,
            "image": public_url(request, row["image"]),
            "profile_picture": public_url(request, row["profile_picture"]),
        }
        for row in rows
    ]


@router.get("/posts", response_model=List[Post])
def get_all_posts(request: Request, repo: PostRepository = Depends(get_repo)):
    """Public feed, newest first."""
    return _with_urls(request, repo.get_all_posts())


@router.post("/posts", response_model=PostCreated, status_code=status.HTTP_201_CREATED)
def create_post(
    request: Request,
    image: UploadFile | None = File(None),
    caption: str | None = Form(None),
    repo: PostRepository = Depends(get_repo),
    current_user: models.User = Depends(get_current_user)
):
    if image is None or not caption or not caption.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Image and caption are required")

    image_path = save_upload(image)
    try:
        db_post = repo.create_post(user_id=current_user.id, image_path=image_path, caption=caption)
    except Exception:
        delete_upload(image_path)
        raise
    return {"id": db_post.id, "image": public_url(request, db_post.image), "caption": db_post.caption}


@router.get("/myPosts", response_model=List[Post])
def get_my_posts(
    request: Request,
    repo: PostRepository = Depends(get_repo),
    current_user: models.User = Depends(get_current_user)
):
    return _with_urls(request, repo.get_posts_by_user(user_id=current_user.id))


@router.delete("/posts/{post_id}", response_model=Message)
def delete_post(
    post_id: int,
    repo: PostRepository = Depends(get_repo),
    current_user: models.User = Depends(get_current_user)
):
    delete_upload(repo.delete_post(post_id=post_id, user_id=current_user.id))
    return {"message": "Post deleted successfully"}
