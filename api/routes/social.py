# api/routes/social.py

from typing import List
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

import models
from schemas.base import Message
from schemas.post import Comment, CommentCreate, LikeRequest
from repositories.likes import LikeRepository
from repositories.comments import CommentRepository
from database import get_db
from auth.dependencies import get_current_user
from utils.uploads import public_url

router = APIRouter(tags=["Likes & Comments"])


def get_like_repo(db: Session = Depends(get_db)) -> LikeRepository:
    return LikeRepository(db=db)


def get_comment_repo(db: Session = Depends(get_db)) -> CommentRepository:
    return CommentRepository(db=db)


# --- Likes ---

@router.post("/like", response_model=Message)
def like_post(
    like_request: LikeRequest,
    repo: LikeRepository = Depends(get_like_repo),
    current_user: models.User = Depends(get_current_user)
):
    created = repo.like(post_id=like_request.post_id, user_id=current_user.id)
    return {"message": "Post liked" if created else "Post already liked"}


@router.delete("/unlike", response_model=Message)
def unlike_post(
    like_request: LikeRequest,
    repo: LikeRepository = Depends(get_like_repo),
    current_user: models.User = Depends(get_current_user)
):
    removed = repo.unlike(post_id=like_request.post_id, user_id=current_user.id)
    return {"message": "Post unliked" if removed else "Post was not liked"}


@router.get("/myLikes", response_model=List[int])
def get_my_likes(
    repo: LikeRepository = Depends(get_like_repo),
    current_user: models.User = Depends(get_current_user)
):
    """Ids of every post the caller likes, so the feed can render liked state in one call."""
    return repo.get_liked_post_ids(user_id=current_user.id)


# --- Comments ---

@router.post("/comment", response_model=Message, status_code=status.HTTP_201_CREATED)
def add_comment(
    comment_create: CommentCreate,
    repo: CommentRepository = Depends(get_comment_repo),
    current_user: models.User = Depends(get_current_user)
):
    repo.add_comment(post_id=comment_create.post_id, user_id=current_user.id, content=comment_create.content)
    return {"message": "Comment added"}


@router.get("/comments/{post_id}", response_model=List[Comment])
def get_comments(
    post_id: int,
    request: Request,
    repo: CommentRepository = Depends(get_comment_repo)
):
    return [
        {**row, "profile_picture": public_url(request, row["profile_picture"])}
        for row in repo.get_comments(post_id=post_id)
    ]
