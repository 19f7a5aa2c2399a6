# schemas/post.py
from datetime import datetime
from typing import Optional

from schemas.base import CamelModel


class PostCreated(CamelModel):
    id: int
    image: str
    caption: str


class Post(CamelModel):
    id: int
    user_id: int
    image: str
    caption: str
    created_at: datetime
    username: str
    profile_picture: Optional[str] = None
    like_count: int = 0
    comment_count: int = 0


class LikeRequest(CamelModel):
    post_id: int


class CommentCreate(CamelModel):
    post_id: int
    content: str


class Comment(CamelModel):
    id: int
    post_id: int
    user_id: int
    content: str
    created_at: datetime
    username: str
    profile_picture: Optional[str] = None
