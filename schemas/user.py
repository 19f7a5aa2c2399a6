# schemas/user.py
from typing import Optional
from pydantic import EmailStr, Field

from schemas.base import CamelModel


class UserCreate(CamelModel):
    username: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=1)


class UserLogin(CamelModel):
    email: EmailStr
    password: str


# Public projection: never carries the password hash
class UserResponse(CamelModel):
    id: int
    username: str
    email: EmailStr
    profile_picture: Optional[str] = None


class LoginResponse(CamelModel):
    token: str
    user: UserResponse


class ProfileResponse(UserResponse):
    post_count: int = 0
    total_likes: int = 0
    total_comments: int = 0


class PasswordChange(CamelModel):
    old_password: str
    new_password: str = Field(min_length=1)


class ProfilePictureResponse(CamelModel):
    image: str
