# api/routes/users.py

import logging
from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status

import models
from schemas.base import Message
from schemas.user import (
    LoginResponse, PasswordChange, ProfilePictureResponse, ProfileResponse, UserCreate, UserLogin,
    UserResponse,
)
from auth.dependencies import get_current_user, get_user_repo
from repositories.users import UserRepository
from utils.security import create_access_token
from utils.uploads import delete_upload, public_url, save_upload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


def _user_projection(request: Request, user: models.User) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        profile_picture=public_url(request, user.profile_picture),
    )


# --- Registration & login ---

@router.post("/register", response_model=Message, status_code=status.HTTP_201_CREATED)
def register(
    user_create: UserCreate,
    repo: UserRepository = Depends(get_user_repo)
):
    repo.create_user(user=user_create)
    return {"message": "User registered successfully"}


@router.post("/login", response_model=LoginResponse)
def login(
    request: Request,
    form_data: UserLogin,
    repo: UserRepository = Depends(get_user_repo)
):
    """
    **Login**
    - Verifies the password and returns a signed bearer token plus the public user projection.
    - Unknown email and wrong password answer identically.
    """
    db_user = repo.authenticate(email=form_data.email, password=form_data.password)
    if not db_user:
        logger.warning("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = create_access_token(subject=db_user.id)
    logger.info("User id=%s logged in", db_user.id)
    return {"token": token, "user": _user_projection(request, db_user)}


# --- Profile ---

@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    request: Request,
    current_user: models.User = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repo)
):
    counts = repo.get_profile_counts(user_id=current_user.id)
    return ProfileResponse(
        **_user_projection(request, current_user).model_dump(),
        **counts,
    )


@router.put("/changePassword", response_model=Message)
def change_password(
    password_change: PasswordChange,
    current_user: models.User = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repo)
):
    repo.update_password(
        db_user=current_user,
        old_password=password_change.old_password,
        new_password=password_change.new_password,
    )
    return {"message": "Password updated successfully"}


@router.post("/updateProfilePicture", response_model=ProfilePictureResponse)
def update_profile_picture(
    request: Request,
    image: UploadFile | None = File(None),
    current_user: models.User = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repo)
):
    if image is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Image is required")
    previous = current_user.profile_picture
    image_path = save_upload(image)
    try:
        user = repo.update_profile_picture(db_user=current_user, image_path=image_path)
    except Exception:
        delete_upload(image_path)
        raise
    if previous != image_path:
        delete_upload(previous)
    return {"image": public_url(request, user.profile_picture)}


@router.delete("/deleteAccount", response_model=Message)
def delete_account(
    current_user: models.User = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repo)
):
    paths = repo.get_upload_paths(user_id=current_user.id)
    repo.delete_user(user_id=current_user.id)
    for path in paths:
        delete_upload(path)
    return {"message": "Account deleted successfully"}
