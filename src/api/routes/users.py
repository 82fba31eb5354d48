"""
User endpoints
==============

POST  /api/v1/users          -- register (called by the auth provider)
GET   /api/v1/users/me       -- current user
PATCH /api/v1/profile        -- partial profile update
PATCH /api/v1/profile/theme  -- switch light / dark theme
POST  /api/v1/locations      -- save a favorite location
GET   /api/v1/locations      -- list own favorite locations
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from src.api.auth import get_current_user
from src.api.dependencies import get_user_service
from src.api.schemas import (
    ErrorResponse,
    FavoriteLocationCreateRequest,
    FavoriteLocationResponse,
    ProfileUpdateRequest,
    ThemeUpdateRequest,
    UserCreateRequest,
    UserResponse,
)
from src.domain.entities import User
from src.services.users import UserService

router = APIRouter(tags=["users"])


@router.post(
    "/users",
    status_code=201,
    response_model=UserResponse,
    summary="Register a user",
    responses={
        409: {"model": ErrorResponse, "description": "Username already taken"}
    },
)
async def register_user(
    body: UserCreateRequest,
    users: UserService = Depends(get_user_service),
):
    return await users.register(**body.model_dump())


@router.get("/users/me", response_model=UserResponse, summary="Current user")
async def get_me(user: User = Depends(get_current_user)):
    return user


@router.patch("/profile", response_model=UserResponse, summary="Update profile")
async def update_profile(
    body: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    return await users.update_profile(user.id, **body.model_dump(exclude_unset=True))


@router.patch("/profile/theme", response_model=UserResponse, summary="Update theme")
async def update_theme(
    body: ThemeUpdateRequest,
    user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    return await users.update_theme(user.id, body.theme)


@router.post(
    "/locations",
    status_code=201,
    response_model=FavoriteLocationResponse,
    summary="Save a favorite location",
)
async def add_location(
    body: FavoriteLocationCreateRequest,
    user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    return await users.add_favorite_location(user.id, **body.model_dump())


@router.get(
    "/locations",
    response_model=list[FavoriteLocationResponse],
    summary="List favorite locations",
)
async def list_locations(
    user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    return await users.list_favorite_locations(user.id)
