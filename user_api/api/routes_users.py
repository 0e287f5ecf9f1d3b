# File: user_api/api/routes_users.py

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status

from user_api.api.deps import get_current_user, get_lang, get_user_service
from user_api.schemas.user import (
    CurrentUser,
    LoginRequest,
    PaginatedUsers,
    TokenResponse,
    UserCreate,
    UserRead,
    UserUpdate,
)
from user_api.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new user",
)
def create_user(
    payload: UserCreate,
    service: UserService = Depends(get_user_service),
):
    return service.create(payload)


@router.post(
    "/login",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Login user",
)
def login(
    payload: LoginRequest,
    lang: Optional[str] = Depends(get_lang),
    service: UserService = Depends(get_user_service),
):
    return service.login(payload.email, payload.password, lang)


@router.get(
    "",
    response_model=PaginatedUsers,
    dependencies=[Depends(get_current_user)],
    summary="Get all users with pagination",
)
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    service: UserService = Depends(get_user_service),
):
    return service.find_all(page=page, limit=limit)


@router.get(
    "/{user_id}",
    response_model=UserRead,
    dependencies=[Depends(get_current_user)],
    summary="Get user by ID",
)
def get_user(
    user_id: int = Path(...),
    lang: Optional[str] = Depends(get_lang),
    service: UserService = Depends(get_user_service),
):
    return service.find_one(user_id, lang)


@router.put(
    "/{user_id}",
    response_model=UserRead,
    dependencies=[Depends(get_current_user)],
    summary="Update user",
)
def update_user(
    payload: UserUpdate,
    user_id: int = Path(...),
    lang: Optional[str] = Depends(get_lang),
    service: UserService = Depends(get_user_service),
):
    # TODO: restrict `role` changes to admins once the policy for self-promotion is decided
    return service.update(user_id, payload, lang)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    summary="Delete user (admin only)",
)
def delete_user(
    user_id: int = Path(...),
    lang: Optional[str] = Depends(get_lang),
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    service.delete(user_id, current_user, lang)
    return Response(status_code=status.HTTP_200_OK)
