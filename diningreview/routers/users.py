"""
User account endpoints.

  POST /users/signup        — create a reviewer profile
  GET  /users/{username}    — fetch a profile
  PUT  /users/{username}    — replace location + allergy flags
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from diningreview.dependencies import get_user_service
from diningreview.schemas.user import UserCreate, UserRead, UserUpdate
from diningreview.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/signup", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def signup(
    body: UserCreate,
    users: UserService = Depends(get_user_service),
) -> UserRead:
    """Create a user. 409 if the username is taken."""
    user = await users.create_user(**body.model_dump())
    return UserRead.model_validate(user)


@router.get("/{username}", response_model=UserRead)
async def get_user(
    username: str,
    users: UserService = Depends(get_user_service),
) -> UserRead:
    return UserRead.model_validate(await users.get_user(username))


@router.put("/{username}", response_model=UserRead)
async def update_user(
    username: str,
    body: UserUpdate,
    users: UserService = Depends(get_user_service),
) -> UserRead:
    """
    FULL REPLACE of the user's location and allergy flags.
    The username itself can never change.
    """
    user = await users.update_user(username, **body.model_dump())
    return UserRead.model_validate(user)
