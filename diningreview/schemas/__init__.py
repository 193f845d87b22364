"""Pydantic schemas package."""

from diningreview.schemas.user import UserCreate, UserRead, UserUpdate
from diningreview.schemas.restaurant import (
    RestaurantCreate,
    RestaurantRead,
    RestaurantScores,
)
from diningreview.schemas.review import ModerationRequest, ReviewCreate, ReviewRead

__all__ = [
    "UserCreate", "UserRead", "UserUpdate",
    "RestaurantCreate", "RestaurantRead", "RestaurantScores",
    "ReviewCreate", "ReviewRead", "ModerationRequest",
]
