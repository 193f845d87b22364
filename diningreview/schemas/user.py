"""Pydantic schemas for user account endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

ZIPCODE_PATTERN = r"^[0-9]{5}(?:-[0-9]{4})?$"


class UserUpdate(BaseModel):
    """
    Body for PUT /users/{username}.
    This is a FULL REPLACE of location and allergy flags — not a merge.
    """

    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=50)
    zipcode: Optional[str] = Field(default=None, pattern=ZIPCODE_PATTERN)
    has_peanut_allergies: bool = False
    has_egg_allergies: bool = False
    has_dairy_allergies: bool = False


class UserCreate(UserUpdate):
    """Body for POST /users/signup."""

    username: str = Field(
        ...,
        min_length=8,
        max_length=15,
        description="Username must be 8-15 characters long",
    )


class UserRead(BaseModel):
    """Public user profile returned by GET /users/{username}."""

    model_config = ConfigDict(from_attributes=True)

    username: str
    city: Optional[str]
    state: Optional[str]
    zipcode: Optional[str]
    has_peanut_allergies: bool
    has_egg_allergies: bool
    has_dairy_allergies: bool
