"""Pydantic schemas for restaurant registration, search results and scores."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from diningreview.schemas.user import ZIPCODE_PATTERN


class RestaurantCreate(BaseModel):
    """Body for POST /restaurants."""

    name: str = Field(..., min_length=1, max_length=255)
    street: Optional[str] = Field(default=None, max_length=255)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=50)
    zipcode: str = Field(..., pattern=ZIPCODE_PATTERN)


class RestaurantRead(BaseModel):
    """A restaurant as returned by lookup and search (search keeps rank order)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipcode: str


class RestaurantScores(BaseModel):
    """Allergy scores aggregated from approved reviews. 0.0 means no approved reviews."""

    restaurant_id: int
    peanut: float = 0.0
    egg: float = 0.0
    dairy: float = 0.0
    overall: float = 0.0
