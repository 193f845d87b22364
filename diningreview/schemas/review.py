"""Pydantic schemas for review submission and moderation."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from diningreview.config import settings
from diningreview.models.review import ReviewStatus
from diningreview.utils.allergy_data import SCORE_MAX, SCORE_MIN


class ReviewCreate(BaseModel):
    """Body for POST /reviews."""

    username: str = Field(..., min_length=1)
    restaurant_id: int
    peanut_score: int = Field(..., ge=SCORE_MIN, le=SCORE_MAX)
    egg_score: int = Field(..., ge=SCORE_MIN, le=SCORE_MAX)
    dairy_score: int = Field(..., ge=SCORE_MIN, le=SCORE_MAX)
    comments: Optional[str] = Field(default=None, max_length=settings.comments_max_length)


class ReviewRead(BaseModel):
    """A review as seen by reviewers and moderators."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    restaurant_id: int
    peanut_score: int
    egg_score: int
    dairy_score: int
    comments: Optional[str] = None
    status: ReviewStatus


class ModerationRequest(BaseModel):
    """
    Body for POST /reviews/admin/moderate.
    action_status is checked by the lifecycle manager ("APPROVED" | "REJECTED")
    so an unknown action gets the same 400 as any other invalid argument.
    """

    review_id: int
    action_status: str
