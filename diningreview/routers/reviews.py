"""
Review endpoints.

  POST /reviews                                   — submit (starts PENDING)
  GET  /reviews/admin/pending                     — moderation queue
  POST /reviews/admin/moderate                    — approve / reject
  GET  /reviews/restaurants/{restaurant_id}/approved
  GET  /reviews/{review_id}

The admin endpoints are not access-controlled.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from diningreview.dependencies import get_lifecycle
from diningreview.schemas.review import ModerationRequest, ReviewCreate, ReviewRead
from diningreview.services.review_lifecycle import ReviewLifecycleManager, ReviewScores

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.post("", response_model=ReviewRead, status_code=status.HTTP_201_CREATED)
async def submit_review(
    body: ReviewCreate,
    lifecycle: ReviewLifecycleManager = Depends(get_lifecycle),
) -> ReviewRead:
    """Submit a review. 404 for an unknown user/restaurant, 409 if already reviewed."""
    review = await lifecycle.submit(
        username=body.username,
        restaurant_id=body.restaurant_id,
        scores=ReviewScores(
            peanut=body.peanut_score,
            egg=body.egg_score,
            dairy=body.dairy_score,
        ),
        comments=body.comments,
    )
    return ReviewRead.model_validate(review)


@router.get("/admin/pending", response_model=list[ReviewRead])
async def pending_reviews(
    lifecycle: ReviewLifecycleManager = Depends(get_lifecycle),
) -> list[ReviewRead]:
    """All PENDING reviews. An empty queue answers 404 NO_PENDING_REVIEWS."""
    return [ReviewRead.model_validate(r) for r in await lifecycle.list_pending()]


@router.post("/admin/moderate", response_model=ReviewRead)
async def moderate_review(
    body: ModerationRequest,
    lifecycle: ReviewLifecycleManager = Depends(get_lifecycle),
) -> ReviewRead:
    """Set a review to APPROVED or REJECTED. Re-moderating overwrites."""
    review = await lifecycle.moderate(body.review_id, body.action_status)
    return ReviewRead.model_validate(review)


@router.get("/restaurants/{restaurant_id}/approved", response_model=list[ReviewRead])
async def approved_reviews(
    restaurant_id: int,
    lifecycle: ReviewLifecycleManager = Depends(get_lifecycle),
) -> list[ReviewRead]:
    """Approved reviews of one restaurant — possibly an empty list."""
    return [
        ReviewRead.model_validate(r)
        for r in await lifecycle.list_approved(restaurant_id)
    ]


@router.get("/{review_id}", response_model=ReviewRead)
async def get_review(
    review_id: int,
    lifecycle: ReviewLifecycleManager = Depends(get_lifecycle),
) -> ReviewRead:
    return ReviewRead.model_validate(await lifecycle.get_review(review_id))
