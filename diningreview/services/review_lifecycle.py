"""
ReviewLifecycleManager — owns the review state machine.

  submit ──► PENDING ──moderate(APPROVED)──► APPROVED
                    └──moderate(REJECTED)──► REJECTED

A moderation action on an already-moderated review simply overwrites its
status (the later call wins); there is no guard on terminal states.
Moderation is not access-controlled.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from diningreview.exceptions import (
    DuplicateReviewError,
    InvalidModerationDecisionError,
    NoPendingReviewsError,
    RestaurantNotFoundError,
    ReviewNotFoundError,
    ScoreOutOfRangeError,
    UserNotFoundError,
)
from diningreview.models import Restaurant, Review, ReviewStatus
from diningreview.store import EntityStore
from diningreview.utils.allergy_data import SCORE_MAX, SCORE_MIN

logger = logging.getLogger(__name__)


class ModerationDecision(str, enum.Enum):
    """The two outcomes a moderator can pick for a review."""

    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @classmethod
    def parse(cls, raw: str | ModerationDecision) -> ModerationDecision:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(raw)
        except ValueError:
            raise InvalidModerationDecisionError(raw) from None

    @property
    def status(self) -> ReviewStatus:
        return ReviewStatus(self.value)


@dataclass(frozen=True)
class ReviewScores:
    """The three per-allergy scores of one review, each within 1–5."""

    peanut: int
    egg: int
    dairy: int

    def __post_init__(self):
        for field_name in ("peanut", "egg", "dairy"):
            value = getattr(self, field_name)
            # bool is an int subclass, never a score
            is_int = isinstance(value, int) and not isinstance(value, bool)
            if not is_int or not (SCORE_MIN <= value <= SCORE_MAX):
                raise ScoreOutOfRangeError(
                    f"{field_name}_score", value, SCORE_MIN, SCORE_MAX
                )


class ReviewLifecycleManager:
    """Creates reviews, moves them through moderation, and lists them by status."""

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    async def submit(
        self,
        username: str,
        restaurant_id: int,
        scores: ReviewScores,
        comments: Optional[str] = None,
    ) -> Review:
        """
        Create a PENDING review of restaurant_id by username.

        The duplicate check and the insert run inside one write transaction
        (user row locked, or the SQLite write lock held from BEGIN), so two
        concurrent submissions for the same (user, restaurant) pair cannot
        both succeed.
        """
        async with self._store.transaction(write=True):
            user = await self._store.get_user(username, for_update=True)
            if user is None:
                raise UserNotFoundError(username)

            restaurant = await self._store.get_restaurant(restaurant_id)
            if restaurant is None:
                raise RestaurantNotFoundError(restaurant_id)

            existing = await self._store.find_reviews_by_user_and_restaurant(
                user.username, restaurant.id
            )
            if existing:
                logger.warning(
                    "Duplicate review rejected (user=%s, restaurant_id=%s)",
                    user.username, restaurant.id,
                )
                raise DuplicateReviewError(user.username, restaurant.name)

            review = Review(
                username=user.username,
                restaurant_id=restaurant.id,
                peanut_score=scores.peanut,
                egg_score=scores.egg,
                dairy_score=scores.dairy,
                comments=comments,
                status=ReviewStatus.PENDING,
            )
            await self._store.add(review)

        logger.info(
            "Review %s submitted by %s for restaurant %s",
            review.id, review.username, review.restaurant_id,
        )
        return review

    async def moderate(
        self,
        review_id: int,
        decision: str | ModerationDecision,
    ) -> Review:
        """Set a review's status to APPROVED or REJECTED, whatever it was before."""
        action = ModerationDecision.parse(decision)

        async with self._store.transaction(write=True):
            review = await self._store.get_review(review_id)
            if review is None:
                raise ReviewNotFoundError(review_id)

            previous = review.status
            review.status = action.status
            await self._store.save(review)

        logger.info(
            "Review %s moderated: %s → %s",
            review_id, ReviewStatus(previous).value, action.value,
        )
        return review

    async def get_review(self, review_id: int) -> Review:
        review = await self._store.get_review(review_id)
        if review is None:
            raise ReviewNotFoundError(review_id)
        return review

    async def list_pending(self) -> list[Review]:
        """Moderation queue. An empty queue is reported as NoPendingReviewsError."""
        pending = await self._store.find_reviews_by_status(ReviewStatus.PENDING)
        if not pending:
            raise NoPendingReviewsError()
        return pending

    async def list_approved(self, restaurant_id: int) -> list[Review]:
        """Approved reviews of a restaurant; an empty list is a normal result."""
        restaurant: Optional[Restaurant] = await self._store.get_restaurant(restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(restaurant_id)

        approved = await self._store.find_reviews_by_restaurant_and_status(
            restaurant.id, ReviewStatus.APPROVED
        )
        logger.debug(
            "Restaurant %s has %d approved reviews", restaurant_id, len(approved)
        )
        return approved
