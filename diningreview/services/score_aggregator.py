"""
ScoreAggregator — per-restaurant allergy scores from approved reviews.

Nothing is cached or persisted: every call re-reads the approved reviews.

  peanut / egg / dairy  — mean of that score over approved reviews, 0.0 if none
  overall               — (peanut + egg + dairy) / 3, no dimension skipped
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from diningreview.schemas.restaurant import RestaurantScores
from diningreview.services.review_lifecycle import ReviewLifecycleManager
from diningreview.utils.allergy_data import EMPTY_SCORE, SCORE_FIELDS, AllergyKey

logger = logging.getLogger(__name__)

Scorer = Callable[[int], Awaitable[float]]


class ScoreAggregator:
    """Pure aggregation over ReviewLifecycleManager.list_approved()."""

    def __init__(self, lifecycle: ReviewLifecycleManager) -> None:
        self._lifecycle = lifecycle
        self._scorers: dict[AllergyKey, Scorer] = {
            AllergyKey.PEANUT: self.peanut_score,
            AllergyKey.EGG: self.egg_score,
            AllergyKey.DAIRY: self.dairy_score,
            AllergyKey.OVERALL: self.overall_score,
        }

    async def peanut_score(self, restaurant_id: int) -> float:
        return await self._mean(restaurant_id, AllergyKey.PEANUT)

    async def egg_score(self, restaurant_id: int) -> float:
        return await self._mean(restaurant_id, AllergyKey.EGG)

    async def dairy_score(self, restaurant_id: int) -> float:
        return await self._mean(restaurant_id, AllergyKey.DAIRY)

    async def overall_score(self, restaurant_id: int) -> float:
        """Unweighted mean of the three allergy scores, each computed on its own."""
        peanut = await self.peanut_score(restaurant_id)
        egg = await self.egg_score(restaurant_id)
        dairy = await self.dairy_score(restaurant_id)
        return (peanut + egg + dairy) / 3.0

    async def score_for(self, restaurant_id: int, key: AllergyKey) -> float:
        return await self._scorers[key](restaurant_id)

    async def scores(self, restaurant_id: int) -> RestaurantScores:
        """All four scores for one restaurant."""
        return RestaurantScores(
            restaurant_id=restaurant_id,
            peanut=await self.peanut_score(restaurant_id),
            egg=await self.egg_score(restaurant_id),
            dairy=await self.dairy_score(restaurant_id),
            overall=await self.overall_score(restaurant_id),
        )

    async def _mean(self, restaurant_id: int, key: AllergyKey) -> float:
        approved = await self._lifecycle.list_approved(restaurant_id)
        if not approved:
            return EMPTY_SCORE
        field_name = SCORE_FIELDS[key]
        values = [getattr(review, field_name) for review in approved]
        mean = sum(values) / len(values)
        logger.debug(
            "%s score for restaurant %s: %.3f (%d reviews)",
            key.value, restaurant_id, mean, len(values),
        )
        return mean
