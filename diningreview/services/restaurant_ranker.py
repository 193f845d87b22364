"""
RestaurantRanker — orders the restaurants at a zipcode by one allergy score.

Each candidate is scored once, then stable-sorted highest first, so
restaurants with equal scores keep their retrieval order.

Cost: every score is a fresh aggregation over the restaurant's approved
reviews (three of them for "overall"). Large zipcodes should precompute
scores in bulk before sorting.
"""

from __future__ import annotations

import logging

from diningreview.exceptions import NoRestaurantsAtZipError
from diningreview.models import Restaurant
from diningreview.services.score_aggregator import ScoreAggregator
from diningreview.store import EntityStore
from diningreview.utils.allergy_data import AllergyKey

logger = logging.getLogger(__name__)


class RestaurantRanker:
    """Search restaurants by zipcode, best allergy score first."""

    def __init__(self, store: EntityStore, aggregator: ScoreAggregator) -> None:
        self._store = store
        self._aggregator = aggregator

    async def search_by_zip_and_allergy(
        self,
        zipcode: str,
        allergy: str | AllergyKey,
    ) -> list[Restaurant]:
        """
        Return every restaurant at zipcode, sorted by the chosen score descending.

        Raises UnrecognizedAllergyError for an allergy outside
        {peanut, egg, dairy, overall} and NoRestaurantsAtZipError when the
        zipcode has no restaurants.
        """
        key = AllergyKey.parse(allergy)

        restaurants = await self._store.find_restaurants_by_zipcode(zipcode)
        if not restaurants:
            raise NoRestaurantsAtZipError(zipcode, key.value)

        scored: list[tuple[Restaurant, float]] = []
        for restaurant in restaurants:
            score = await self._aggregator.score_for(restaurant.id, key)
            scored.append((restaurant, score))

        # list.sort is stable, including with reverse=True
        scored.sort(key=lambda x: x[1], reverse=True)

        logger.info(
            "Ranked %d restaurants at %s by %s", len(scored), zipcode, key.value
        )
        return [restaurant for restaurant, _ in scored]
