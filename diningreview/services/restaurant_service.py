"""Restaurant registry — registration with the (name, zipcode) uniqueness rule."""

from __future__ import annotations

import logging
from typing import Optional

from diningreview.exceptions import DuplicateRestaurantError, RestaurantNotFoundError
from diningreview.models import Restaurant
from diningreview.store import EntityStore

logger = logging.getLogger(__name__)


class RestaurantService:

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    async def create_restaurant(
        self,
        name: str,
        zipcode: str,
        street: Optional[str] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
    ) -> Restaurant:
        """Register a restaurant; a second one with the same name and zipcode is a conflict."""
        async with self._store.transaction(write=True):
            existing = await self._store.find_restaurants_by_name_and_zipcode(name, zipcode)
            if existing:
                logger.warning("Duplicate restaurant rejected: %s (%s)", name, zipcode)
                raise DuplicateRestaurantError(name, zipcode)

            restaurant = Restaurant(
                name=name,
                street=street,
                city=city,
                state=state,
                zipcode=zipcode,
            )
            await self._store.add(restaurant)

        logger.info("Restaurant %s registered: %s (%s)", restaurant.id, name, zipcode)
        return restaurant

    async def get_restaurant(self, restaurant_id: int) -> Restaurant:
        restaurant = await self._store.get_restaurant(restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(restaurant_id)
        return restaurant
