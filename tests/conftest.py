from __future__ import annotations

import asyncio
import itertools
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

# Point the app at a throwaway in-memory database before anything imports it
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["APP_ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest

from diningreview.models import Restaurant, Review, ReviewStatus, User
from diningreview.services.restaurant_ranker import RestaurantRanker
from diningreview.services.restaurant_service import RestaurantService
from diningreview.services.review_lifecycle import ReviewLifecycleManager, ReviewScores
from diningreview.services.score_aggregator import ScoreAggregator
from diningreview.services.user_service import UserService


class InMemoryEntityStore:
    """
    EntityStore kept in dicts. Every query yields to the event loop, like real
    I/O would, so concurrent callers interleave; transactions are serialised
    by a lock.
    """

    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.restaurants: dict[int, Restaurant] = {}
        self.reviews: dict[int, Review] = {}
        self._ids = {Restaurant: itertools.count(1), Review: itertools.count(1)}
        self._lock = asyncio.Lock()
        self.commits = 0
        self.rollbacks = 0

    @asynccontextmanager
    async def transaction(self, *, write: bool = False) -> AsyncIterator[None]:
        async with self._lock:
            try:
                yield
            except Exception:
                self.rollbacks += 1
                raise
            self.commits += 1

    async def get_user(self, username: str, *, for_update: bool = False) -> Optional[User]:
        await asyncio.sleep(0)
        return self.users.get(username)

    async def get_restaurant(self, restaurant_id: int) -> Optional[Restaurant]:
        await asyncio.sleep(0)
        return self.restaurants.get(restaurant_id)

    async def get_review(self, review_id: int) -> Optional[Review]:
        await asyncio.sleep(0)
        return self.reviews.get(review_id)

    async def find_restaurants_by_zipcode(self, zipcode: str) -> list[Restaurant]:
        await asyncio.sleep(0)
        return [r for r in self.restaurants.values() if r.zipcode == zipcode]

    async def find_restaurants_by_name_and_zipcode(
        self, name: str, zipcode: str
    ) -> list[Restaurant]:
        await asyncio.sleep(0)
        return [
            r for r in self.restaurants.values()
            if r.name == name and r.zipcode == zipcode
        ]

    async def find_reviews_by_status(self, status: ReviewStatus) -> list[Review]:
        await asyncio.sleep(0)
        return [r for r in self.reviews.values() if r.status == status]

    async def find_reviews_by_restaurant_and_status(
        self, restaurant_id: int, status: ReviewStatus
    ) -> list[Review]:
        await asyncio.sleep(0)
        return [
            r for r in self.reviews.values()
            if r.restaurant_id == restaurant_id and r.status == status
        ]

    async def find_reviews_by_user_and_restaurant(
        self, username: str, restaurant_id: int
    ) -> list[Review]:
        await asyncio.sleep(0)
        return [
            r for r in self.reviews.values()
            if r.username == username and r.restaurant_id == restaurant_id
        ]

    async def add(self, entity):
        await asyncio.sleep(0)
        if isinstance(entity, User):
            self.users[entity.username] = entity
        elif isinstance(entity, Restaurant):
            entity.id = next(self._ids[Restaurant])
            self.restaurants[entity.id] = entity
        else:
            entity.id = next(self._ids[Review])
            self.reviews[entity.id] = entity
        return entity

    async def save(self, entity):
        return entity


# ── Service fixtures ─────────────────────────────────────────────────────────


@pytest.fixture
def store() -> InMemoryEntityStore:
    return InMemoryEntityStore()


@pytest.fixture
def users(store) -> UserService:
    return UserService(store)


@pytest.fixture
def restaurants(store) -> RestaurantService:
    return RestaurantService(store)


@pytest.fixture
def lifecycle(store) -> ReviewLifecycleManager:
    return ReviewLifecycleManager(store)


@pytest.fixture
def aggregator(lifecycle) -> ScoreAggregator:
    return ScoreAggregator(lifecycle)


@pytest.fixture
def ranker(store, aggregator) -> RestaurantRanker:
    return RestaurantRanker(store, aggregator)


@pytest.fixture
def approve(lifecycle):
    """Submit a review and approve it in one step."""

    async def _approve(username: str, restaurant_id: int, peanut=3, egg=3, dairy=3):
        review = await lifecycle.submit(
            username, restaurant_id, ReviewScores(peanut, egg, dairy)
        )
        return await lifecycle.moderate(review.id, "APPROVED")

    return _approve
