"""
FastAPI dependencies that assemble the services for a request.
Each request gets its own session, wrapped in a SqlEntityStore.
"""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from diningreview.database import get_db
from diningreview.services.restaurant_ranker import RestaurantRanker
from diningreview.services.restaurant_service import RestaurantService
from diningreview.services.review_lifecycle import ReviewLifecycleManager
from diningreview.services.score_aggregator import ScoreAggregator
from diningreview.services.user_service import UserService
from diningreview.store import EntityStore, SqlEntityStore


def get_store(db: AsyncSession = Depends(get_db)) -> EntityStore:
    return SqlEntityStore(db)


def get_user_service(store: EntityStore = Depends(get_store)) -> UserService:
    return UserService(store)


def get_restaurant_service(store: EntityStore = Depends(get_store)) -> RestaurantService:
    return RestaurantService(store)


def get_lifecycle(store: EntityStore = Depends(get_store)) -> ReviewLifecycleManager:
    return ReviewLifecycleManager(store)


def get_aggregator(
    lifecycle: ReviewLifecycleManager = Depends(get_lifecycle),
) -> ScoreAggregator:
    return ScoreAggregator(lifecycle)


def get_ranker(
    store: EntityStore = Depends(get_store),
    aggregator: ScoreAggregator = Depends(get_aggregator),
) -> RestaurantRanker:
    return RestaurantRanker(store, aggregator)
