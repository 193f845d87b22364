"""
Entity store — the only shared resource the services touch.

Services receive an ``EntityStore`` rather than a session so the storage can
be swapped (the test suite uses an in-memory implementation). Lookups by key
return ``None`` when absent; the services decide which absence is an error.
Query results come back in retrieval (id) order.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Optional, Protocol, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from diningreview.database import SQLITE_BEGIN
from diningreview.models import Restaurant, Review, ReviewStatus, User

logger = logging.getLogger(__name__)

E = TypeVar("E", User, Restaurant, Review)


class EntityStore(Protocol):
    """Key-lookup and predicate-query access to users, restaurants and reviews."""

    def transaction(self, *, write: bool = False) -> AsyncContextManager[None]:
        """
        Scope a unit of work: commit on success, roll back on error.
        write=True takes the store's write lock before the first read.
        """
        ...

    async def get_user(self, username: str, *, for_update: bool = False) -> Optional[User]:
        ...

    async def get_restaurant(self, restaurant_id: int) -> Optional[Restaurant]:
        ...

    async def get_review(self, review_id: int) -> Optional[Review]:
        ...

    async def find_restaurants_by_zipcode(self, zipcode: str) -> list[Restaurant]:
        ...

    async def find_restaurants_by_name_and_zipcode(
        self, name: str, zipcode: str
    ) -> list[Restaurant]:
        ...

    async def find_reviews_by_status(self, status: ReviewStatus) -> list[Review]:
        ...

    async def find_reviews_by_restaurant_and_status(
        self, restaurant_id: int, status: ReviewStatus
    ) -> list[Review]:
        ...

    async def find_reviews_by_user_and_restaurant(
        self, username: str, restaurant_id: int
    ) -> list[Review]:
        ...

    async def add(self, entity: E) -> E:
        """Insert a new entity; generated keys are populated on return."""
        ...

    async def save(self, entity: E) -> E:
        """Persist changes made to an already-stored entity."""
        ...


class SqlEntityStore:
    """EntityStore backed by a SQLAlchemy AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @asynccontextmanager
    async def transaction(self, *, write: bool = False) -> AsyncIterator[None]:
        try:
            if write and not self._session.in_transaction():
                # SQLite: BEGIN IMMEDIATE; other dialects ignore the option
                await self._session.connection(
                    execution_options={SQLITE_BEGIN: "IMMEDIATE"}
                )
            yield
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise

    # ── Key lookups ───────────────────────────────────────────────────────────

    async def get_user(self, username: str, *, for_update: bool = False) -> Optional[User]:
        """
        Fetch a user by username.
        for_update=True row-locks the user for the rest of the transaction,
        which serialises concurrent review submissions by that user.
        SQLite has no row locks; there a write transaction already holds
        the database write lock.
        """
        stmt = select(User).where(User.username == username)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_restaurant(self, restaurant_id: int) -> Optional[Restaurant]:
        return await self._session.get(Restaurant, restaurant_id)

    async def get_review(self, review_id: int) -> Optional[Review]:
        return await self._session.get(Review, review_id)

    # ── Predicate queries ─────────────────────────────────────────────────────

    async def find_restaurants_by_zipcode(self, zipcode: str) -> list[Restaurant]:
        stmt = (
            select(Restaurant)
            .where(Restaurant.zipcode == zipcode)
            .order_by(Restaurant.id)
        )
        return list((await self._session.scalars(stmt)).all())

    async def find_restaurants_by_name_and_zipcode(
        self, name: str, zipcode: str
    ) -> list[Restaurant]:
        stmt = (
            select(Restaurant)
            .where(Restaurant.name == name, Restaurant.zipcode == zipcode)
            .order_by(Restaurant.id)
        )
        return list((await self._session.scalars(stmt)).all())

    async def find_reviews_by_status(self, status: ReviewStatus) -> list[Review]:
        stmt = select(Review).where(Review.status == status).order_by(Review.id)
        return list((await self._session.scalars(stmt)).all())

    async def find_reviews_by_restaurant_and_status(
        self, restaurant_id: int, status: ReviewStatus
    ) -> list[Review]:
        stmt = (
            select(Review)
            .where(Review.restaurant_id == restaurant_id, Review.status == status)
            .order_by(Review.id)
        )
        return list((await self._session.scalars(stmt)).all())

    async def find_reviews_by_user_and_restaurant(
        self, username: str, restaurant_id: int
    ) -> list[Review]:
        stmt = (
            select(Review)
            .where(Review.username == username, Review.restaurant_id == restaurant_id)
            .order_by(Review.id)
        )
        return list((await self._session.scalars(stmt)).all())

    # ── Writes ────────────────────────────────────────────────────────────────

    async def add(self, entity: E) -> E:
        self._session.add(entity)
        await self._session.flush()
        logger.debug("Inserted %s", entity.__class__.__name__)
        return entity

    async def save(self, entity: E) -> E:
        self._session.add(entity)
        await self._session.flush()
        return entity
