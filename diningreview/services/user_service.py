"""
User accounts — signup, lookup and profile update.
Usernames are immutable; a profile update touches location and allergy flags only.
"""

from __future__ import annotations

import logging
from typing import Optional

from diningreview.exceptions import DuplicateUserError, UserNotFoundError
from diningreview.models import User
from diningreview.store import EntityStore

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    async def create_user(
        self,
        username: str,
        city: Optional[str] = None,
        state: Optional[str] = None,
        zipcode: Optional[str] = None,
        has_peanut_allergies: bool = False,
        has_egg_allergies: bool = False,
        has_dairy_allergies: bool = False,
    ) -> User:
        async with self._store.transaction(write=True):
            if await self._store.get_user(username) is not None:
                logger.warning("Duplicate signup rejected: %s", username)
                raise DuplicateUserError(username)

            user = User(
                username=username,
                city=city,
                state=state,
                zipcode=zipcode,
                has_peanut_allergies=has_peanut_allergies,
                has_egg_allergies=has_egg_allergies,
                has_dairy_allergies=has_dairy_allergies,
            )
            await self._store.add(user)

        logger.info("User created: %s", username)
        return user

    async def get_user(self, username: str) -> User:
        user = await self._store.get_user(username)
        if user is None:
            raise UserNotFoundError(username)
        return user

    async def update_user(
        self,
        username: str,
        city: Optional[str],
        state: Optional[str],
        zipcode: Optional[str],
        has_peanut_allergies: bool,
        has_egg_allergies: bool,
        has_dairy_allergies: bool,
    ) -> User:
        """FULL REPLACE of location and allergy flags — fields left out become empty."""
        async with self._store.transaction(write=True):
            user = await self._store.get_user(username, for_update=True)
            if user is None:
                raise UserNotFoundError(username)

            user.city = city
            user.state = state
            user.zipcode = zipcode
            user.has_peanut_allergies = has_peanut_allergies
            user.has_egg_allergies = has_egg_allergies
            user.has_dairy_allergies = has_dairy_allergies
            await self._store.save(user)

        logger.info("User updated: %s", username)
        return user
