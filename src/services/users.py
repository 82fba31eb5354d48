"""User profiles, theme preference and favorite locations."""

from __future__ import annotations

import logging
from typing import Optional

from src.domain.entities import FavoriteLocation, User
from src.domain.enums import LocationType, Theme
from src.domain.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

PROFILE_FIELDS = {"name", "phone", "profile_image", "theme"}


class UserService:
    def __init__(self, store):
        self.store = store

    async def register(
        self,
        username: str,
        password: str,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        theme: Theme = Theme.DARK,
        profile_image: Optional[str] = None,
    ) -> User:
        if await self.store.users.get_by_username(username) is not None:
            raise ConflictError(f"Username {username!r} is already taken")
        user = await self.store.users.create(
            username=username,
            password=password,
            name=name,
            phone=phone,
            theme=theme,
            profile_image=profile_image,
        )
        logger.info("Registered user %d (%s)", user.id, username)
        return user

    async def get_user(self, user_id: int) -> User:
        user = await self.store.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    async def update_profile(self, user_id: int, **patch) -> User:
        """Apply a partial profile update.  Unknown keys are ignored."""
        changes = {k: v for k, v in patch.items() if k in PROFILE_FIELDS}
        user = await self.get_user(user_id)
        if not changes:
            return user
        return await self.store.users.update(user_id, **changes)

    async def update_theme(self, user_id: int, theme: Theme) -> User:
        return await self.update_profile(user_id, theme=Theme(theme))

    # ── Favorite locations ────────────────────────────────────────

    async def add_favorite_location(
        self, user_id: int, name: str, address: str, type: LocationType
    ) -> FavoriteLocation:
        return await self.store.locations.create(
            user_id=user_id, name=name, address=address, type=LocationType(type)
        )

    async def list_favorite_locations(self, user_id: int) -> list[FavoriteLocation]:
        return await self.store.locations.list_by_user(user_id)
