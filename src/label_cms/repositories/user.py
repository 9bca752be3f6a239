"""User repository: identity upsert on login."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from label_cms.config import get_settings
from label_cms.exceptions import ValidationError
from label_cms.models.user import User, UserRole
from label_cms.repositories.base import BaseRepository, validate_fields
from label_cms.schemas.user import UserAttributes
from label_cms.utils.timestamps import utcnow

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository):
    """Users created or refreshed by the OAuth login flow."""

    def __init__(
        self,
        session: AsyncSession,
        actor: User | None = None,
        owner_open_id: str | None = None,
    ) -> None:
        """Initialize repository.

        Args:
            session: Database session.
            actor: Acting principal (unused for identity upserts).
            owner_open_id: Identity promoted to admin on first login.
                Defaults to the configured owner.
        """
        super().__init__(session, actor)
        if owner_open_id is None:
            owner_open_id = get_settings().owner_open_id
        self.owner_open_id = owner_open_id

    async def get_by_open_id(self, open_id: str, degrade: bool = True) -> User | None:
        """Look up a user by external identity.

        With ``degrade=False`` an unreachable database raises
        StorageUnavailableError instead of looking like an unknown user.
        """
        return await self._fetch_one(select(User).where(User.open_id == open_id), degrade=degrade)

    async def upsert(
        self,
        open_id: str | None,
        attributes: UserAttributes | Mapping[str, Any] | None = None,
    ) -> User:
        """Create the user on first login, or refresh it on later logins.

        A new user gets role ``user`` unless its openId is the configured
        owner, which is always created as ``admin``. An existing user only
        has the supplied attributes written, and ``last_signed_in`` is
        refreshed every time.

        Raises:
            ValidationError: If open_id is missing or blank.
            StorageUnavailableError: If the database cannot be reached.
        """
        if not open_id or not open_id.strip():
            raise ValidationError(missing=["openId"])

        attrs = validate_fields(UserAttributes, attributes or {})
        supplied = attrs.model_dump(include=attrs.model_fields_set)

        try:
            return await self._write_login(open_id, supplied)
        except IntegrityError:
            # Another first login for this openId inserted the row first
            logger.info("Concurrent first login for %s, updating existing user", open_id)
            return await self._write_login(open_id, supplied)

    async def _lookup_for_write(self, open_id: str) -> User | None:
        result = await self.session.execute(select(User).where(User.open_id == open_id))
        return result.scalar_one_or_none()

    async def _write_login(self, open_id: str, supplied: dict[str, Any]) -> User:
        """Insert or refresh one user in a single transaction."""
        now = utcnow()

        async with self._transaction():
            user = await self._lookup_for_write(open_id)
            created = user is None

            if user is None:
                role = supplied.get("role") or UserRole.USER
                if self.owner_open_id and open_id == self.owner_open_id:
                    role = UserRole.ADMIN
                user = User(
                    open_id=open_id,
                    name=supplied.get("name"),
                    email=supplied.get("email"),
                    login_method=supplied.get("login_method"),
                    role=role,
                    created_at=now,
                    updated_at=now,
                    last_signed_in=now,
                )
                self.session.add(user)
            else:
                for column, value in supplied.items():
                    if column == "role" and value is None:
                        continue
                    setattr(user, column, value)
                user.last_signed_in = now
                user.updated_at = now

            await self.session.flush()

        if created:
            logger.info("Created user %s with role %s", open_id, user.role)
        return user
