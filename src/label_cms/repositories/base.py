"""Shared repository plumbing.

Every repository is constructed with an ``AsyncSession`` and the acting
principal. Reads never require a role and degrade to an empty result when
the database is unreachable. Writes check the authorization gate before
touching storage, run in a single transaction, and surface storage
failures as ``StorageUnavailableError``.
"""

import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import Select, select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from label_cms.authorization import Operation, authorize
from label_cms.database import Base
from label_cms.exceptions import NotFoundError, StorageUnavailableError, ValidationError
from label_cms.models.user import User
from label_cms.schemas.common import MAX_SQL_INT, PartialUpdate
from label_cms.utils.timestamps import utcnow

logger = logging.getLogger(__name__)

# Errors that mean the database could not be reached
STORAGE_ERRORS = (OperationalError, InterfaceError, OSError)

DEFAULT_LIMIT = 5

SchemaT = TypeVar("SchemaT", bound=BaseModel)
ModelT = TypeVar("ModelT", bound=Base)


def coerce_limit(limit: Any, default: int = DEFAULT_LIMIT) -> int:
    """Coerce a user-supplied limit to a positive integer.

    Anything that is not a positive whole number falls back to ``default``;
    values too large to bind are clamped.
    """
    if isinstance(limit, bool):
        return default
    try:
        value = int(limit)
    except (TypeError, ValueError):
        return default
    if value < 1:
        return default
    return min(value, MAX_SQL_INT)


def validate_fields(schema: type[SchemaT], fields: SchemaT | Mapping[str, Any]) -> SchemaT:
    """Validate raw input into ``schema``, raising the domain ValidationError.

    The error names the missing fields and the malformed ones separately,
    using the wire (camelCase) names.
    """
    if isinstance(fields, schema):
        return fields
    if not isinstance(fields, Mapping):
        raise ValidationError("Request body must be a JSON object")

    try:
        return schema.model_validate(dict(fields))
    except PydanticValidationError as e:
        missing: list[str] = []
        invalid: list[str] = []
        for error in e.errors():
            if error["loc"]:
                name = str(error["loc"][0])
            else:
                name = str(error.get("ctx", {}).get("field", "body"))
            bucket = missing if error["type"] == "missing" else invalid
            if name not in bucket:
                bucket.append(name)
        raise ValidationError(missing=missing, invalid=invalid) from None


class BaseRepository:
    """Session and principal handling shared by all repositories."""

    def __init__(self, session: AsyncSession, actor: User | None = None) -> None:
        """Initialize repository with session and the acting principal."""
        self.session = session
        self.actor = actor

    def authorize_write(self) -> None:
        """Raise AuthorizationError unless the actor may write."""
        authorize(self.actor, Operation.WRITE)

    async def _fetch_all(self, stmt: Select) -> list[Any]:
        """Run a read query, returning an empty list if storage is unreachable."""
        try:
            result = await self.session.execute(stmt)
        except STORAGE_ERRORS as e:
            logger.warning("Storage unavailable, returning empty result: %s", e)
            await self.session.rollback()
            return []
        return list(result.scalars().all())

    async def _fetch_one(self, stmt: Select, degrade: bool = True) -> Any | None:
        """Run a single-row read query.

        Returns None if storage is unreachable, or raises
        StorageUnavailableError when ``degrade`` is False.
        """
        try:
            result = await self.session.execute(stmt)
        except STORAGE_ERRORS as e:
            if not degrade:
                await self.session.rollback()
                raise StorageUnavailableError() from e
            logger.warning("Storage unavailable, treating lookup as not found: %s", e)
            await self.session.rollback()
            return None
        return result.scalar_one_or_none()

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        """Commit everything done inside the block, or nothing at all."""
        try:
            yield self.session
            await self.session.commit()
        except STORAGE_ERRORS as e:
            await self.session.rollback()
            logger.error("Storage unavailable during write: %s", e)
            raise StorageUnavailableError() from e
        except Exception:
            await self.session.rollback()
            raise


class CrudRepository(BaseRepository, Generic[ModelT]):
    """Get/list/create/update/delete for a single-table entity."""

    model: ClassVar[type[Base]]
    create_schema: ClassVar[type[BaseModel]]
    update_schema: ClassVar[type[PartialUpdate]]
    entity_name: ClassVar[str]

    def _ordering(self) -> tuple[Any, ...]:
        """Columns that define the list order."""
        return (self.model.id,)

    async def list_all(self) -> list[ModelT]:
        """Return every row in list order."""
        return await self._fetch_all(select(self.model).order_by(*self._ordering()))

    async def get_by_id(self, entity_id: int) -> ModelT | None:
        """Return the row with ``entity_id``, or None."""
        return await self._fetch_one(select(self.model).where(self.model.id == entity_id))

    def _build(self, data: BaseModel) -> ModelT:
        """Build a new ORM instance from validated create data."""
        now = utcnow()
        values = data.model_dump(exclude_none=True)
        return self.model(**values, created_at=now, **self._extra_create_values(now))

    def _extra_create_values(self, now: Any) -> dict[str, Any]:
        return {"updated_at": now}

    async def create(self, fields: BaseModel | Mapping[str, Any]) -> int:
        """Validate and insert a new row, returning its generated id."""
        self.authorize_write()
        data = validate_fields(self.create_schema, fields)

        async with self._transaction():
            await self._before_create(data)
            entity = self._build(data)
            self.session.add(entity)
            await self.session.flush()
            entity_id = entity.id

        logger.info("Created %s %s", self.entity_name.lower(), entity_id)
        return entity_id

    async def _before_create(self, data: BaseModel) -> None:
        """Hook for checks that need the session before insert."""

    async def update(self, entity_id: int, fields: PartialUpdate | Mapping[str, Any]) -> int:
        """Write only the supplied fields of an existing row."""
        self.authorize_write()
        data = validate_fields(self.update_schema, fields)
        changes = data.changes()

        async with self._transaction():
            entity = await self._get_for_write(entity_id)
            for column, value in changes.items():
                setattr(entity, column, value)
            if hasattr(entity, "updated_at"):
                entity.updated_at = utcnow()
            await self.session.flush()

        logger.info(
            "Updated %s %s (%s)",
            self.entity_name.lower(),
            entity_id,
            ", ".join(sorted(changes)) or "no fields",
        )
        return entity_id

    async def delete(self, entity_id: int) -> None:
        """Delete a single row."""
        self.authorize_write()

        async with self._transaction():
            entity = await self._get_for_write(entity_id)
            await self.session.delete(entity)

        logger.info("Deleted %s %s", self.entity_name.lower(), entity_id)

    async def _get_for_write(self, entity_id: int) -> ModelT:
        """Load a row inside a write transaction, raising NotFoundError if absent."""
        entity = await self.session.get(self.model, entity_id)
        if entity is None:
            raise NotFoundError(f"{self.entity_name} not found")
        return entity
