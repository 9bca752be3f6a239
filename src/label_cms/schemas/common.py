"""Shared schema building blocks: camelCase base model and response envelope."""

from typing import Annotated, Any, ClassVar, Generic, Self, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

T = TypeVar("T")

# Largest value SQLite can bind as an INTEGER
MAX_SQL_INT = 2**63 - 1

# Required text fields must contain something other than whitespace
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CamelModel(BaseModel):
    """Base model exposing camelCase field names on the wire.

    Snake_case names are accepted on input as well.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(BaseModel, Generic[T]):
    """Uniform envelope wrapping every API response."""

    success: bool = Field(description="Whether the operation succeeded")
    message: str = Field(description="Human readable outcome")
    data: T | None = Field(default=None, description="Operation payload")


class EntityId(BaseModel):
    """Payload returned by create and update operations."""

    id: int = Field(description="Entity ID")


class PartialUpdate(CamelModel):
    """Base for partial update payloads.

    Every field is optional; only keys present in the payload end up in
    ``model_fields_set`` and get written. Fields listed in ``non_nullable``
    may be changed but not set to null.
    """

    non_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> Self:
        """Reject explicit nulls for required columns."""
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise PydanticCustomError(
                    "null_required", "{field} cannot be null", {"field": to_camel(name)}
                )
        return self

    def changes(self) -> dict[str, Any]:
        """Return the explicitly supplied fields keyed by column name."""
        return self.model_dump(include=self.model_fields_set)
