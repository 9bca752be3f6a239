"""Pydantic schemas for user identity and authentication."""

from datetime import datetime

from pydantic import ConfigDict, Field

from label_cms.models.user import UserRole
from label_cms.schemas.common import CamelModel


class UserAttributes(CamelModel):
    """Attributes refreshed from the identity provider on login.

    Only the attributes actually supplied are written to an existing user.
    """

    name: str | None = Field(default=None, description="Display name")
    email: str | None = Field(default=None, description="Email address")
    login_method: str | None = Field(default=None, description="Provider login method")
    role: UserRole | None = Field(default=None, description="Role override")


class UserResponse(CamelModel):
    """Response schema for user data."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="User ID")
    open_id: str = Field(description="External identity")
    name: str | None = Field(default=None, description="Display name")
    email: str | None = Field(default=None, description="Email address")
    login_method: str | None = Field(default=None, description="Provider login method")
    role: UserRole = Field(description="User role")
    created_at: datetime = Field(description="When the user was created")
    updated_at: datetime = Field(description="When the user was last updated")
    last_signed_in: datetime = Field(description="Most recent login")
