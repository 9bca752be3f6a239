"""Pydantic schemas for identity provider (OAuth) responses."""

from pydantic import ConfigDict, Field

from label_cms.schemas.common import CamelModel


class OAuthToken(CamelModel):
    """Token issued by the provider in exchange for an authorization code."""

    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(description="Bearer token for provider API calls")
    token_type: str | None = Field(default=None, description="Token type")
    expires_in: int | None = Field(default=None, description="Lifetime in seconds")
    refresh_token: str | None = Field(default=None, description="Refresh token")
    scope: str | None = Field(default=None, description="Granted scope")


class OAuthUserInfo(CamelModel):
    """Identity payload returned by the provider's user-info endpoint."""

    model_config = ConfigDict(extra="ignore")

    open_id: str | None = Field(default=None, description="Opaque external identity")
    name: str | None = Field(default=None, description="Display name")
    email: str | None = Field(default=None, description="Email address")
    login_method: str | None = Field(default=None, description="Login method")
    platform: str | None = Field(default=None, description="Login platform")
