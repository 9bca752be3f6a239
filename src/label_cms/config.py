"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App settings
    app_name: str = "Label CMS API"
    debug: bool = False
    secret_key: str  # Required, no default
    cors_origins: list[str] = ["*"]

    # Database
    database_url: str = "sqlite+aiosqlite:///./label_cms.db"
    create_tables_on_startup: bool = False

    # Identity provider (OAuth)
    oauth_server_url: str = ""
    oauth_app_id: str = ""
    oauth_token_path: str = "/oauth/token"
    oauth_userinfo_path: str = "/oauth/userinfo"
    owner_open_id: str = ""  # Promoted to admin on first login

    # Session tokens (JWT)
    jwt_algorithm: str = "HS256"
    session_cookie_name: str = "label_session"
    session_expire_days: int = 365

    # Uploads
    upload_dir: str = "./uploads"
    upload_url_prefix: str = "/uploads"
    max_image_upload_bytes: int = 5 * 1024 * 1024
    max_audio_upload_bytes: int = 50 * 1024 * 1024

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str, info) -> str:
        """Validate that secret_key is secure."""
        if not v:
            raise ValueError("SECRET_KEY is required")

        # In production mode, ensure secret key is strong
        debug = info.data.get("debug", False)
        if not debug:
            if len(v) < 32:
                raise ValueError("SECRET_KEY must be at least 32 characters in production mode")
            if v in ("change-me-in-production", "secret", "password", "changeme"):
                raise ValueError("SECRET_KEY must not be a common weak value")

        return v

    def validate_runtime_config(self) -> list[str]:
        """Validate runtime configuration and return warnings."""
        warnings = []

        if not self.oauth_server_url or not self.oauth_app_id:
            warnings.append("OAUTH_SERVER_URL / OAUTH_APP_ID not set - admin login will not work")

        if not self.owner_open_id:
            warnings.append("OWNER_OPEN_ID is not set - no user will be promoted to admin")

        # Warn about debug mode in production
        if self.debug:
            warnings.append("DEBUG mode is enabled - should be disabled in production")

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
