"""Security utilities for session tokens and principal resolution."""

from datetime import UTC, datetime, timedelta
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from label_cms.config import get_settings
from label_cms.database import get_db
from label_cms.models.user import User
from label_cms.repositories.user import UserRepository

# Session token travels in a cookie (browser) or a Bearer header (API clients)
session_cookie = APIKeyCookie(name=get_settings().session_cookie_name, auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)

SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


def session_lifetime() -> timedelta:
    """Return how long a session token stays valid."""
    return timedelta(days=get_settings().session_expire_days)


def create_session_token(
    open_id: str,
    name: str = "",
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed session token for a logged-in user.

    Args:
        open_id: External identity; stored as the "sub" claim.
        name: Display name at login time.
        expires_delta: Optional custom expiration time. Defaults to settings value.

    Returns:
        Encoded JWT token string
    """
    settings = get_settings()
    expire = datetime.now(UTC) + (expires_delta or session_lifetime())

    to_encode = {"sub": open_id, "name": name, "exp": expire}
    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_session_token(token: str) -> dict | None:
    """Decode and validate a session token.

    Args:
        token: The JWT token string to decode

    Returns:
        Decoded token payload if valid, None if invalid or expired
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
        return payload
    except JWTError:
        return None


async def get_current_principal(
    request: Request,
    session_token: Annotated[str | None, Depends(session_cookie)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """Resolve the acting principal from the session cookie or Bearer header.

    Missing, invalid or expired tokens and unknown users all resolve to an
    anonymous caller (None), who may still read. If the database is down,
    reads proceed anonymously but writes fail with StorageUnavailableError
    rather than being misreported as unauthenticated.
    """
    token = credentials.credentials if credentials else session_token
    if not token:
        return None

    payload = decode_session_token(token)
    if payload is None:
        return None

    open_id = payload.get("sub")
    if not open_id:
        return None

    degrade = request.method in SAFE_METHODS
    return await UserRepository(db).get_by_open_id(open_id, degrade=degrade)


# Type alias for use in route dependencies
CurrentPrincipal = Annotated[User | None, Depends(get_current_principal)]
