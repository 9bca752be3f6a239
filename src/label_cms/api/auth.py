"""Authentication API endpoints: OAuth login callback, session lookup, logout."""

import logging

from fastapi import APIRouter, Depends, Response
from fastapi.responses import RedirectResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from label_cms.config import get_settings
from label_cms.database import get_db
from label_cms.exceptions import LabelError
from label_cms.models.user import UserRole
from label_cms.repositories.user import UserRepository
from label_cms.schemas.common import ApiResponse
from label_cms.schemas.user import UserAttributes, UserResponse
from label_cms.services.base import APIError
from label_cms.services.oauth import OAuthClient, get_oauth_client
from label_cms.utils.security import CurrentPrincipal, create_session_token, session_lifetime

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=302)


@router.get("/oauth/callback", response_class=RedirectResponse)
async def oauth_callback(
    code: str | None = None,
    state: str | None = None,
    db: AsyncSession = Depends(get_db),
    oauth_client: OAuthClient = Depends(get_oauth_client),
) -> RedirectResponse:
    """Complete an OAuth login.

    Exchanges the authorization code, upserts the user, sets the session
    cookie and redirects admins to /admin and everyone else to /.
    Failures redirect to / with an ``error`` query parameter.
    """
    if not code or not state:
        logger.warning("OAuth callback without code or state")
        return _redirect("/?error=missing_auth_params")

    try:
        token = await oauth_client.exchange_code_for_token(code, state)
        user_info = await oauth_client.get_user_info(token.access_token)

        if not user_info.open_id:
            logger.warning("OAuth provider returned no openId")
            return _redirect("/?error=missing_openid")

        supplied = {
            "name": user_info.name,
            "email": user_info.email,
            "login_method": user_info.login_method or user_info.platform,
        }
        attributes = UserAttributes(**{k: v for k, v in supplied.items() if v is not None})
        user = await UserRepository(db).upsert(user_info.open_id, attributes)
    except (APIError, PydanticValidationError, LabelError) as e:
        logger.error("OAuth callback failed: %s", e)
        return _redirect("/?error=oauth_failed")
    finally:
        await oauth_client.close()

    settings = get_settings()
    response = _redirect("/admin" if user.role == UserRole.ADMIN else "/")
    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_session_token(user.open_id, user.name or ""),
        max_age=int(session_lifetime().total_seconds()),
        httponly=True,
        samesite="lax",
        secure=not settings.debug,
        path="/",
    )
    logger.info("User %s signed in as %s", user.open_id, user.role)
    return response


@router.get("/auth/me", response_model=ApiResponse[UserResponse])
async def get_me(principal: CurrentPrincipal) -> ApiResponse[UserResponse]:
    """Get the signed-in user, or null for anonymous callers."""
    return ApiResponse[UserResponse](
        success=True,
        message="Authenticated" if principal else "Not authenticated",
        data=UserResponse.model_validate(principal) if principal else None,
    )


@router.post("/auth/logout", response_model=ApiResponse[None])
async def logout(response: Response) -> ApiResponse[None]:
    """Clear the session cookie."""
    response.delete_cookie(key=get_settings().session_cookie_name, path="/")
    return ApiResponse[None](success=True, message="Logged out successfully", data=None)
