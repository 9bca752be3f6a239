"""OAuth identity provider client."""

import base64
import binascii

from label_cms.config import get_settings
from label_cms.schemas.external import OAuthToken, OAuthUserInfo
from label_cms.services.base import BaseAPIClient


def decode_state(state: str) -> str:
    """Recover the redirect URI carried in the OAuth ``state`` parameter.

    The login page encodes the callback URL as base64; a state that does not
    decode is passed through unchanged.
    """
    try:
        padded = state + "=" * (-len(state) % 4)
        return base64.urlsafe_b64decode(padded).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return state


class OAuthClient(BaseAPIClient):
    """Client for the identity provider used for admin login.

    Exchanges an authorization code for an access token and fetches the
    user-info payload carrying the opaque ``openId``.
    """

    def __init__(
        self,
        app_id: str | None = None,
        base_url: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the OAuth client.

        Args:
            app_id: Application (client) ID. If not provided, uses settings.
            base_url: Provider base URL. If not provided, uses settings.
            timeout: Request timeout in seconds.
        """
        settings = get_settings()
        self.app_id = app_id or settings.oauth_app_id
        base = base_url or settings.oauth_server_url
        self.token_path = settings.oauth_token_path
        self.userinfo_path = settings.oauth_userinfo_path

        if not base:
            raise ValueError("OAuth server URL is required")

        super().__init__(base_url=base, timeout=timeout)

    @property
    def default_headers(self) -> dict[str, str]:
        """Return default headers for provider requests."""
        return {"Accept": "application/json"}

    async def exchange_code_for_token(self, code: str, state: str) -> OAuthToken:
        """Exchange an authorization code for an access token.

        Args:
            code: Authorization code from the callback.
            state: State parameter from the callback.

        Returns:
            The issued token.
        """
        payload = {
            "clientId": self.app_id,
            "grantType": "authorization_code",
            "code": code,
            "redirectUri": decode_state(state),
        }
        data = await self.post(self.token_path, json=payload)
        return OAuthToken.model_validate(data)

    async def get_user_info(self, access_token: str) -> OAuthUserInfo:
        """Fetch the identity behind an access token.

        Args:
            access_token: Token from ``exchange_code_for_token``.

        Returns:
            User info; ``open_id`` may be missing if the provider omits it.
        """
        data = await self.get(
            self.userinfo_path,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        return OAuthUserInfo.model_validate(data)


async def get_oauth_client() -> OAuthClient:
    """Factory function to create an OAuth client.

    Can be used as a FastAPI dependency.
    """
    return OAuthClient()
