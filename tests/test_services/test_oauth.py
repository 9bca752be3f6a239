"""Tests for the OAuth identity provider client."""

import base64
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from label_cms.services.base import APIError
from label_cms.services.oauth import OAuthClient, decode_state

SAMPLE_TOKEN_RESPONSE = {
    "accessToken": "at-123",
    "tokenType": "Bearer",
    "expiresIn": 3600,
    "refreshToken": "rt-456",
    "scope": "profile",
    "idToken": "ignored",
}

SAMPLE_USER_INFO = {
    "openId": "open-789",
    "projectId": "label",
    "name": "Label Owner",
    "email": "owner@example.com",
    "loginMethod": None,
    "platform": "github",
}


@pytest.fixture
def mock_settings():
    """Mock settings with a configured provider."""
    with patch("label_cms.services.oauth.get_settings") as mock:
        mock.return_value.oauth_app_id = "app-1"
        mock.return_value.oauth_server_url = "https://auth.example.com"
        mock.return_value.oauth_token_path = "/oauth/token"
        mock.return_value.oauth_userinfo_path = "/oauth/userinfo"
        yield mock


@pytest.fixture
def oauth_client(mock_settings) -> OAuthClient:  # noqa: ARG001
    """Create an OAuth client for testing."""
    return OAuthClient()


class TestOAuthClientInit:
    """Tests for OAuth client initialization."""

    def test_init_from_settings(self, oauth_client: OAuthClient) -> None:
        assert oauth_client.app_id == "app-1"
        assert oauth_client.base_url == "https://auth.example.com"

    def test_init_without_server_url_raises(self) -> None:
        with patch("label_cms.services.oauth.get_settings") as mock:
            mock.return_value.oauth_server_url = ""
            mock.return_value.oauth_app_id = "app-1"
            with pytest.raises(ValueError, match="OAuth server URL is required"):
                OAuthClient()


class TestDecodeState:
    """Tests for recovering the redirect URI from state."""

    def test_base64_state(self) -> None:
        state = base64.b64encode(b"https://label.example.com/api/oauth/callback").decode()
        assert decode_state(state) == "https://label.example.com/api/oauth/callback"

    def test_unpadded_urlsafe_state(self) -> None:
        state = base64.urlsafe_b64encode(b"https://x.example/cb?a=1").decode().rstrip("=")
        assert decode_state(state) == "https://x.example/cb?a=1"

    def test_undecodable_state_passes_through(self) -> None:
        assert decode_state("not base64!") == "not base64!"


class TestExchangeCode:
    """Tests for exchanging the authorization code."""

    async def test_exchange_success(self, oauth_client: OAuthClient) -> None:
        state = base64.b64encode(b"https://label.example.com/api/oauth/callback").decode()
        mock_response = httpx.Response(200, json=SAMPLE_TOKEN_RESPONSE)

        with patch.object(oauth_client, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.request.return_value = mock_response
            mock_get_client.return_value = mock_client

            token = await oauth_client.exchange_code_for_token("code-1", state)

            assert token.access_token == "at-123"
            assert token.expires_in == 3600

            call_args = mock_client.request.call_args
            assert call_args.kwargs["method"] == "POST"
            assert call_args.kwargs["url"] == "oauth/token"
            assert call_args.kwargs["json"] == {
                "clientId": "app-1",
                "grantType": "authorization_code",
                "code": "code-1",
                "redirectUri": "https://label.example.com/api/oauth/callback",
            }

    async def test_exchange_http_error(self, oauth_client: OAuthClient) -> None:
        mock_response = httpx.Response(400, json={"error": "invalid_grant"})

        with patch.object(oauth_client, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.request.return_value = mock_response
            mock_get_client.return_value = mock_client

            with pytest.raises(APIError) as exc_info:
                await oauth_client.exchange_code_for_token("bad", "s")

            assert exc_info.value.status_code == 400

    async def test_exchange_timeout(self, oauth_client: OAuthClient) -> None:
        with patch.object(oauth_client, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.request.side_effect = httpx.TimeoutException("timed out")
            mock_get_client.return_value = mock_client

            with pytest.raises(APIError, match="timed out"):
                await oauth_client.exchange_code_for_token("code", "s")

    async def test_exchange_invalid_json(self, oauth_client: OAuthClient) -> None:
        mock_response = httpx.Response(200, text="<html>oops</html>")

        with patch.object(oauth_client, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.request.return_value = mock_response
            mock_get_client.return_value = mock_client

            with pytest.raises(APIError, match="Invalid JSON"):
                await oauth_client.exchange_code_for_token("code", "s")


class TestGetUserInfo:
    """Tests for fetching the provider identity."""

    async def test_get_user_info_success(self, oauth_client: OAuthClient) -> None:
        mock_response = httpx.Response(200, json=SAMPLE_USER_INFO)

        with patch.object(oauth_client, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.request.return_value = mock_response
            mock_get_client.return_value = mock_client

            info = await oauth_client.get_user_info("at-123")

            assert info.open_id == "open-789"
            assert info.platform == "github"
            assert info.login_method is None

            call_args = mock_client.request.call_args
            assert call_args.kwargs["method"] == "GET"
            assert call_args.kwargs["headers"]["Authorization"] == "Bearer at-123"
            assert call_args.kwargs["headers"]["Accept"] == "application/json"

    async def test_get_user_info_unauthorized(self, oauth_client: OAuthClient) -> None:
        mock_response = httpx.Response(401, json={"error": "invalid_token"})

        with patch.object(oauth_client, "_get_client") as mock_get_client:
            mock_client = AsyncMock()
            mock_client.request.return_value = mock_response
            mock_get_client.return_value = mock_client

            with pytest.raises(APIError):
                await oauth_client.get_user_info("expired")
