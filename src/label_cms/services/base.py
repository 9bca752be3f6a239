"""Shared HTTP plumbing for outbound JSON APIs."""

from abc import ABC, abstractmethod
from typing import Any

import httpx


class APIError(Exception):
    """An outbound call failed: transport, HTTP status or payload shape."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BaseAPIClient(ABC):
    """JSON-over-HTTP client with a lazily opened connection pool.

    Subclasses supply ``default_headers``; every call returns the decoded
    JSON object or raises APIError.
    """

    def __init__(self, base_url: str, timeout: float = 30.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    @abstractmethod
    def default_headers(self) -> dict[str, str]:
        """Headers sent with every request."""
        ...

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.default_headers,
            )
        return self._client

    async def close(self) -> None:
        """Release the connection pool, if one was opened."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def _request(
        self,
        method: str,
        endpoint: str,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Send one request and decode the JSON object it returns.

        Raises:
            APIError: On timeouts, transport failures, HTTP errors or a body
                that is not a JSON object.
        """
        client = await self._get_client()
        try:
            response = await client.request(
                method=method,
                url=endpoint.lstrip("/"),
                json=json,
                headers={**self.default_headers, **(headers or {})},
            )
        except httpx.TimeoutException as e:
            raise APIError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            raise APIError(f"Request failed: {e}") from e

        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> dict[str, Any]:
        if response.status_code >= 400:
            raise APIError(f"API error: {response.text}", status_code=response.status_code)
        try:
            data = response.json()
        except ValueError as e:
            raise APIError(f"Invalid JSON response: {e}") from e
        if not isinstance(data, dict):
            raise APIError("Invalid JSON response: expected an object")
        return data

    async def get(self, endpoint: str, headers: dict[str, str] | None = None) -> dict[str, Any]:
        return await self._request("GET", endpoint, headers=headers)

    async def post(
        self,
        endpoint: str,
        json: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        return await self._request("POST", endpoint, json=json, headers=headers)
