"""REST API client with rate limit handling.

This module provides the async HTTP collaborator used by repositories:
- Automatic rate limit handling (429 responses)
- Exponential backoff for server errors (5xx) and transport failures
- JSON request bodies for create/update verbs
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx

from partcache.errors import RemoteRequestFailed
from partcache.http.endpoint import Endpoint
from partcache.logger import logger


DEFAULT_BASE_URL = "https://lorhondel.valzargaming.com/api/v1"

# Retry configuration
MAX_RETRIES = 5
MAX_RATE_LIMIT_RETRIES = 30  # Cap on consecutive 429 retries
INITIAL_BACKOFF = 1.0  # seconds
MAX_BACKOFF = 64.0  # seconds


@dataclass(frozen=True)
class RateLimit:
    """A rate limit reported by the API."""

    is_global: bool
    retry_after: float

    @classmethod
    def from_response(cls, response: httpx.Response) -> "RateLimit":
        """Read the limit from the JSON body, falling back to Retry-After."""
        try:
            data = response.json()
        except Exception:
            data = {}
        if not isinstance(data, dict):
            data = {}
        retry_after = data.get("retry_after")
        if retry_after is None:
            retry_after = response.headers.get("Retry-After", 1.0)
        return cls(is_global=bool(data.get("global", False)), retry_after=float(retry_after))

    def __str__(self) -> str:
        scope = "Global" if self.is_global else "Non-global"
        return f"RATELIMIT {scope}, retry after {self.retry_after} s"


@dataclass
class ApiClient:
    """Async REST API client.

    Handles rate limits and retries automatically. Repositories only see the
    get/post/patch/delete verbs.
    """

    token: str
    user_agent: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    max_retries: int = MAX_RETRIES
    max_rate_limit_retries: int = MAX_RATE_LIMIT_RETRIES

    def __post_init__(self) -> None:
        self._client: httpx.AsyncClient | None = None

    @property
    def headers(self) -> dict[str, str]:
        """Build request headers."""
        return {
            "Authorization": self.token,
            "User-Agent": self.user_agent,
            "Content-Type": "application/json",
        }

    async def __aenter__(self) -> "ApiClient":
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.timeout,
        )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make a request with rate limit and retry handling.

        429s are capped by max_rate_limit_retries and never count as
        attempts; 5xx and transport failures are capped by max_retries.

        Raises:
            RemoteRequestFailed: On a non-retryable status, or once either
                retry budget is spent. Transport failures carry status 0.
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use async with.")

        backoff = INITIAL_BACKOFF
        attempt = 0
        rate_limit_retries = 0
        logger.request(method, path)

        while True:
            try:
                response = await self._client.request(
                    method, path, json=json, params=params
                )
            except (httpx.TimeoutException, httpx.TransportError) as e:
                reason = "timeout" if isinstance(e, httpx.TimeoutException) else str(e)
                if attempt >= self.max_retries:
                    raise RemoteRequestFailed(0, reason) from e
                attempt += 1
                logger.retry(attempt, self.max_retries, backoff, reason)
                await asyncio.sleep(backoff)
                backoff = min(backoff * 2, MAX_BACKOFF)
                continue

            if response.status_code in (200, 201):
                return response.json()

            # No content (e.g., DELETE success)
            if response.status_code == 204:
                return None

            if response.status_code == 429:
                rate_limit_retries += 1
                if rate_limit_retries > self.max_rate_limit_retries:
                    raise RemoteRequestFailed(429, "Max rate limit retries exceeded")
                rate_limit = RateLimit.from_response(response)
                logger.rate_limit(rate_limit)
                await asyncio.sleep(rate_limit.retry_after)
                continue

            if response.status_code >= 500 and attempt < self.max_retries:
                attempt += 1
                logger.retry(
                    attempt, self.max_retries, backoff, f"HTTP {response.status_code}"
                )
                await asyncio.sleep(backoff)
                backoff = min(backoff * 2, MAX_BACKOFF)
                continue

            raise self._error(response)

    @staticmethod
    def _error(response: httpx.Response) -> RemoteRequestFailed:
        """Build the failure for a non-retryable response."""
        body: Any = response.text
        message = response.text
        try:
            body = response.json()
            if isinstance(body, dict):
                message = body.get("message", response.text)
        except Exception:
            pass
        return RemoteRequestFailed(response.status_code, message, body)

    # -------------------------------------------------------------------------
    # Verbs
    # -------------------------------------------------------------------------

    async def get(self, endpoint: Endpoint | str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", str(endpoint), params=params)

    async def post(self, endpoint: Endpoint | str, body: Any = None) -> Any:
        return await self._request("POST", str(endpoint), json=body)

    async def patch(self, endpoint: Endpoint | str, body: Any = None) -> Any:
        return await self._request("PATCH", str(endpoint), json=body)

    async def delete(self, endpoint: Endpoint | str) -> Any:
        return await self._request("DELETE", str(endpoint))
