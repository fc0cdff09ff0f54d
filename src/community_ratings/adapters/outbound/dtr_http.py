"""
DestinyTracker Ratings Adapter
==============================

HTTP client for the DestinyTracker bulk review-fetch endpoint.
One POST per batch; every failure is mapped to RatingsAPIError.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import TypeAdapter, ValidationError

from community_ratings.domain.entities import FetchResponse
from community_ratings.ports.ratings_api import (
    RatingsAPI,
    RatingsAPIError,
    RatingsServiceUnavailableError,
)

if TYPE_CHECKING:
    from community_ratings.domain.entities import ActivityMode, FetchRequest, Platform
    from community_ratings.infrastructure.config import RatingsServiceSettings

logger = logging.getLogger(__name__)

_RESPONSES = TypeAdapter(list[FetchResponse])


class DestinyTrackerAdapter(RatingsAPI):
    """
    Adapter for the DestinyTracker external reviews API.

    Holds a pooled httpx client between ``connect`` and ``disconnect``.
    """

    def __init__(
        self,
        settings: RatingsServiceSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the adapter.

        Args:
            settings: Ratings service configuration.
            transport: Optional httpx transport (used by tests).
        """
        self._settings = settings
        self._base_url = settings.base_url.rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._available = False

        self._limits = httpx.Limits(
            max_connections=settings.max_connections,
            max_keepalive_connections=max(1, settings.max_connections // 2),
        )

    @property
    def source_name(self) -> str:
        return "DestinyTracker"

    @property
    def is_available(self) -> bool:
        return self._available

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self) -> dict[str, str]:
        headers = {
            "User-Agent": self._settings.user_agent,
            "Accept": "application/json",
        }
        api_key = self._settings.api_key.get_secret_value()
        if api_key:
            headers["X-API-Key"] = api_key
        return headers

    async def connect(self) -> None:
        """Initialize the HTTP client."""
        if self._client is not None:
            return

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._settings.timeout_seconds),
            limits=self._limits,
            headers=self._headers(),
            transport=self._transport,
            follow_redirects=True,
        )
        # No probe request: the service is rate limited, so reachability
        # is only learned from real fetches.
        self._available = True
        logger.info(f"{self.source_name} client ready: {self._base_url}")

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
        self._available = False
        logger.info(f"{self.source_name} disconnected")

    async def health_check(self) -> bool:
        return self._client is not None and self._available

    async def fetch_batch(
        self,
        batch: list[FetchRequest],
        platform: Platform | int,
        mode: ActivityMode | int,
    ) -> list[FetchResponse]:
        """POST one batch to the fetch endpoint and decode the responses."""
        if not self._client:
            raise RatingsAPIError("Client not connected")

        payload = [item.model_dump(by_alias=True, exclude_none=True) for item in batch]
        params = {"platform": int(platform), "mode": int(mode)}

        try:
            response = await self._client.post(
                self._settings.fetch_path, params=params, json=payload
            )
        except httpx.HTTPError as e:
            raise RatingsAPIError(f"{self.source_name} request failed: {e}") from e

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> list[FetchResponse]:
        """Map a raw HTTP response to fetch responses or a RatingsAPIError."""
        if response.status_code == 503:
            self._available = False
            raise RatingsServiceUnavailableError(
                f"{self.source_name} is unavailable", status_code=503
            )

        if not response.is_success:
            message = self._error_message(response)
            raise RatingsAPIError(
                f"{self.source_name} returned {response.status_code}: {message}",
                status_code=response.status_code,
            )

        self._available = True

        try:
            data = response.json()
        except ValueError as e:
            raise RatingsAPIError(
                "malformed payload: response is not JSON", status_code=response.status_code
            ) from e

        if not isinstance(data, list):
            raise RatingsAPIError(
                "malformed payload: expected a list of items",
                status_code=response.status_code,
            )

        try:
            return _RESPONSES.validate_python(data)
        except ValidationError as e:
            raise RatingsAPIError(
                f"malformed payload: {e.error_count()} invalid item field(s)",
                status_code=response.status_code,
            ) from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Extract the service's error message, falling back to the reason phrase."""
        try:
            body: Any = response.json()
        except ValueError:
            return response.reason_phrase or "unknown error"
        if isinstance(body, dict):
            for field in ("message", "Message", "error"):
                if body.get(field):
                    return str(body[field])
        return response.reason_phrase or "unknown error"
