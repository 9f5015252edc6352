from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

import httpx

from refollow.config import Settings, get_settings
from refollow.errors import UpstreamError
from refollow.logging import get_logger

LOGGER = get_logger(__name__)

QueryParams = Mapping[str, Any]


class Upstream(Protocol):
    def call(self, path: str, query: Optional[QueryParams] = None) -> Any:
        ...


class NeynarClient:
    """Authenticated JSON requests against the Neynar API."""

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._owns_client = http_client is None
        self.http = http_client or httpx.Client(
            base_url=self.settings.neynar_base_url,
            timeout=self.settings.upstream_timeout_seconds,
        )
        self.headers = {
            "x-api-key": self.settings.neynar_api_key,
            "Content-Type": "application/json",
        }

    def call(self, path: str, query: Optional[QueryParams] = None) -> Any:
        LOGGER.debug("GET %s %s", path, dict(query or {}))
        try:
            response = self.http.get(path, params=query, headers=self.headers)
        except httpx.HTTPError as exc:
            LOGGER.error("Neynar request to %s failed: %s", path, exc)
            raise UpstreamError(None, str(exc)) from exc

        if not response.is_success:
            body = response.text
            LOGGER.error("Neynar error response (%d) for %s: %s", response.status_code, path, body)
            raise UpstreamError(response.status_code, body)

        try:
            return response.json()
        except ValueError as exc:
            LOGGER.error("Neynar returned a non-JSON body for %s", path)
            raise UpstreamError(response.status_code, response.text) from exc

    def close(self) -> None:
        if self._owns_client:
            self.http.close()

    def __enter__(self) -> "NeynarClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["NeynarClient", "QueryParams", "Upstream"]
