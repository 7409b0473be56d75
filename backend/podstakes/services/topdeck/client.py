from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import httpx

from .config import TopdeckConfig
from .exceptions import (
    TopdeckAPIError,
    TopdeckAuthError,
    TopdeckNotFoundError,
    TopdeckRateLimitError,
    TopdeckServerError,
)
from .models import Tournament

logger = logging.getLogger(__name__)


class TopdeckClient:
    def __init__(
        self,
        config: TopdeckConfig | None = None,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or TopdeckConfig()
        self.api_key = api_key or ""
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

        logger.debug(
            f"Initialized TopdeckClient (base_url={self.config.base_url}, "
            f"auth={'enabled' if self.api_key else 'disabled'})"
        )

    async def __aenter__(self) -> TopdeckClient:
        limits = httpx.Limits(
            max_connections=self.config.max_connections,
            max_keepalive_connections=self.config.max_keepalive_connections,
        )
        headers = {}
        if self.api_key:
            headers[self.config.api_key_header] = self.api_key
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            limits=limits,
            headers=headers,
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type | None,
        exc_val: Exception | None,
        exc_tb: Any,
    ) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.debug("Closed TopdeckClient")

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError(
                "TopdeckClient must be used as async context manager"
            )
        return self._client

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        attempts = max(1, self.config.max_retries)
        retry_count = 0
        last_error: TopdeckAPIError | None = None

        while retry_count < attempts:
            try:
                response = await self.client.request(
                    method=method,
                    url=endpoint,
                    params=params,
                )
            except httpx.TimeoutException as e:
                last_error = TopdeckAPIError(f"Timeout requesting {endpoint}: {e}")
                retry_count += 1
                if retry_count < attempts:
                    logger.warning(f"Timeout, retrying ({retry_count})...")
                    await asyncio.sleep(2)
                continue
            except httpx.RequestError as e:
                logger.error(f"Network error: {e}")
                raise TopdeckAPIError(f"Network error requesting {endpoint}: {e}") from e

            status = response.status_code
            if status in (401, 403):
                raise TopdeckAuthError("Authentication failed", status_code=status)
            elif status == 404:
                raise TopdeckNotFoundError(
                    f"Resource not found: {endpoint}", status_code=404
                )
            elif status == 429 or status >= 500:
                if status == 429:
                    last_error = TopdeckRateLimitError(
                        "Rate limit exceeded", status_code=429
                    )
                else:
                    last_error = TopdeckServerError(
                        f"Server error {status}", status_code=status
                    )
                retry_count += 1
                if retry_count < attempts:
                    wait_time = 2 ** retry_count
                    logger.warning(f"{last_error}, retrying in {wait_time}s...")
                    await asyncio.sleep(wait_time)
                continue
            elif status >= 400:
                raise TopdeckAPIError(
                    f"Request to {endpoint} failed with {status}", status_code=status
                )

            try:
                data = response.json()
            except ValueError as e:
                raise TopdeckAPIError(f"Invalid JSON from {endpoint}: {e}") from e
            if not isinstance(data, dict):
                raise TopdeckAPIError(f"Unexpected payload from {endpoint}")
            return data

        raise last_error or TopdeckAPIError(f"Request to {endpoint} failed")

    async def get_tournament(self, tournament_id: str) -> Tournament:
        # The id is one path segment; dot segments would be collapsed by URL merging.
        if tournament_id in (".", ".."):
            raise TopdeckAPIError(f"Invalid tournament id: {tournament_id!r}")
        endpoint = f"tournaments/{quote(tournament_id, safe='')}"
        data = await self._request("GET", endpoint)
        return Tournament.from_api(data, tournament_id=tournament_id)

    async def search_players(self, query: str) -> list[dict[str, Any]]:
        data = await self._request("GET", "players", params={"search": query})
        players = data.get("players")
        return players if isinstance(players, list) else []


def create_topdeck_client(
    api_key: str | None = None,
    config: TopdeckConfig | None = None,
) -> TopdeckClient:
    return TopdeckClient(config or TopdeckConfig(), api_key)
