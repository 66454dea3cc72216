#!/usr/bin/env python3
"""
TzKT API Client

Async REST client for the TzKT Tezos indexer.

API Documentation: https://api.tzkt.io

Endpoints used:
- GET /v1/accounts/{address}             account type, balance, reveal status
- GET /v1/blocks/count                   current block count
- GET /v1/accounts/{address}/operations  cursor-paginated operation history

Transport failures are raised as IndexerError; retries and backoff are left
to the caller.
"""

import logging
from typing import Any

import aiohttp

from ..core.config import IndexerConfig
from .models import TzktAccount, TzktOperation

logger = logging.getLogger(__name__)


class IndexerError(Exception):
    """Raised when a TzKT request fails or returns an unexpected payload."""

    def __init__(self, message: str, url: str | None = None, status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


class TzktClient:
    """
    TzKT indexer client.

    Usage:
        async with TzktClient(config) as client:
            account = await client.get_account_by_address("tz1...")
            ops = await client.get_account_operations("tz1...", last_id=None)
    """

    def __init__(self, config: IndexerConfig | None = None, session: aiohttp.ClientSession | None = None):
        self.config = config or IndexerConfig()
        self._session = session
        self._owns_session = session is None

    async def start(self) -> None:
        """Open the HTTP session if one was not supplied."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout)
            )

    async def close(self) -> None:
        """Close the HTTP session if this client opened it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "TzktClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET a JSON document from the indexer."""
        if self._session is None:
            raise IndexerError("TzktClient used before start()")

        url = f"{self.config.base_url}{path}"
        logger.debug(f"GET {url} {params or {}}")
        try:
            async with self._session.get(url, params=params) as response:
                if response.status != 200:
                    raise IndexerError(
                        f"TzKT request failed with HTTP {response.status}: {url}",
                        url=url,
                        status=response.status,
                    )
                return await response.json()
        except aiohttp.ClientError as e:
            raise IndexerError(f"TzKT request error for {url}: {e}", url=url) from e

    async def get_account_by_address(self, address: str) -> TzktAccount:
        """
        Get account metadata.

        API: GET /v1/accounts/{address}
        """
        data = await self._get_json(f"/v1/accounts/{address}")
        if not isinstance(data, dict) or "type" not in data:
            raise IndexerError(f"Unexpected account payload for {address}")
        return TzktAccount.from_dict(data)

    async def get_block_count(self) -> int:
        """
        Get the number of blocks in the chain.

        API: GET /v1/blocks/count
        """
        data = await self._get_json("/v1/blocks/count")
        try:
            return int(data)
        except (TypeError, ValueError) as e:
            raise IndexerError(f"Unexpected block count payload: {data!r}") from e

    async def get_account_operations(self, address: str, last_id: int | None = None) -> list[TzktOperation]:
        """
        Get one page of operations, oldest first.

        API: GET /v1/accounts/{address}/operations?sort=0&limit=N[&lastId=]

        Args:
            address: Account address
            last_id: ``id`` of the last operation of the previous page

        Returns:
            Up to ``page_size`` raw operations following ``last_id``
        """
        params: dict[str, Any] = {"sort": 0, "limit": self.config.page_size}
        if last_id is not None:
            params["lastId"] = last_id

        data = await self._get_json(f"/v1/accounts/{address}/operations", params)
        if not isinstance(data, list):
            raise IndexerError(f"Unexpected operations payload for {address}")

        operations = []
        for item in data:
            if not isinstance(item, dict):
                logger.warning(f"Skipping malformed operation item for {address}: {item!r}")
                continue
            operations.append(TzktOperation.from_dict(item))
        return operations
