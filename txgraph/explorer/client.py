"""
Async client for an Esplora-style block-explorer HTTP API.

Responsibilities:
- GET /block/{hash}                   -> BlockMetadata
- GET /block/{hash}/txs/{start_index} -> list[Transaction] (one page)
- GET /tx/{txid}/status               -> TransactionStatus
- Map transport errors and non-2xx responses to RemoteFetchError and
  unexpected payloads to MalformedDataError. No retry at this layer.
"""

from __future__ import annotations

from typing import Any

import httpx

from txgraph.core.exceptions import MalformedDataError, RemoteFetchError
from txgraph.explorer.models import BlockMetadata, Transaction, TransactionStatus
from txgraph.txgraph_logging import get_logger

logger = get_logger(__name__)

REQUEST_TIMEOUT = 30.0


class ExplorerClient:
    """
    Thin async wrapper over httpx.AsyncClient for the three read-only endpoints.

    Use as an async context manager. When an httpx.AsyncClient is passed in,
    it is used as-is and left open on exit (the caller owns it).
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = REQUEST_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not base_url.strip():
            raise ValueError("base_url must be non-empty")
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> "ExplorerClient":
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._timeout))
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _get_json(self, path: str) -> Any:
        """GET base_url + path and decode JSON; raise RemoteFetchError / MalformedDataError."""
        if self._client is None:
            raise RuntimeError("ExplorerClient used outside 'async with'")
        url = f"{self._base_url}{path}"
        try:
            resp = await self._client.get(url, timeout=self._timeout)
        except httpx.InvalidURL as e:
            raise MalformedDataError(f"GET {url!r}: not a valid URL: {e}") from e
        except httpx.HTTPError as e:
            raise RemoteFetchError(f"GET {url} failed: {e!r}", url=url) from e
        logger.debug("explorer_request", url=url, status_code=resp.status_code)
        if resp.status_code < 200 or resp.status_code >= 300:
            raise RemoteFetchError(
                f"GET {url} returned HTTP {resp.status_code}",
                url=url,
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise MalformedDataError(f"GET {url}: response is not JSON") from e

    async def get_block_info(self, block_hash: str) -> BlockMetadata:
        data = await self._get_json(f"/block/{block_hash}")
        return BlockMetadata.from_api(block_hash, data)

    async def get_block_txs_page(self, block_hash: str, start_index: int) -> list[Transaction]:
        """Fetch one page of a block's transactions starting at start_index."""
        data = await self._get_json(f"/block/{block_hash}/txs/{start_index}")
        if not isinstance(data, list):
            raise MalformedDataError(
                f"block {block_hash} txs page {start_index}: expected array, got {type(data).__name__}"
            )
        return [Transaction.from_api(item) for item in data]

    async def get_tx_status(self, tx_id: str) -> TransactionStatus:
        data = await self._get_json(f"/tx/{tx_id}/status")
        return TransactionStatus.from_api(tx_id, data)
