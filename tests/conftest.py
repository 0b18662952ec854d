"""
Pytest fixtures for txgraph tests. The explorer API is faked with httpx.MockTransport,
so no test touches the network.
"""

from __future__ import annotations

import asyncio
import hashlib
import re
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import httpx
import pytest

from txgraph.config.settings import Settings, get_settings
from txgraph.explorer.client import ExplorerClient

BASE_URL = "https://explorer.test/api"
BLOCK_HASH = "0000000000000000000aaa00000000000000000000000000000000000000beef"
OTHER_BLOCK = "0000000000000000000bbb00000000000000000000000000000000000000cafe"

_BLOCK_RE = re.compile(r"^/api/block/(?P<hash>[0-9a-f]+)$")
_PAGE_RE = re.compile(r"^/api/block/(?P<hash>[0-9a-f]+)/txs/(?P<start>\d+)$")
_STATUS_RE = re.compile(r"^/api/tx/(?P<txid>[^/]+)/status$")


def txid(label: str) -> str:
    """Stable 64-hex txid for a short test label."""
    return hashlib.sha256(label.encode()).hexdigest()


A, B, C, X, U = (txid(label) for label in "ABCXU")


def tx_payload(txid: str, *parents: str) -> dict[str, Any]:
    """Explorer-shaped transaction spending output 0 of each parent."""
    return {
        "txid": txid,
        "vin": [{"txid": p, "vout": 0, "is_coinbase": False} for p in parents],
        "vout": [{"value": 1000}],
    }


def coinbase_payload(txid: str) -> dict[str, Any]:
    return {"txid": txid, "vin": [{"is_coinbase": True, "txid": "0" * 64, "vout": 4294967295}]}


def confirmed_in(block_hash: str) -> dict[str, Any]:
    return {"confirmed": True, "block_hash": block_hash, "block_height": 800000}


UNCONFIRMED = {"confirmed": False}


class FakeExplorer:
    """
    In-memory Esplora-style API.

    blocks: block hash -> list of transaction payloads
    statuses: txid -> status payload
    failures: request path -> number of HTTP 500 responses to serve before succeeding
    page_delays: start index -> seconds to wait before answering that page
    """

    def __init__(self, page_size: int = 25) -> None:
        self.page_size = page_size
        self.blocks: dict[str, list[dict[str, Any]]] = {}
        self.statuses: dict[str, Any] = {}
        self.failures: dict[str, int] = {}
        self.page_delays: dict[int, float] = {}
        self.requests: list[str] = []
        self.in_flight: dict[str, int] = {"page": 0, "status": 0}
        self.max_in_flight: dict[str, int] = {"page": 0, "status": 0}

    def add_block(self, block_hash: str, txs: list[dict[str, Any]]) -> None:
        self.blocks[block_hash] = txs
        for tx in txs:
            self.statuses.setdefault(tx["txid"], confirmed_in(block_hash))

    def count(self, path: str) -> int:
        return sum(1 for p in self.requests if p == path)

    async def _tracked(self, kind: str, delay: float) -> None:
        self.in_flight[kind] += 1
        self.max_in_flight[kind] = max(self.max_in_flight[kind], self.in_flight[kind])
        try:
            await asyncio.sleep(delay)
        finally:
            self.in_flight[kind] -= 1

    async def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append(path)
        if self.failures.get(path, 0) > 0:
            self.failures[path] -= 1
            return httpx.Response(500, text="upstream error")

        m = _PAGE_RE.match(path)
        if m:
            start = int(m["start"])
            await self._tracked("page", self.page_delays.get(start, 0.001))
            txs = self.blocks.get(m["hash"])
            if txs is None:
                return httpx.Response(404, text="Block not found")
            return httpx.Response(200, json=txs[start:start + self.page_size])

        m = _BLOCK_RE.match(path)
        if m:
            txs = self.blocks.get(m["hash"])
            if txs is None:
                return httpx.Response(404, text="Block not found")
            return httpx.Response(200, json={"id": m["hash"], "height": 800000, "tx_count": len(txs)})

        m = _STATUS_RE.match(path)
        if m:
            await self._tracked("status", 0.001)
            if m["txid"] not in self.statuses:
                return httpx.Response(404, text="Transaction not found")
            return httpx.Response(200, json=self.statuses[m["txid"]])

        return httpx.Response(404, text="not found")

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @asynccontextmanager
    async def client(self) -> AsyncIterator[ExplorerClient]:
        async with httpx.AsyncClient(transport=self.transport()) as http:
            async with ExplorerClient(BASE_URL, client=http) as client:
                yield client


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Drop TXGRAPH_* env vars and the cached settings around every test."""
    for name in (
        "TXGRAPH_API_URL",
        "TXGRAPH_NETWORK",
        "TXGRAPH_BLOCK_HASH",
        "TXGRAPH_REQUEST_TIMEOUT",
        "TXGRAPH_CHUNK_SIZE",
        "TXGRAPH_PAGE_CONCURRENCY",
        "TXGRAPH_TX_CONCURRENCY",
        "TXGRAPH_PARENT_CONCURRENCY",
        "TXGRAPH_RETRY_MAX_TRIES",
        "TXGRAPH_RETRY_INTERVAL",
        "TXGRAPH_RETRY_BACKOFF",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Default caps and retry budget, but no wait between attempts."""
    return Settings(api_url=BASE_URL, block_hash=BLOCK_HASH, retry_interval=0.0)


@pytest.fixture
def fake_explorer() -> FakeExplorer:
    return FakeExplorer()


@pytest.fixture
def chain_explorer(fake_explorer) -> FakeExplorer:
    """
    Block with A -> B -> C: B spends A, C spends B.

    A also spends X (confirmed in another block); C also spends U (unconfirmed).
    """
    fake_explorer.add_block(BLOCK_HASH, [tx_payload(A, X), tx_payload(B, A), tx_payload(C, B, U)])
    fake_explorer.statuses[X] = confirmed_in(OTHER_BLOCK)
    fake_explorer.statuses[U] = UNCONFIRMED
    return fake_explorer
