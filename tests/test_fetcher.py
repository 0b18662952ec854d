"""
Tests for block metadata + paginated bulk fetch: page layout, concurrency cap,
page-order output, all-or-nothing failure.
"""

from __future__ import annotations

import pytest

from tests.conftest import BLOCK_HASH, tx_payload
from txgraph.core.exceptions import MalformedDataError, RemoteFetchError
from txgraph.pipeline.fetcher import fetch_all_txs_by_block, fetch_block_metadata


def _block_of(n: int) -> list[dict]:
    return [tx_payload(f"tx{i:04d}") for i in range(n)]


@pytest.mark.asyncio
async def test_fetch_block_metadata(chain_explorer):
    async with chain_explorer.client() as client:
        meta = await fetch_block_metadata(client, BLOCK_HASH)
    assert meta.tx_count == 3


@pytest.mark.asyncio
async def test_fetch_all_requests_one_page_per_chunk(fake_explorer):
    fake_explorer.add_block(BLOCK_HASH, _block_of(60))
    async with fake_explorer.client() as client:
        txs = await fetch_all_txs_by_block(client, BLOCK_HASH)
    assert [tx.txid for tx in txs] == [f"tx{i:04d}" for i in range(60)]
    pages = sorted(p for p in fake_explorer.requests if "/txs/" in p)
    assert pages == [f"/api/block/{BLOCK_HASH}/txs/{s}" for s in (0, 25, 50)]


@pytest.mark.asyncio
async def test_fetch_all_caps_concurrency_and_keeps_page_order(fake_explorer):
    fake_explorer.add_block(BLOCK_HASH, _block_of(250))
    # earlier pages answer last
    fake_explorer.page_delays = {start: 0.002 * (10 - i) for i, start in enumerate(range(0, 250, 25))}
    async with fake_explorer.client() as client:
        txs = await fetch_all_txs_by_block(client, BLOCK_HASH, concurrency=4)
    assert [tx.txid for tx in txs] == [f"tx{i:04d}" for i in range(250)]
    assert fake_explorer.max_in_flight["page"] == 4


@pytest.mark.asyncio
async def test_fetch_all_empty_block(fake_explorer):
    fake_explorer.add_block(BLOCK_HASH, [])
    async with fake_explorer.client() as client:
        txs = await fetch_all_txs_by_block(client, BLOCK_HASH)
    assert txs == []
    assert fake_explorer.requests == [f"/api/block/{BLOCK_HASH}"]


@pytest.mark.asyncio
async def test_fetch_all_is_all_or_nothing(fake_explorer):
    fake_explorer.add_block(BLOCK_HASH, _block_of(100))
    fake_explorer.failures[f"/api/block/{BLOCK_HASH}/txs/50"] = 1
    async with fake_explorer.client() as client:
        with pytest.raises(RemoteFetchError):
            await fetch_all_txs_by_block(client, BLOCK_HASH)
    # no retry at this layer
    assert fake_explorer.count(f"/api/block/{BLOCK_HASH}/txs/50") == 1


@pytest.mark.asyncio
async def test_fetch_all_metadata_failure_is_fatal(fake_explorer):
    async with fake_explorer.client() as client:
        with pytest.raises(RemoteFetchError):
            await fetch_all_txs_by_block(client, BLOCK_HASH)
    assert not any("/txs/" in p for p in fake_explorer.requests)


@pytest.mark.asyncio
async def test_short_page_is_malformed(fake_explorer):
    fake_explorer.add_block(BLOCK_HASH, _block_of(30))
    fake_explorer.page_size = 20
    async with fake_explorer.client() as client:
        with pytest.raises(MalformedDataError):
            await fetch_all_txs_by_block(client, BLOCK_HASH)


@pytest.mark.asyncio
async def test_custom_chunk_size(fake_explorer):
    fake_explorer.add_block(BLOCK_HASH, _block_of(7))
    fake_explorer.page_size = 3
    async with fake_explorer.client() as client:
        txs = await fetch_all_txs_by_block(client, BLOCK_HASH, chunk_size=3, concurrency=1)
    assert len(txs) == 7
    assert fake_explorer.max_in_flight["page"] == 1
