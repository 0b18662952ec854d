"""
End-to-end run: block hash -> transactions -> in-block parents -> graph.
"""

from __future__ import annotations

import asyncio

import httpx

from txgraph.config.settings import Settings, get_settings
from txgraph.explorer.client import ExplorerClient
from txgraph.pipeline.builder import BuildResult, build_graph
from txgraph.pipeline.fetcher import fetch_all_txs_by_block
from txgraph.txgraph_logging import bind_block


async def run(
    block_hash: str | None = None,
    settings: Settings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> BuildResult:
    """
    Build the same-block dependency graph for `block_hash`.

    Fetch errors (block info or any page) propagate; per-transaction
    resolution errors are absorbed by build_graph.
    """
    settings = settings or get_settings()
    block_hash = block_hash or settings.block_hash
    log = bind_block(block_hash)
    log.info("run_started", api_url=settings.api_url)

    async with ExplorerClient(settings.api_url, timeout=settings.request_timeout, client=http_client) as client:
        txs = await fetch_all_txs_by_block(
            client,
            block_hash,
            chunk_size=settings.chunk_size,
            concurrency=settings.page_concurrency,
        )
        result = await build_graph(client, txs, block_hash, settings=settings)

    log.info(
        "run_finished",
        transactions=len(txs),
        vertices=result.graph.vertex_count,
        edges=result.graph.edge_count,
        failed=len(result.failed),
    )
    return result


def run_sync(
    block_hash: str | None = None,
    settings: Settings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> BuildResult:
    """Blocking wrapper around run() for callers without an event loop."""
    return asyncio.run(run(block_hash, settings, http_client=http_client))
