"""
Block metadata and paginated bulk transaction fetch.

Both steps are fatal on failure: without the full transaction list no graph
can be built, so errors propagate and no partial result is returned.
"""

from __future__ import annotations

from txgraph.core.concurrency import bounded_map
from txgraph.core.exceptions import MalformedDataError
from txgraph.explorer.client import ExplorerClient
from txgraph.explorer.models import BlockMetadata, Transaction
from txgraph.pipeline.pagination import CHUNK_SIZE, get_page_sizes, get_page_start_indexes
from txgraph.txgraph_logging import get_logger

logger = get_logger(__name__)

# Max in-flight page requests; keeps the explorer from rate limiting us
PAGE_CONCURRENCY = 4


async def fetch_block_metadata(client: ExplorerClient, block_hash: str) -> BlockMetadata:
    """Resolve a block hash to its metadata. No retry."""
    meta = await client.get_block_info(block_hash)
    logger.info("block_metadata_fetched", block_hash=block_hash, tx_count=meta.tx_count, height=meta.height)
    return meta


async def fetch_all_txs_by_block(
    client: ExplorerClient,
    block_hash: str,
    *,
    chunk_size: int = CHUNK_SIZE,
    concurrency: int = PAGE_CONCURRENCY,
) -> list[Transaction]:
    """
    Fetch every transaction of the block, one request per page.

    Pages are requested with at most `concurrency` in flight; the result is
    the concatenation of pages in page-index order. Any failing page fails
    the whole fetch.
    """
    meta = await fetch_block_metadata(client, block_hash)
    page_sizes = get_page_sizes(meta.tx_count, chunk_size)
    starts = get_page_start_indexes(page_sizes, chunk_size)
    logger.info(
        "block_txs_fetch_started",
        block_hash=block_hash,
        tx_count=meta.tx_count,
        pages=len(page_sizes),
        concurrency=concurrency,
    )

    async def _fetch_page(page: tuple[int, int]) -> list[Transaction]:
        start, size = page
        txs = await client.get_block_txs_page(block_hash, start)
        if len(txs) < size:
            raise MalformedDataError(
                f"block {block_hash} page at {start}: expected {size} transactions, got {len(txs)}"
            )
        logger.debug("block_txs_page_fetched", block_hash=block_hash, start_index=start, count=size)
        return txs[:size]

    pages = await bounded_map(_fetch_page, list(zip(starts, page_sizes)), concurrency)
    txs = [tx for page in pages for tx in page]
    logger.info("block_txs_fetched", block_hash=block_hash, tx_count=len(txs), pages=len(pages))
    return txs
