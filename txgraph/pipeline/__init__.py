"""
Fetch → resolve → build pipeline.

Block metadata and paginated transaction fetch (fatal on failure), per
transaction parent resolution with retry (best effort), graph assembly.
"""

from txgraph.pipeline.builder import BuildResult, build_graph
from txgraph.pipeline.fetcher import fetch_all_txs_by_block, fetch_block_metadata
from txgraph.pipeline.pagination import get_page_sizes, get_page_start_indexes
from txgraph.pipeline.resolver import immediate_parents, resolve_parents, resolve_parents_with_retry
from txgraph.pipeline.runner import run, run_sync

__all__ = [
    "BuildResult",
    "build_graph",
    "fetch_all_txs_by_block",
    "fetch_block_metadata",
    "get_page_sizes",
    "get_page_start_indexes",
    "immediate_parents",
    "resolve_parents",
    "resolve_parents_with_retry",
    "run",
    "run_sync",
]
