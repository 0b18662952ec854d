"""
Graph assembly from a block's transactions.

Every transaction is resolved concurrently (outer cap, default 20), each
resolution itself fanning out over its parents (inner cap). A transaction
whose resolution fails, even after retries, is logged and contributes no
edges; the build always completes.
"""

from __future__ import annotations

from dataclasses import dataclass

from txgraph.config.settings import Settings
from txgraph.core.concurrency import bounded_map
from txgraph.core.exceptions import MalformedDataError, RetryExhaustedError
from txgraph.explorer.client import ExplorerClient
from txgraph.explorer.models import Transaction
from txgraph.graph.tx_graph import TransactionGraph
from txgraph.pipeline.resolver import resolve_parents_with_retry
from txgraph.txgraph_logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class BuildResult:
    """Graph plus per-transaction outcome counts."""

    graph: TransactionGraph
    resolved: int
    failed: tuple[str, ...]

    @property
    def complete(self) -> bool:
        return not self.failed


async def build_graph(
    client: ExplorerClient,
    txs: list[Transaction],
    block_hash: str,
    *,
    settings: Settings,
    graph: TransactionGraph | None = None,
) -> BuildResult:
    """
    Resolve in-block parents for every transaction and link them in the graph.

    For each parent confirmed in `block_hash`, the parent and the child are
    added as vertices (no-op when present) and one edge joins them. Edges of
    a transaction are only added after its resolution succeeded, so a retried
    attempt never adds an edge twice.
    """
    graph = graph if graph is not None else TransactionGraph()

    async def _resolve(tx: Transaction) -> bool:
        try:
            parents = await resolve_parents_with_retry(client, tx, block_hash, settings=settings)
        except RetryExhaustedError as e:
            logger.warning(
                "tx_resolution_failed",
                block_hash=block_hash,
                txid=tx.txid,
                reason="retry_exhausted",
                attempts=e.attempts,
                error=str(e.last_error),
            )
            return False
        except MalformedDataError as e:
            logger.warning(
                "tx_resolution_failed",
                block_hash=block_hash,
                txid=tx.txid,
                reason="malformed_data",
                error=str(e),
            )
            return False
        for parent in parents:
            graph.add_vertex(parent.tx_id)
            graph.add_vertex(tx.txid)
            graph.add_edge(parent.tx_id, tx.txid)
        return True

    outcomes = await bounded_map(_resolve, txs, settings.tx_concurrency)
    failed = tuple(tx.txid for tx, ok in zip(txs, outcomes) if not ok)
    result = BuildResult(graph=graph, resolved=len(txs) - len(failed), failed=failed)
    logger.info(
        "graph_built",
        block_hash=block_hash,
        transactions=len(txs),
        resolved=result.resolved,
        failed=len(failed),
        vertices=graph.vertex_count,
        edges=graph.edge_count,
    )
    return result
