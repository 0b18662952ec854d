"""
Parent resolution: which inputs of a transaction come from the same block.

For one transaction, look up the confirmation status of every distinct
parent txid (bounded concurrency) and keep the parents confirmed in the
target block. resolve_parents_with_retry wraps the whole lookup for one
transaction in the retry policy; MalformedDataError is never retried.
"""

from __future__ import annotations

from txgraph.config.settings import Settings
from txgraph.core.concurrency import bounded_map
from txgraph.core.exceptions import MalformedDataError, RemoteFetchError
from txgraph.core.retry import with_retry
from txgraph.explorer.client import ExplorerClient
from txgraph.explorer.models import Transaction, TransactionStatus, is_valid_txid

# Max in-flight status lookups per transaction
PARENT_CONCURRENCY = 2


def immediate_parents(tx: Transaction) -> list[str]:
    """
    Distinct parent txids referenced by the inputs, first occurrence first.

    Raises MalformedDataError when an input names something that is not a
    64-hex txid; such an id cannot be looked up.
    """
    seen: set[str] = set()
    out: list[str] = []
    for vin in tx.vin:
        if not is_valid_txid(vin.txid):
            raise MalformedDataError(f"transaction {tx.txid}: invalid parent txid {vin.txid!r}")
        if vin.txid not in seen:
            seen.add(vin.txid)
            out.append(vin.txid)
    return out


async def resolve_parents(
    client: ExplorerClient,
    tx: Transaction,
    block_hash: str,
    *,
    concurrency: int = PARENT_CONCURRENCY,
) -> list[TransactionStatus]:
    """Statuses of the parents of `tx` that are confirmed in `block_hash`, in input order."""
    parents = immediate_parents(tx)
    statuses = await bounded_map(client.get_tx_status, parents, concurrency)
    return [s for s in statuses if s.in_block(block_hash)]


async def resolve_parents_with_retry(
    client: ExplorerClient,
    tx: Transaction,
    block_hash: str,
    *,
    settings: Settings,
) -> list[TransactionStatus]:
    """resolve_parents under the retry policy; raises RetryExhaustedError when all attempts fail."""
    return await with_retry(
        resolve_parents,
        client,
        tx,
        block_hash,
        concurrency=settings.parent_concurrency,
        max_tries=settings.retry_max_tries,
        interval=settings.retry_interval,
        backoff=settings.retry_backoff,
        exceptions=(RemoteFetchError,),
    )
