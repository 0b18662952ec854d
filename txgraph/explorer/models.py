"""
Data models for block-explorer API responses.

Frozen dataclasses built from the JSON payloads of the Esplora-style API
(/block/{hash}, /block/{hash}/txs/{start}, /tx/{txid}/status). Only the
fields the graph pipeline uses are kept; anything else is ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from txgraph.core.exceptions import MalformedDataError


def _require_dict(payload: Any, what: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise MalformedDataError(f"{what}: expected object, got {type(payload).__name__}")
    return payload


TXID_RE = re.compile(r"^[0-9a-fA-F]{64}$")


def _is_txid(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def is_valid_txid(value: Any) -> bool:
    """True for a 64-character hex transaction id."""
    return isinstance(value, str) and TXID_RE.match(value) is not None


@dataclass(frozen=True)
class BlockMetadata:
    """Block summary from GET /block/{hash}."""

    block_hash: str
    tx_count: int
    height: int | None = None

    @classmethod
    def from_api(cls, block_hash: str, payload: Any) -> "BlockMetadata":
        data = _require_dict(payload, "block info")
        tx_count = data.get("tx_count")
        # bool is an int subclass; reject it explicitly
        if not isinstance(tx_count, int) or isinstance(tx_count, bool) or tx_count < 0:
            raise MalformedDataError(f"block info: invalid tx_count {tx_count!r}")
        height = data.get("height")
        return cls(
            block_hash=block_hash,
            tx_count=tx_count,
            height=height if isinstance(height, int) else None,
        )


@dataclass(frozen=True)
class TxInput:
    """One input (vin entry): the parent txid and output index it spends."""

    txid: str
    vout: int | None = None


@dataclass(frozen=True)
class Transaction:
    """
    Transaction as listed in a block page.

    Coinbase inputs spend no previous output and are dropped, so a coinbase
    transaction has an empty `vin`.
    """

    txid: str
    vin: tuple[TxInput, ...]

    @classmethod
    def from_api(cls, payload: Any) -> "Transaction":
        data = _require_dict(payload, "transaction")
        txid = data.get("txid")
        if not _is_txid(txid):
            raise MalformedDataError(f"transaction: invalid txid {txid!r}")
        raw_vin = data.get("vin")
        if not isinstance(raw_vin, list):
            raise MalformedDataError(f"transaction {txid}: missing or invalid vin")
        inputs: list[TxInput] = []
        for i, item in enumerate(raw_vin):
            entry = _require_dict(item, f"transaction {txid} vin[{i}]")
            if entry.get("is_coinbase"):
                continue
            parent = entry.get("txid")
            if not _is_txid(parent):
                raise MalformedDataError(f"transaction {txid} vin[{i}]: invalid txid {parent!r}")
            vout = entry.get("vout")
            inputs.append(TxInput(txid=parent, vout=vout if isinstance(vout, int) else None))
        return cls(txid=txid, vin=tuple(inputs))


@dataclass(frozen=True)
class TransactionStatus:
    """Confirmation status from GET /tx/{txid}/status."""

    tx_id: str
    confirmed: bool
    block_hash: str | None = None
    block_height: int | None = None

    @classmethod
    def from_api(cls, tx_id: str, payload: Any) -> "TransactionStatus":
        data = _require_dict(payload, f"tx status {tx_id}")
        confirmed = data.get("confirmed")
        if not isinstance(confirmed, bool):
            raise MalformedDataError(f"tx status {tx_id}: invalid confirmed {confirmed!r}")
        block_hash = data.get("block_hash")
        height = data.get("block_height")
        return cls(
            tx_id=tx_id,
            confirmed=confirmed,
            block_hash=block_hash if isinstance(block_hash, str) else None,
            block_height=height if isinstance(height, int) else None,
        )

    def in_block(self, block_hash: str) -> bool:
        """True when this transaction is confirmed in the given block."""
        return self.block_hash is not None and self.block_hash == block_hash
