"""
Build the same-block transaction dependency graph for one block.

How to run:
    From project root (optionally with .env configured):
        python -m txgraph 000000000000000000076c036ff5119e5a5a74df77abf64203473364509f7732
    Or with a JSON snapshot:
        python -m txgraph <block_hash> --json data/graph.json

Env:
    TXGRAPH_API_URL      explorer base URL (default https://blockstream.info/api)
    TXGRAPH_NETWORK      mainnet (default) or testnet, when TXGRAPH_API_URL is unset
    TXGRAPH_BLOCK_HASH   block used when no argument is given
    LOG_LEVEL / LOG_FORMAT  structured logging (stderr)

Output:
    stdout: one line per vertex, "Txn >> <txid> <adjacent count>"
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from txgraph.config.settings import get_settings
from txgraph.core.exceptions import TxGraphError
from txgraph.graph.report import print_graph, save_json
from txgraph.pipeline.runner import run_sync
from txgraph.txgraph_logging import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="txgraph",
        description="Build the parent/child graph of transactions confirmed in one block.",
    )
    parser.add_argument("block_hash", nargs="?", default=None, help="Block hash (default: TXGRAPH_BLOCK_HASH)")
    parser.add_argument("--api-url", type=str, default=None, help="Explorer API base URL")
    parser.add_argument("--timeout", type=float, default=None, help="Per-request timeout in seconds")
    parser.add_argument("--json", type=Path, default=None, dest="json_path", help="Write graph snapshot JSON here")
    parser.add_argument("--quiet", action="store_true", help="Do not print the per-vertex report")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings().replace(api_url=args.api_url, request_timeout=args.timeout)
        result = run_sync(args.block_hash, settings)
    except (TxGraphError, ValueError) as e:
        logger.exception("txgraph_run_failed", error=str(e))
        print("ERROR:", e, file=sys.stderr)
        return 1

    snapshot = result.graph.snapshot()
    if not args.quiet:
        print_graph(snapshot)
    if args.json_path is not None:
        save_json(snapshot, args.json_path)
        logger.info("graph_json_saved", path=str(args.json_path), vertices=snapshot.vertex_count)
    if result.failed:
        print(f"WARN: {len(result.failed)} transaction(s) could not be resolved; graph may be incomplete", file=sys.stderr)
    return 0
