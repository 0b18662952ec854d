"""
Console report for a graph snapshot: one line per vertex with its adjacency count.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TextIO

from txgraph.graph.tx_graph import GraphSnapshot


def format_report(snapshot: GraphSnapshot) -> list[str]:
    return [f"Txn >> {v.txid} {v.degree}" for v in snapshot.vertices]


def print_graph(snapshot: GraphSnapshot, file: TextIO | None = None) -> None:
    out = file or sys.stdout
    for line in format_report(snapshot):
        print(line, file=out)


def save_json(snapshot: GraphSnapshot, path: Path) -> None:
    """Write the snapshot as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(snapshot.to_dict(), f, indent=2)
