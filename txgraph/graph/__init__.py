"""
Transaction graph and its report/export helpers.
"""

from txgraph.graph.report import format_report, print_graph, save_json
from txgraph.graph.tx_graph import GraphSnapshot, TransactionGraph, VertexReport

__all__ = [
    "GraphSnapshot",
    "TransactionGraph",
    "VertexReport",
    "format_report",
    "print_graph",
    "save_json",
]
