"""
txgraph: same-block transaction dependency graph builder.

Fetches every transaction of one block from a block-explorer API in bounded
pages, resolves each transaction's inputs to parent transactions confirmed in
the same block, and assembles an undirected parent/child adjacency graph.
"""

__version__ = "0.1.0"
