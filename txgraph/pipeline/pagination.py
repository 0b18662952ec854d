"""
Page layout for fetching a block's transactions in fixed-size chunks.
"""

from __future__ import annotations

CHUNK_SIZE = 25


def get_page_sizes(total: int, chunk_size: int = CHUNK_SIZE) -> list[int]:
    """
    Sizes of the pages needed to cover `total` transactions.

    Every page holds `chunk_size` entries except the last, which holds the
    remainder. Sizes sum to `total`; total == 0 gives no pages.
    """
    if total < 0:
        raise ValueError("total must be >= 0")
    if chunk_size < 1:
        raise ValueError("chunk_size must be >= 1")
    sizes: list[int] = []
    counter = 0
    while counter < total:
        sizes.append(min(chunk_size, total - counter))
        counter += chunk_size
    return sizes


def get_page_start_indexes(page_sizes: list[int], chunk_size: int = CHUNK_SIZE) -> list[int]:
    """Start index of each page (the {start_index} of the txs endpoint)."""
    return [i * chunk_size for i in range(len(page_sizes))]
