"""
Block-explorer API client and response models.
"""

from txgraph.explorer.client import ExplorerClient
from txgraph.explorer.models import BlockMetadata, Transaction, TransactionStatus, TxInput

__all__ = ["BlockMetadata", "ExplorerClient", "Transaction", "TransactionStatus", "TxInput"]
