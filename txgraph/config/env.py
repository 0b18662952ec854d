"""
Environment variable loading for txgraph.

- TXGRAPH_API_URL: block-explorer API base URL (default: Blockstream mainnet)
- TXGRAPH_BLOCK_HASH: block to analyse when none is given on the command line
- TXGRAPH_*: numeric tuning knobs, see config/settings.py
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is txgraph/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

BLOCKSTREAM_API_URL = "https://blockstream.info/api"
BLOCKSTREAM_TESTNET_API_URL = "https://blockstream.info/testnet/api"
DEFAULT_BLOCK_HASH = "000000000000000000076c036ff5119e5a5a74df77abf64203473364509f7732"


def load_txgraph_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides set vars."""
    load_dotenv(_ENV_PATH)


def get_api_url() -> str:
    """
    Resolve explorer API base URL from env.
    Order: TXGRAPH_API_URL > TXGRAPH_NETWORK=testnet > Blockstream mainnet.
    """
    load_txgraph_env()
    url = (os.getenv("TXGRAPH_API_URL") or "").strip()
    if url:
        return url.rstrip("/")
    network = (os.getenv("TXGRAPH_NETWORK") or "mainnet").strip().lower()
    if network == "testnet":
        return BLOCKSTREAM_TESTNET_API_URL
    return BLOCKSTREAM_API_URL


def get_block_hash() -> str:
    """Return TXGRAPH_BLOCK_HASH from env, or the default block."""
    load_txgraph_env()
    return (os.getenv("TXGRAPH_BLOCK_HASH") or "").strip() or DEFAULT_BLOCK_HASH


def get_int(name: str, default: int) -> int:
    """Integer env var; unset or unparsable values fall back to default."""
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_float(name: str, default: float) -> float:
    """Float env var; unset or unparsable values fall back to default."""
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default
