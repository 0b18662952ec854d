"""
Application settings.

Typed, validated view of the environment (see config/env.py) for the explorer
client, the fetch pipeline and the retry policy. get_settings() is cached;
call get_settings.cache_clear() after changing the environment (tests do).
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from txgraph.config.env import get_api_url, get_block_hash, get_float, get_int, load_txgraph_env

DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_CHUNK_SIZE = 25
DEFAULT_PAGE_CONCURRENCY = 4
DEFAULT_TX_CONCURRENCY = 20
DEFAULT_PARENT_CONCURRENCY = 2
DEFAULT_RETRY_MAX_TRIES = 3
DEFAULT_RETRY_INTERVAL = 0.5
DEFAULT_RETRY_BACKOFF = 1.0


@dataclass(frozen=True)
class Settings:
    """Run configuration. Concurrency caps and page size must be >= 1."""

    api_url: str
    block_hash: str
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    chunk_size: int = DEFAULT_CHUNK_SIZE
    page_concurrency: int = DEFAULT_PAGE_CONCURRENCY
    tx_concurrency: int = DEFAULT_TX_CONCURRENCY
    parent_concurrency: int = DEFAULT_PARENT_CONCURRENCY
    retry_max_tries: int = DEFAULT_RETRY_MAX_TRIES
    retry_interval: float = DEFAULT_RETRY_INTERVAL
    retry_backoff: float = DEFAULT_RETRY_BACKOFF

    def __post_init__(self) -> None:
        if not self.api_url.strip():
            raise ValueError("api_url must be non-empty")
        for name in ("chunk_size", "page_concurrency", "tx_concurrency", "parent_concurrency", "retry_max_tries"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        if self.retry_interval < 0:
            raise ValueError("retry_interval must be >= 0")
        if self.retry_backoff < 1:
            raise ValueError("retry_backoff must be >= 1")

    def replace(self, **overrides: Any) -> "Settings":
        """Copy with some fields changed; None values are ignored."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build Settings from environment variables (and .env)."""
    load_txgraph_env()
    return Settings(
        api_url=get_api_url(),
        block_hash=get_block_hash(),
        request_timeout=get_float("TXGRAPH_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        chunk_size=get_int("TXGRAPH_CHUNK_SIZE", DEFAULT_CHUNK_SIZE),
        page_concurrency=get_int("TXGRAPH_PAGE_CONCURRENCY", DEFAULT_PAGE_CONCURRENCY),
        tx_concurrency=get_int("TXGRAPH_TX_CONCURRENCY", DEFAULT_TX_CONCURRENCY),
        parent_concurrency=get_int("TXGRAPH_PARENT_CONCURRENCY", DEFAULT_PARENT_CONCURRENCY),
        retry_max_tries=get_int("TXGRAPH_RETRY_MAX_TRIES", DEFAULT_RETRY_MAX_TRIES),
        retry_interval=get_float("TXGRAPH_RETRY_INTERVAL", DEFAULT_RETRY_INTERVAL),
        retry_backoff=get_float("TXGRAPH_RETRY_BACKOFF", DEFAULT_RETRY_BACKOFF),
    )
