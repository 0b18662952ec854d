"""
Application-level exceptions.

- RemoteFetchError: HTTP/network failure at any layer (retryable).
- MalformedDataError: response or transaction shape does not match the API contract.
- RetryExhaustedError: raised by the retry wrapper after the attempt budget is spent.
- UnknownVertexError: graph edge requested for a vertex that was never added.
"""

from __future__ import annotations


class TxGraphError(Exception):
    """Base class for all txgraph errors."""


class RemoteFetchError(TxGraphError):
    """Explorer request failed: transport error or non-2xx response."""

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class MalformedDataError(TxGraphError):
    """Payload is missing a required field or has an unexpected type."""


class RetryExhaustedError(TxGraphError):
    """All attempts of a retried operation failed."""

    def __init__(self, message: str, *, attempts: int, last_error: BaseException | None = None) -> None:
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class UnknownVertexError(TxGraphError, KeyError):
    """add_edge called with a vertex that is not in the graph."""

    def __init__(self, vertex: str) -> None:
        super().__init__(vertex)
        self.vertex = vertex

    def __str__(self) -> str:
        return f"unknown vertex: {self.vertex}"
