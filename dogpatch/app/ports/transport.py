"""Transport port: contract for issuing GET requests with a completion handler.

Domain code depends on this port; infrastructure (e.g. httpx) implements it and
tests substitute a double that captures the request and fires the handler on
demand. Keeps domain free of infrastructure imports.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Protocol, runtime_checkable


class HttpClientError(Exception):
    """Base for transport failures (network, connectivity, etc.)."""


class HttpClientTimeoutError(HttpClientError):
    """Raised when the request times out."""


class HttpClientCancelledError(HttpClientError):
    """Delivered when a task is cancelled before it completes."""


@runtime_checkable
class HttpResponse(Protocol):
    """Minimal read-only view of an HTTP response."""

    @property
    def headers(self) -> Mapping[str, str]: ...

    @property
    def status_code(self) -> int: ...

    @property
    def url(self) -> str: ...


@dataclass(frozen=True)
class RequestTimeout:
    """Connect and read timeouts in seconds."""

    connect_seconds: float
    read_seconds: float


CompletionHandler = Callable[
    [bytes | None, HttpResponse | None, BaseException | None],
    None,
]


@runtime_checkable
class DataTask(Protocol):
    """In-flight request handle returned by Transport.data_task()."""

    @property
    def url(self) -> str: ...

    @property
    def state(self) -> str:
        """One of TASK_STATE."""
        ...

    def resume(self) -> None:
        """Start the request. No-op if already started."""
        ...

    def cancel(self) -> None: ...


@runtime_checkable
class Transport(Protocol):
    """Port: create GET tasks. Implementations live in infrastructure."""

    def data_task(self, url: str, completion_handler: CompletionHandler) -> DataTask:
        """Create a task for url in CREATED state; handler fires at most once, on any thread."""
        ...

    def close(self) -> None:
        """Release resources (e.g. connection pool). No-op allowed if nothing to close."""
        ...
