"""Port: execution context onto which completion callbacks are redirected.

Any concurrent.futures.Executor satisfies it. Absence of a target means the
callback runs inline on the transport's thread.
"""
from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class DispatchTarget(Protocol):
    def submit(self, fn: Callable[[], Any]) -> Any:
        """Schedule fn asynchronously; must not block until fn runs."""
        ...
