"""Serial response queue backed by a single dedicated worker thread."""
from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

from loguru import logger


class SerialQueueDispatchTarget:
    """Runs submitted callables one at a time, in order, on one named thread.

    A callable that raises is logged; the queue keeps running.
    """

    def __init__(self, label: str = "dogpatch-response") -> None:
        self._label = label
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=label)

    @property
    def label(self) -> str:
        return self._label

    def submit(self, fn: Callable[[], Any]) -> Future[Any]:
        future = self._executor.submit(fn)
        future.add_done_callback(self._log_failure)
        return future

    def _log_failure(self, future: Future[Any]) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.opt(exception=exc).error("callback on response queue {} failed: {}", self._label, exc)

    def is_current(self) -> bool:
        """True when called from this queue's worker thread."""
        return threading.current_thread().name.startswith(f"{self._label}_")

    def close(self, wait: bool = True) -> None:
        """Stop accepting work; with wait, run what is already queued first."""
        self._executor.shutdown(wait=wait)
