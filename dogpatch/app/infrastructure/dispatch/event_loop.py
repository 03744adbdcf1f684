"""Response queue that posts callbacks onto an asyncio event loop.

The loop's thread plays the role of a UI main thread: state it owns is only
touched from callbacks delivered here.
"""
from __future__ import annotations

import asyncio
from typing import Any, Callable


class EventLoopDispatchTarget:
    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def submit(self, fn: Callable[[], Any]) -> asyncio.Handle:
        return self._loop.call_soon_threadsafe(fn)

    def is_current(self) -> bool:
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            return False

    def close(self) -> None:
        """The loop belongs to the caller; nothing to release."""
