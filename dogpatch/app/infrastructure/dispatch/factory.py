"""Response queue factory: selects implementation from config. Only place that imports concrete targets."""
from __future__ import annotations

import asyncio

from dogpatch.app.config.settings import Settings
from dogpatch.app.constants import RESPONSE_QUEUE_BACKEND
from dogpatch.app.infrastructure.dispatch.event_loop import EventLoopDispatchTarget
from dogpatch.app.infrastructure.dispatch.serial_queue import SerialQueueDispatchTarget
from dogpatch.app.ports.dispatch_target import DispatchTarget


def create_response_queue(
    settings: Settings,
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> DispatchTarget | None:
    """None means completions run inline on the transport's thread."""
    backend = settings.response_queue_backend.strip().lower()

    if backend == RESPONSE_QUEUE_BACKEND.INLINE:
        return None

    if backend == RESPONSE_QUEUE_BACKEND.SERIAL:
        return SerialQueueDispatchTarget(settings.response_queue_label)

    if backend == RESPONSE_QUEUE_BACKEND.EVENT_LOOP:
        if loop is None:
            raise ValueError("event_loop response queue requires a loop")
        return EventLoopDispatchTarget(loop)

    raise ValueError(f"Unsupported response queue backend: {backend}")
