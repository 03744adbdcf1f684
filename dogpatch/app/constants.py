"""Client-level constants shared across modules."""
from __future__ import annotations

DOGS_PATH = "dogs"


class TASK_STATE:
    CREATED = "CREATED"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class REQUEST_STATE:
    CREATED = "CREATED"
    DISPATCHED = "DISPATCHED"
    RESPONSE_RECEIVED = "RESPONSE_RECEIVED"
    CLASSIFIED = "CLASSIFIED"
    REDIRECTING = "REDIRECTING"
    DELIVERED = "DELIVERED"


class RESPONSE_QUEUE_BACKEND:
    INLINE = "inline"
    SERIAL = "serial"
    EVENT_LOOP = "event_loop"
