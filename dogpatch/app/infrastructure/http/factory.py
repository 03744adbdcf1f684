"""Transport factory: builds a Transport from settings (no provider logic in composition)."""
from __future__ import annotations

import httpx

from dogpatch.app.config.settings import Settings
from dogpatch.app.infrastructure.http.httpx_transport import HttpxTransport
from dogpatch.app.ports.transport import RequestTimeout, Transport


def create_transport(settings: Settings) -> Transport:
    """Build the httpx transport. Timeouts are applied per-request by the adapter."""
    headers: dict[str, str] | None = None
    if settings.user_agent:
        headers = {"User-Agent": settings.user_agent}
    return HttpxTransport(
        httpx.Client(),
        timeout=RequestTimeout(
            connect_seconds=settings.connect_timeout_seconds,
            read_seconds=settings.read_timeout_seconds,
        ),
        max_workers=settings.transport_max_workers,
        headers=headers,
    )
