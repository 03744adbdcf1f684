"""Client composition root: build and lifecycle-manage concrete dependencies.

Composition may: import concrete classes, call factories, store interface types,
manage high-level lifecycle.
"""
from __future__ import annotations

import asyncio
from typing import Any

from loguru import logger

from dogpatch.app.config.settings import Settings
from dogpatch.app.core import SERVICE_NAME
from dogpatch.app.domain.dogpatch_client import DogPatchClient
from dogpatch.app.infrastructure.dispatch.factory import create_response_queue
from dogpatch.app.infrastructure.http.factory import create_transport
from dogpatch.app.ports.dispatch_target import DispatchTarget
from dogpatch.app.ports.transport import Transport


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class ClientDependencies:
    """Holds wired client dependencies and their lifecycle."""

    def __init__(
        self,
        *,
        settings: Settings,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._settings = settings
        self._loop = loop
        self._transport: Transport | None = None
        self._response_queue: DispatchTarget | None = None
        self._client: DogPatchClient | None = None
        self._connected = False

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            raise RuntimeError("transport is not initialized")
        return self._transport

    @property
    def response_queue(self) -> DispatchTarget | None:
        return self._response_queue

    @property
    def client(self) -> DogPatchClient:
        if self._client is None:
            raise RuntimeError("client is not initialized")
        return self._client

    def connect(self) -> None:
        self._transport = create_transport(self._settings)
        self._response_queue = create_response_queue(self._settings, loop=self._loop)
        self._client = DogPatchClient(
            self._settings.base_url,
            self._transport,
            response_queue=self._response_queue,
        )
        self._connected = True
        _log(
            "client_ready",
            base_url=self._settings.base_url,
            response_queue=self._settings.response_queue_backend,
        )

    def close(self) -> None:
        if self._transport is not None:
            try:
                self._transport.close()
            except Exception as exc:
                logger.warning("transport close failed: {}", exc)
            self._transport = None

        close_queue = getattr(self._response_queue, "close", None)
        if close_queue is not None:
            try:
                close_queue()
            except Exception as exc:
                logger.warning("response queue close failed: {}", exc)

        self._response_queue = None
        self._client = None
        self._connected = False


def create_client_dependencies(
    settings: Settings | None = None,
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> ClientDependencies:
    return ClientDependencies(settings=settings or Settings(), loop=loop)
