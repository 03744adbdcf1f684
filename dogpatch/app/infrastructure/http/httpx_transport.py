"""Concrete transport using httpx (injected where Transport is needed).

Requests run on a thread pool, so completion handlers fire on a background
worker thread, never on the caller's.
"""
from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

import httpx
from loguru import logger

from dogpatch.app.constants import TASK_STATE
from dogpatch.app.ports.transport import (
    CompletionHandler,
    HttpClientCancelledError,
    HttpClientError,
    HttpClientTimeoutError,
    HttpResponse,
    RequestTimeout,
    Transport,
)


class _HttpxResponseAdapter:
    """Adapts httpx.Response to the HttpResponse protocol."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._response.headers)

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def url(self) -> str:
        return str(self._response.url)

    def __repr__(self) -> str:
        return f"<HttpResponse {self.status_code} {self.url}>"


class HttpxDataTask:
    """DataTask whose request is sent on the transport's thread pool once resumed."""

    def __init__(
        self,
        url: str,
        completion_handler: CompletionHandler,
        *,
        send: Callable[[str], httpx.Response],
        executor: ThreadPoolExecutor,
    ) -> None:
        self._url = url
        self._completion_handler = completion_handler
        self._send = send
        self._executor = executor
        self._state = TASK_STATE.CREATED
        self._future: Future[None] | None = None
        self._finished = False
        self._lock = threading.Lock()

    @property
    def url(self) -> str:
        return self._url

    @property
    def state(self) -> str:
        return self._state

    def resume(self) -> None:
        with self._lock:
            if self._state != TASK_STATE.CREATED:
                return
            self._state = TASK_STATE.RUNNING
            self._future = self._executor.submit(self._run)

    def cancel(self) -> None:
        with self._lock:
            if self._state in (TASK_STATE.COMPLETED, TASK_STATE.CANCELLED):
                return
            self._state = TASK_STATE.CANCELLED
            future = self._future
        if future is not None:
            future.cancel()
        self._finish_logged(None, None, HttpClientCancelledError(f"request cancelled for {self._url}"))

    def _run(self) -> None:
        if self._state == TASK_STATE.CANCELLED:
            return
        try:
            response = self._send(self._url)
        except httpx.TimeoutException as exc:
            error: HttpClientError = HttpClientTimeoutError(f"timeout while fetching {self._url}")
            error.__cause__ = exc
            self._finish_logged(None, None, error)
            return
        except httpx.HTTPError as exc:
            error = HttpClientError(f"http fetch failed for {self._url}: {exc}")
            error.__cause__ = exc
            self._finish_logged(None, None, error)
            return
        self._finish_logged(response.content, _HttpxResponseAdapter(response), None)

    def _finish_logged(
        self,
        data: bytes | None,
        response: HttpResponse | None,
        error: BaseException | None,
    ) -> None:
        # handler failures are logged on every path; nobody awaits the pool future
        try:
            self._finish(data, response, error)
        except Exception as exc:
            logger.exception("completion handler failed for {}: {}", self._url, exc)

    def _finish(
        self,
        data: bytes | None,
        response: HttpResponse | None,
        error: BaseException | None,
    ) -> None:
        with self._lock:
            if self._finished:
                return
            self._finished = True
            if self._state == TASK_STATE.RUNNING:
                self._state = TASK_STATE.COMPLETED
        self._completion_handler(data, response, error)


class HttpxTransport(Transport):
    """Transport implementation using a shared httpx.Client and a worker pool."""

    def __init__(
        self,
        client: httpx.Client,
        *,
        timeout: RequestTimeout,
        max_workers: int = 4,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._client = client
        self._timeout = httpx.Timeout(
            connect=timeout.connect_seconds,
            read=timeout.read_seconds,
            write=timeout.read_seconds,
            pool=timeout.connect_seconds,
        )
        self._headers = dict(headers) if headers else {}
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="dogpatch-transport",
        )

    def data_task(self, url: str, completion_handler: CompletionHandler) -> HttpxDataTask:
        return HttpxDataTask(
            url,
            completion_handler,
            send=self._get,
            executor=self._executor,
        )

    def _get(self, url: str) -> httpx.Response:
        return self._client.get(
            url,
            timeout=self._timeout,
            follow_redirects=True,
            headers=self._headers,
        )

    def close(self) -> None:
        self._executor.shutdown(wait=True)
        self._client.close()
