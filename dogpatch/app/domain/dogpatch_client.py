"""DogPatch API client: issues the dogs GET, classifies the response, delivers the outcome.

Uses the Transport port; the transport is built in the composition root (or a test
double is injected). Completion callbacks are redirected onto the optional response
queue; without one they run inline on whatever thread the transport answers on.
"""
from __future__ import annotations

import threading
from concurrent.futures import Future
from typing import Any, Callable
from urllib.parse import urljoin, urlsplit

from loguru import logger

from dogpatch.app.constants import DOGS_PATH, REQUEST_STATE
from dogpatch.app.core import SERVICE_NAME
from dogpatch.app.domain.models import DecodeError, Dog, decode_dogs
from dogpatch.app.domain.outcome import Failure, Outcome, Success, completion_args
from dogpatch.app.ports.dispatch_target import DispatchTarget
from dogpatch.app.ports.transport import DataTask, HttpResponse, Transport

DogsCompletion = Callable[[list[Dog] | None, BaseException | None], None]


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class _RequestExchange:
    """Lifecycle of a single get_dogs call. Lives in the handler closure, never on the client."""

    def __init__(self, url: str) -> None:
        self.url = url
        self._state = REQUEST_STATE.CREATED
        self._lock = threading.Lock()

    @property
    def state(self) -> str:
        return self._state

    def mark_dispatched(self) -> None:
        with self._lock:
            # the transport may already have answered synchronously from resume()
            if self._state == REQUEST_STATE.CREATED:
                self._state = REQUEST_STATE.DISPATCHED

    def claim_response(self) -> bool:
        """True for the first response only."""
        with self._lock:
            if self._state not in (REQUEST_STATE.CREATED, REQUEST_STATE.DISPATCHED):
                return False
            self._state = REQUEST_STATE.RESPONSE_RECEIVED
            return True

    def advance(self, state: str) -> None:
        with self._lock:
            self._state = state


class DogPatchClient:
    """Fetches the dogs collection through an injectable Transport.

    base_url is fixed at construction and must be absolute; request URLs are
    resolved relative to it. The client holds no per-request state, so concurrent
    get_dogs calls do not interfere.
    """

    def __init__(
        self,
        base_url: str,
        transport: Transport,
        response_queue: DispatchTarget | None = None,
    ) -> None:
        parts = urlsplit(base_url)
        if not parts.scheme or not parts.netloc:
            raise ValueError(f"base_url must be an absolute URL: {base_url!r}")
        self._base_url = base_url
        self._transport = transport
        self._response_queue = response_queue

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def response_queue(self) -> DispatchTarget | None:
        return self._response_queue

    @property
    def dogs_url(self) -> str:
        return urljoin(self._base_url, DOGS_PATH)

    def get_dogs(self, completion: DogsCompletion) -> DataTask:
        """Start fetching dogs; completion fires exactly once with (dogs, None) or (None, error).

        A non-200 response without a transport error is reported as (None, None).
        Returns the started task without waiting for the response.
        """

        def deliver(outcome: Outcome) -> None:
            dogs, error = completion_args(outcome)
            completion(dogs, error)

        return self._fetch(deliver)

    def get_dogs_outcome(self) -> Future[Outcome]:
        """Start fetching dogs; the returned future resolves once, on the response queue if set."""
        future: Future[Outcome] = Future()
        future.set_running_or_notify_cancel()
        self._fetch(future.set_result)
        return future

    def _fetch(self, deliver: Callable[[Outcome], None]) -> DataTask:
        url = self.dogs_url
        exchange = _RequestExchange(url)

        def handle_response(
            data: bytes | None,
            response: HttpResponse | None,
            error: BaseException | None,
        ) -> None:
            if not exchange.claim_response():
                logger.warning("ignoring repeated response for {} (state {})", url, exchange.state)
                return
            outcome = self._classify(data, response, error)
            exchange.advance(REQUEST_STATE.CLASSIFIED)
            _log(
                "dogs_response_classified",
                url=url,
                outcome=type(outcome).__name__,
                status_code=getattr(response, "status_code", None),
            )
            self._dispatch_result(outcome, deliver, exchange)

        task = self._transport.data_task(url, handle_response)
        exchange.mark_dispatched()
        _log("dogs_request_dispatched", url=url)
        task.resume()
        return task

    @staticmethod
    def _classify(
        data: bytes | None,
        response: HttpResponse | None,
        error: BaseException | None,
    ) -> Outcome:
        if response is None or response.status_code != 200 or error is not None or data is None:
            # transport error wins; a bare non-200 yields Failure(None)
            return Failure(error)
        try:
            return Success(decode_dogs(data))
        except DecodeError as exc:
            return Failure(exc)

    def _dispatch_result(
        self,
        outcome: Outcome,
        deliver: Callable[[Outcome], None],
        exchange: _RequestExchange,
    ) -> None:
        def run() -> None:
            exchange.advance(REQUEST_STATE.DELIVERED)
            deliver(outcome)

        queue = self._response_queue
        if queue is None:
            run()
            return
        exchange.advance(REQUEST_STATE.REDIRECTING)
        queue.submit(run)
