"""Unit tests for response queue implementations and their factory."""
from __future__ import annotations

import asyncio
import threading

import pytest

from dogpatch.app.config.settings import Settings
from dogpatch.app.infrastructure.dispatch.event_loop import EventLoopDispatchTarget
from dogpatch.app.infrastructure.dispatch.factory import create_response_queue
from dogpatch.app.infrastructure.dispatch.serial_queue import SerialQueueDispatchTarget
from dogpatch.app.ports.dispatch_target import DispatchTarget


def _settings(**env: str) -> Settings:
    return Settings(_env_file=None, **env)


def test_serial_queue_runs_in_order_on_its_own_thread():
    queue = SerialQueueDispatchTarget("serial-test")
    seen: list[tuple[int, str, bool]] = []

    try:
        for i in range(5):
            queue.submit(lambda i=i: seen.append((i, threading.current_thread().name, queue.is_current())))
    finally:
        queue.close(wait=True)

    assert [i for i, _, _ in seen] == [0, 1, 2, 3, 4]
    assert {name for _, name, _ in seen} == {seen[0][1]}
    assert seen[0][1].startswith("serial-test")
    assert all(current for _, _, current in seen)


def test_serial_queue_is_not_current_from_caller():
    queue = SerialQueueDispatchTarget("serial-caller")
    try:
        assert queue.is_current() is False
        assert isinstance(queue, DispatchTarget)
    finally:
        queue.close()


def test_serial_queue_rejects_work_after_close():
    queue = SerialQueueDispatchTarget("serial-closed")
    queue.close()

    with pytest.raises(RuntimeError):
        queue.submit(lambda: None)


@pytest.mark.asyncio
async def test_event_loop_target_runs_submissions_from_other_threads_on_loop():
    loop = asyncio.get_running_loop()
    target = EventLoopDispatchTarget(loop)
    ran = asyncio.Event()
    observed: list[bool] = []

    def callback() -> None:
        observed.append(target.is_current())
        ran.set()

    worker = threading.Thread(target=lambda: target.submit(callback))
    worker.start()
    worker.join()

    await asyncio.wait_for(ran.wait(), timeout=1.0)
    assert observed == [True]
    assert target.loop is loop


def test_event_loop_target_is_not_current_outside_loop():
    loop = asyncio.new_event_loop()
    try:
        assert EventLoopDispatchTarget(loop).is_current() is False
    finally:
        loop.close()


def test_factory_inline_backend_returns_none():
    assert create_response_queue(_settings(DOGPATCH_RESPONSE_QUEUE_BACKEND="inline")) is None


def test_factory_serial_backend_uses_label():
    queue = create_response_queue(
        _settings(
            DOGPATCH_RESPONSE_QUEUE_BACKEND=" Serial ",
            DOGPATCH_RESPONSE_QUEUE_LABEL="from-settings",
        )
    )
    try:
        assert isinstance(queue, SerialQueueDispatchTarget)
        assert queue.label == "from-settings"
    finally:
        queue.close()


def test_factory_event_loop_backend_requires_loop():
    settings = _settings(DOGPATCH_RESPONSE_QUEUE_BACKEND="event_loop")

    with pytest.raises(ValueError, match="requires a loop"):
        create_response_queue(settings)

    loop = asyncio.new_event_loop()
    try:
        queue = create_response_queue(settings, loop=loop)
        assert isinstance(queue, EventLoopDispatchTarget)
        assert queue.loop is loop
    finally:
        loop.close()


def test_factory_unknown_backend_raises():
    with pytest.raises(ValueError, match="Unsupported response queue backend: carrier-pigeon"):
        create_response_queue(_settings(DOGPATCH_RESPONSE_QUEUE_BACKEND="carrier-pigeon"))


def test_serial_queue_logs_failing_callable_and_keeps_running(error_logs):
    queue = SerialQueueDispatchTarget("serial-failing")
    ran: list[int] = []

    def boom() -> None:
        raise ValueError("bad callback")

    try:
        queue.submit(boom)
        queue.submit(lambda: ran.append(1))
    finally:
        queue.close(wait=True)

    assert ran == [1]
    assert [r["level"].name for r in error_logs] == ["ERROR"]
    assert "serial-failing" in error_logs[0]["message"]
