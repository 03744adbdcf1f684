from __future__ import annotations

import pytest
from loguru import logger

from dogpatch.app.domain.dogpatch_client import DogPatchClient
from tests.fakes import FakeTransport
from tests.test_data import BASE_URL


@pytest.fixture()
def base_url() -> str:
    return BASE_URL


@pytest.fixture()
def fake_transport():
    transport = FakeTransport()
    yield transport
    transport.close()


@pytest.fixture()
def client(base_url: str, fake_transport: FakeTransport) -> DogPatchClient:
    return DogPatchClient(base_url, fake_transport, response_queue=None)


@pytest.fixture()
def error_logs():
    """Collects loguru records at ERROR and above."""
    records: list[dict] = []
    sink_id = logger.add(lambda message: records.append(message.record), level="ERROR")
    yield records
    logger.remove(sink_id)
