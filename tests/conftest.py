"""Pytest fixtures for cloud-queue tests."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from cloud_queue.config import HeartbeatConfig, InMemoryConfig, SnsConfig, SqsConfig
from cloud_queue.memory import InMemoryBroker
from cloud_queue.message import RECEIPT_HANDLE, Message

QUEUE_URL = "https://sqs.us-east-1.amazonaws.com/123456789012/test-queue"
TOPIC_ARN = "arn:aws:sns:us-east-1:123456789012:test-topic"


class FakeClock:
    """Manually advanced clock for in-memory visibility tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_message(
    message_id: str = "m1", receipt_handle: str | None = "rh-1", body: str = "hello"
) -> Message:
    attributes: dict[str, object] = {}
    if receipt_handle is not None:
        attributes[RECEIPT_HANDLE] = receipt_handle
    return Message(body=body, id=message_id, attributes=attributes)


@pytest.fixture
def sqs_config() -> SqsConfig:
    return SqsConfig(region="us-east-1", queue_url=QUEUE_URL)


@pytest.fixture
def sqs_heartbeat_config() -> SqsConfig:
    return SqsConfig(
        region="us-east-1",
        queue_url=QUEUE_URL,
        heartbeat_config=HeartbeatConfig(heartbeat_interval=5, executor_pool_size=2),
    )


@pytest.fixture
def sns_config() -> SnsConfig:
    return SnsConfig(region="us-east-1", topic_arn=TOPIC_ARN)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def broker(clock: FakeClock) -> InMemoryBroker:
    return InMemoryBroker(clock=clock)


@pytest.fixture
def memory_config() -> InMemoryConfig:
    return InMemoryConfig(queue_name="jobs", visibility_timeout=30)


@pytest.fixture
def mock_transport() -> MagicMock:
    """Consumer/producer transport with every call mocked."""
    transport = MagicMock()
    transport.send = AsyncMock()
    transport.receive = AsyncMock(return_value=[])
    transport.delete_message = AsyncMock()
    transport.change_message_visibility = AsyncMock()
    transport.close = AsyncMock()
    transport.health_check = AsyncMock(return_value=True)
    return transport


@pytest.fixture
def mock_aws_client() -> MagicMock:
    client = MagicMock()
    client.send_message = AsyncMock(return_value={"MessageId": "sent-1"})
    client.receive_message = AsyncMock(return_value={"Messages": []})
    client.delete_message = AsyncMock(return_value={})
    client.change_message_visibility = AsyncMock(return_value={})
    client.publish = AsyncMock(return_value={"MessageId": "pub-1"})
    return client


@pytest.fixture
def mock_connection(mock_aws_client: MagicMock) -> MagicMock:
    conn = MagicMock()
    conn.get_client = AsyncMock(return_value=mock_aws_client)
    conn.close = AsyncMock()
    conn.health_check = AsyncMock(return_value=True)
    return conn


@pytest.fixture
def message_factory() -> Callable[..., Message]:
    return make_message
