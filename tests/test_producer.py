"""Tests for the MessageProducer facade."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from cloud_queue.attributes import AttributeDataType, TypedAttribute
from cloud_queue.exceptions import (
    InvalidAttributeError,
    QueueClosedError,
    UnsupportedAttributeTypeError,
    UnsupportedOperationError,
)
from cloud_queue.producer import MessageProducer


class AttributeProducer(MessageProducer[str]):
    SUPPORTS_ATTRIBUTES = True


@pytest.mark.asyncio
async def test_send_body_only(mock_transport: MagicMock) -> None:
    producer: MessageProducer[str] = MessageProducer(mock_transport)
    await producer.send("hello")
    mock_transport.send.assert_awaited_once_with("hello", None)
    assert producer.supports_attributes() is False


@pytest.mark.asyncio
async def test_send_with_serializer(mock_transport: MagicMock) -> None:
    producer: MessageProducer[dict[str, int]] = MessageProducer(
        mock_transport, serializer=json.dumps
    )
    await producer.send({"a": 1})
    mock_transport.send.assert_awaited_once_with('{"a": 1}', None)


@pytest.mark.asyncio
async def test_attributes_rejected_when_unsupported(mock_transport: MagicMock) -> None:
    producer: MessageProducer[str] = MessageProducer(mock_transport)
    with pytest.raises(UnsupportedOperationError, match="not supported"):
        await producer.send("hello", {"k": "v"})
    mock_transport.send.assert_not_awaited()


@pytest.mark.asyncio
async def test_send_converts_attributes(mock_transport: MagicMock) -> None:
    producer = AttributeProducer(mock_transport)
    await producer.send("hello", {"routingKey": "queue2", "priority": 10})
    mock_transport.send.assert_awaited_once_with(
        "hello",
        {
            "routingKey": TypedAttribute(AttributeDataType.STRING, "queue2"),
            "priority": TypedAttribute(AttributeDataType.NUMBER, "10"),
        },
    )


@pytest.mark.asyncio
async def test_empty_attributes_send_none(mock_transport: MagicMock) -> None:
    producer = AttributeProducer(mock_transport)
    await producer.send("hello", {})
    mock_transport.send.assert_awaited_once_with("hello", None)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("attributes", "error"),
    [
        ({"k": None}, InvalidAttributeError),
        ({"k": [1, 2]}, UnsupportedAttributeTypeError),
    ],
)
async def test_bad_attributes_never_send(
    mock_transport: MagicMock, attributes: dict[str, object], error: type[Exception]
) -> None:
    producer = AttributeProducer(mock_transport)
    with pytest.raises(error):
        await producer.send("hello", attributes)
    mock_transport.send.assert_not_awaited()


@pytest.mark.asyncio
async def test_send_after_close_raises(mock_transport: MagicMock) -> None:
    producer = AttributeProducer(mock_transport)
    await producer.close()
    with pytest.raises(QueueClosedError):
        await producer.send("hello")


@pytest.mark.asyncio
async def test_close_idempotent_and_swallows_errors(mock_transport: MagicMock) -> None:
    mock_transport.close.side_effect = RuntimeError("boom")
    producer = AttributeProducer(mock_transport)
    await producer.close()
    await producer.close()
    assert producer.closed
    mock_transport.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_context_manager_and_health_check(mock_transport: MagicMock) -> None:
    async with AttributeProducer(mock_transport) as producer:
        assert await producer.health_check() is True
    assert producer.closed
