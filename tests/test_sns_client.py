"""Unit tests for the SNS client and producer."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from cloud_queue.config import SnsConfig
from cloud_queue.exceptions import TransportError
from cloud_queue.sns import SnsClient, SnsProducer

TOPIC_ARN = "arn:aws:sns:us-east-1:123456789012:test-topic"


@pytest.mark.asyncio
async def test_publish_body_only(
    sns_config: SnsConfig, mock_connection: MagicMock, mock_aws_client: MagicMock
) -> None:
    client = SnsClient(sns_config, connection=mock_connection)
    await client.publish("hello")
    mock_aws_client.publish.assert_awaited_once_with(
        TopicArn=TOPIC_ARN, Message="hello"
    )


@pytest.mark.asyncio
async def test_producer_publishes_with_attributes(
    sns_config: SnsConfig, mock_connection: MagicMock, mock_aws_client: MagicMock
) -> None:
    producer: SnsProducer[str] = SnsProducer(
        sns_config, client=SnsClient(sns_config, connection=mock_connection)
    )
    assert producer.supports_attributes() is True
    await producer.send("hello", {"eventType": "created", "version": 2, "ok": True})
    mock_aws_client.publish.assert_awaited_once_with(
        TopicArn=TOPIC_ARN,
        Message="hello",
        MessageAttributes={
            "eventType": {"DataType": "String", "StringValue": "created"},
            "version": {"DataType": "Number", "StringValue": "2"},
            "ok": {"DataType": "String", "StringValue": "true"},
        },
    )


@pytest.mark.asyncio
async def test_publish_failure_is_transport_error(
    sns_config: SnsConfig, mock_connection: MagicMock, mock_aws_client: MagicMock
) -> None:
    mock_aws_client.publish.side_effect = ClientError(
        {"Error": {"Code": "NotFound", "Message": "Topic does not exist"}}, "Publish"
    )
    client = SnsClient(sns_config, connection=mock_connection)
    with pytest.raises(TransportError) as exc_info:
        await client.publish("hello")
    assert exc_info.value.operation == "publish"


@pytest.mark.asyncio
async def test_producer_close_releases_connection(
    sns_config: SnsConfig, mock_connection: MagicMock
) -> None:
    producer: SnsProducer[str] = SnsProducer(
        sns_config, client=SnsClient(sns_config, connection=mock_connection)
    )
    await producer.close()
    await producer.close()
    mock_connection.close.assert_awaited_once()
