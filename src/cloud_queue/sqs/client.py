"""SqsClient — request/response mapping onto the aiobotocore SQS client."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any

from ..attributes import decode_attribute
from ..connection import AWSClientManager, translate_errors
from ..message import RECEIPT_HANDLE, Message, Metadata

if TYPE_CHECKING:
    from collections.abc import Mapping

    from aiobotocore.session import AioSession

    from ..attributes import TypedAttribute
    from ..config import SqsConfig

logger = logging.getLogger("cloud_queue.sqs")


class SqsClient:
    """Stateless wrapper over one SQS queue.

    Implements both ``IProducerTransport`` and ``IConsumerTransport``. FIFO
    queues (``.fifo`` URL suffix) get a message group id from the config and a
    fresh deduplication id per send.
    """

    def __init__(
        self,
        config: SqsConfig,
        *,
        connection: AWSClientManager | None = None,
        session: AioSession | None = None,
        **client_kwargs: Any,
    ) -> None:
        """Configure client.

        Args:
            config: Queue configuration.
            connection: Shared connection manager; built from config if None.
            session: Optional aiobotocore session for the default connection.
            **client_kwargs: Extra ``create_client`` kwargs for the default connection.
        """
        self._config = config
        self._connection = connection or AWSClientManager(
            "sqs",
            config.region,
            endpoint_url=config.endpoint,
            session=session,
            **client_kwargs,
        )

    @property
    def queue_url(self) -> str:
        return self._config.queue_url

    async def send(
        self, body: str, attributes: Mapping[str, TypedAttribute] | None = None
    ) -> None:
        """Enqueue *body* with already-converted *attributes*."""
        send_kwargs: dict[str, Any] = {
            "QueueUrl": self._config.queue_url,
            "MessageBody": body,
        }
        if attributes:
            send_kwargs["MessageAttributes"] = {
                key: value.to_aws() for key, value in attributes.items()
            }
        if self._config.is_fifo:
            send_kwargs["MessageGroupId"] = self._config.message_group_id
            send_kwargs["MessageDeduplicationId"] = str(uuid.uuid4())
        with translate_errors("send_message"):
            client = await self._connection.get_client()
            out = await client.send_message(**send_kwargs)
        logger.debug("Sent message %s to %s", out.get("MessageId"), self.queue_url)

    async def receive(self, timeout: int) -> list[Message]:
        """Receive up to ``max_number_of_messages``, waiting *timeout* seconds."""
        receive_kwargs: dict[str, Any] = {
            "QueueUrl": self._config.queue_url,
            "MaxNumberOfMessages": self._config.max_number_of_messages,
            "WaitTimeSeconds": timeout,
            "MessageAttributeNames": ["All"],
            "MessageSystemAttributeNames": ["All"],
        }
        if self._config.visibility_timeout is not None:
            receive_kwargs["VisibilityTimeout"] = self._config.visibility_timeout
        with translate_errors("receive_message"):
            client = await self._connection.get_client()
            out = await client.receive_message(**receive_kwargs)
        return [_build_message(raw) for raw in out.get("Messages", [])]

    async def delete_message(self, receipt_handle: str) -> None:
        with translate_errors("delete_message"):
            client = await self._connection.get_client()
            await client.delete_message(
                QueueUrl=self._config.queue_url,
                ReceiptHandle=receipt_handle,
            )

    async def change_message_visibility(
        self, receipt_handle: str, visibility_timeout: int
    ) -> None:
        with translate_errors("change_message_visibility"):
            client = await self._connection.get_client()
            await client.change_message_visibility(
                QueueUrl=self._config.queue_url,
                ReceiptHandle=receipt_handle,
                VisibilityTimeout=visibility_timeout,
            )

    async def close(self) -> None:
        await self._connection.close()

    async def health_check(self) -> bool:
        """Return True if SQS is reachable."""
        return await self._connection.health_check()


def _build_message(raw: Mapping[str, Any]) -> Message:
    """Map an SQS ``Message`` dict to :class:`Message`."""
    attributes: dict[str, object] = {
        key: decode_attribute(value)
        for key, value in (raw.get("MessageAttributes") or {}).items()
    }
    attributes[RECEIPT_HANDLE] = raw["ReceiptHandle"]
    return Message(
        body=raw.get("Body", ""),
        id=raw["MessageId"],
        attributes=attributes,
        metadata=Metadata(id=raw["MessageId"], attributes=dict(raw.get("Attributes") or {})),
    )
