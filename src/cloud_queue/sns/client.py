"""SnsClient — publish to an SNS topic via aiobotocore."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..connection import AWSClientManager, translate_errors

if TYPE_CHECKING:
    from collections.abc import Mapping

    from aiobotocore.session import AioSession

    from ..attributes import TypedAttribute
    from ..config import SnsConfig

logger = logging.getLogger("cloud_queue.sns")


class SnsClient:
    """Stateless wrapper publishing to one SNS topic (``IProducerTransport``)."""

    def __init__(
        self,
        config: SnsConfig,
        *,
        connection: AWSClientManager | None = None,
        session: AioSession | None = None,
        **client_kwargs: Any,
    ) -> None:
        self._config = config
        self._connection = connection or AWSClientManager(
            "sns",
            config.region,
            endpoint_url=config.endpoint,
            session=session,
            **client_kwargs,
        )

    @property
    def topic_arn(self) -> str:
        return self._config.topic_arn

    async def publish(
        self, message: str, attributes: Mapping[str, TypedAttribute] | None = None
    ) -> None:
        """Publish *message* with already-converted *attributes*."""
        publish_kwargs: dict[str, Any] = {
            "TopicArn": self._config.topic_arn,
            "Message": message,
        }
        if attributes:
            publish_kwargs["MessageAttributes"] = {
                key: value.to_aws() for key, value in attributes.items()
            }
        with translate_errors("publish"):
            client = await self._connection.get_client()
            out = await client.publish(**publish_kwargs)
        logger.debug("Published message %s to %s", out.get("MessageId"), self.topic_arn)

    send = publish

    async def close(self) -> None:
        await self._connection.close()

    async def health_check(self) -> bool:
        """Return True if SNS is reachable."""
        return await self._connection.health_check()
