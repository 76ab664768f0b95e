"""InMemoryClient — transport binding an InMemoryConfig to an InMemoryQueue."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .queue import InMemoryBroker, InMemoryQueue, default_broker

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ..attributes import TypedAttribute
    from ..config import InMemoryConfig
    from ..message import Message


class InMemoryClient:
    """Implements ``IProducerTransport`` and ``IConsumerTransport`` in-process.

    Producers and consumers built from configs with the same ``queue_name``
    on the same broker share one queue.
    """

    def __init__(
        self, config: InMemoryConfig, *, broker: InMemoryBroker | None = None
    ) -> None:
        self._config = config
        self._queue = (broker or default_broker).get_queue(config.queue_name)

    @property
    def queue(self) -> InMemoryQueue:
        return self._queue

    async def send(
        self, body: str, attributes: Mapping[str, TypedAttribute] | None = None
    ) -> None:
        self._queue.send(body, attributes)

    async def receive(self, timeout: int) -> list[Message]:
        return await self._queue.receive(
            self._config.max_number_of_messages,
            timeout,
            self._config.visibility_timeout,
        )

    async def delete_message(self, receipt_handle: str) -> None:
        self._queue.delete(receipt_handle)

    async def change_message_visibility(
        self, receipt_handle: str, visibility_timeout: int
    ) -> None:
        self._queue.change_visibility(receipt_handle, visibility_timeout)

    async def close(self) -> None:
        """Nothing to release; the queue outlives its clients."""

    async def health_check(self) -> bool:
        return True
