"""InMemoryConsumer — MessageConsumer over an in-process queue."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..consumer import MessageConsumer
from .client import InMemoryClient

if TYPE_CHECKING:
    from ..config import InMemoryConfig
    from ..heartbeat import HeartbeatScheduler
    from .queue import InMemoryBroker, InMemoryQueue


class InMemoryConsumer(MessageConsumer):
    """In-memory consumer sharing a queue with :class:`InMemoryProducer`.

    Use the same broker (or the default one) and ``queue_name`` on both sides.
    """

    def __init__(
        self,
        config: InMemoryConfig,
        *,
        broker: InMemoryBroker | None = None,
        scheduler: HeartbeatScheduler | None = None,
    ) -> None:
        self._client = InMemoryClient(config, broker=broker)
        super().__init__(self._client, config.heartbeat_config, scheduler=scheduler)

    @property
    def queue(self) -> InMemoryQueue:
        return self._client.queue
