"""MessageConsumer — receive / acknowledge / heartbeat over any provider.

Lifecycle of a received message::

    Received -> HeartbeatActive | HeartbeatInactive -> Acknowledged

Expiry is not modelled locally: the provider redelivers a message whose
visibility lapses, and the heartbeat exists to stay ahead of that.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import QueueClosedError, UnsupportedOperationError
from .heartbeat import HeartbeatScheduler

if TYPE_CHECKING:
    from types import TracebackType

    from .config import HeartbeatConfig
    from .message import Message
    from .ports import IConsumerTransport

logger = logging.getLogger("cloud_queue.consumer")


class MessageConsumer:
    """Binds a consumer transport and a heartbeat scheduler to the uniform
    consumer contract.

    With ``heartbeat_interval > 0`` every received message gets a renewal task
    that extends its visibility to twice the interval on each tick, so one
    missed tick cannot cause a premature redelivery. The task stops when the
    message is acknowledged or the consumer is closed.
    """

    def __init__(
        self,
        transport: IConsumerTransport,
        heartbeat_config: HeartbeatConfig,
        *,
        scheduler: HeartbeatScheduler | None = None,
    ) -> None:
        """Configure consumer.

        Args:
            transport: Provider client performing the requests.
            heartbeat_config: Interval and pool size for visibility renewal.
            scheduler: Pre-built scheduler owning the registration table;
                by default one is created when heartbeats are enabled.
        """
        self._transport = transport
        self._heartbeat_config = heartbeat_config
        self._scheduler: HeartbeatScheduler | None = None
        if heartbeat_config.enabled:
            self._scheduler = (
                scheduler
                if scheduler is not None
                else HeartbeatScheduler(
                    heartbeat_config.heartbeat_interval,
                    self._extend_visibility,
                    pool_size=heartbeat_config.executor_pool_size,
                )
            )
        self._closed = False

    @property
    def heartbeat_config(self) -> HeartbeatConfig:
        return self._heartbeat_config

    @property
    def scheduler(self) -> HeartbeatScheduler | None:
        return self._scheduler

    @property
    def closed(self) -> bool:
        return self._closed

    def active_heartbeats(self) -> set[str]:
        """Return ids of messages whose visibility is currently being renewed."""
        if self._scheduler is None:
            return set()
        return self._scheduler.active_ids()

    def _ensure_open(self) -> None:
        if self._closed:
            raise QueueClosedError(f"{type(self).__name__} is closed")

    async def receive(self, timeout: int = 0) -> list[Message]:
        """Receive a batch of messages and start their heartbeats.

        Every message in the batch must carry a receipt handle; otherwise
        :class:`MissingReceiptHandleError` is raised before any heartbeat is
        registered. A batch that arrives after :meth:`close` is returned
        without heartbeats.

        Args:
            timeout: Seconds to wait for messages; 0 polls once.
        """
        self._ensure_open()
        if timeout < 0:
            raise ValueError("timeout must be >= 0")
        messages = await self._transport.receive(timeout)
        if self._scheduler is not None:
            handles = [(m.id, m.receipt_handle) for m in messages]
            if self._closed:
                logger.warning(
                    "%s closed during receive; returning %d message(s) unregistered",
                    type(self).__name__,
                    len(messages),
                )
                return messages
            for message_id, receipt_handle in handles:
                self._scheduler.register(message_id, receipt_handle)
        logger.debug("%s received %d message(s)", type(self).__name__, len(messages))
        return messages

    async def acknowledge(self, message: Message) -> None:
        """Delete *message* from the queue and stop its heartbeat.

        If the delete fails the error propagates and the heartbeat keeps
        running, so a retried acknowledge can still cancel it.
        """
        self._ensure_open()
        receipt_handle = message.receipt_handle
        await self._transport.delete_message(receipt_handle)
        if self._scheduler is not None:
            self._scheduler.cancel(message.id, receipt_handle)

    async def send_heartbeat(self, message: Message) -> None:
        """Extend *message*'s visibility to twice the heartbeat interval.

        Raises:
            UnsupportedOperationError: heartbeats are disabled (interval 0).
            TransportError: the receipt handle already expired server-side.
        """
        self._ensure_open()
        if not self._heartbeat_config.enabled:
            raise UnsupportedOperationError(
                "Heartbeat is disabled: heartbeat_interval is 0"
            )
        await self._extend_visibility(message.receipt_handle)

    async def _extend_visibility(self, receipt_handle: str) -> None:
        await self._transport.change_message_visibility(
            receipt_handle, self._heartbeat_config.heartbeat_interval * 2
        )

    async def health_check(self) -> bool:
        """Return True if the provider is reachable."""
        return await self._transport.health_check()

    async def close(self) -> None:
        """Cancel all heartbeats and release the transport.

        Idempotent and never raises.
        """
        if self._closed:
            return
        self._closed = True
        if self._scheduler is not None:
            try:
                await self._scheduler.close()
            except Exception:  # noqa: BLE001
                logger.warning("Error cancelling heartbeats", exc_info=True)
        try:
            await self._transport.close()
        except Exception:  # noqa: BLE001
            logger.warning("Error closing %s transport", type(self).__name__, exc_info=True)
        logger.info("%s closed", type(self).__name__)

    async def __aenter__(self) -> MessageConsumer:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
