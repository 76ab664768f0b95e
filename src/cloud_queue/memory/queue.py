"""In-memory queue with SQS-like visibility semantics, for tests and local runs."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..attributes import decode_attribute
from ..exceptions import TransportError
from ..message import RECEIPT_HANDLE, Message, Metadata

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from ..attributes import TypedAttribute

logger = logging.getLogger("cloud_queue.memory")


@dataclass
class _StoredMessage:
    id: str
    body: str
    attributes: dict[str, TypedAttribute]
    sent_at: float
    visible_at: float
    receipt_handle: str | None = None
    receive_count: int = 0


class InMemoryQueue:
    """A single named queue.

    Received messages become invisible for the visibility timeout and are
    redelivered, under a new receipt handle, if not deleted in time. Only the
    latest receipt handle of a message is valid for extending visibility;
    deleting with a stale or unknown handle is a no-op.
    """

    def __init__(
        self, name: str = "default", clock: Callable[[], float] = time.monotonic
    ) -> None:
        self.name = name
        self._clock = clock
        self._messages: dict[str, _StoredMessage] = {}
        self._published: list[tuple[str, dict[str, TypedAttribute]]] = []
        self._waiters: set[asyncio.Future[None]] = set()

    def clock(self) -> float:
        return self._clock()

    def __len__(self) -> int:
        return len(self._messages)

    def send(
        self, body: str, attributes: Mapping[str, TypedAttribute] | None = None
    ) -> str:
        """Enqueue *body*; return the new message id."""
        now = self.clock()
        message_id = str(uuid.uuid4())
        attrs = dict(attributes or {})
        self._messages[message_id] = _StoredMessage(
            id=message_id, body=body, attributes=attrs, sent_at=now, visible_at=now
        )
        self._published.append((body, attrs))
        for waiter in self._waiters:
            if not waiter.done():
                waiter.set_result(None)
        return message_id

    async def receive(
        self, max_messages: int, timeout: float, visibility_timeout: float
    ) -> list[Message]:
        """Return up to *max_messages* visible messages, waiting up to *timeout*."""
        deadline = self.clock() + timeout
        while True:
            batch = self._take(max_messages, visibility_timeout)
            remaining = deadline - self.clock()
            if batch or remaining <= 0:
                return batch
            waiter = asyncio.get_running_loop().create_future()
            self._waiters.add(waiter)
            try:
                await asyncio.wait_for(
                    waiter, timeout=min(remaining, self._next_visible_in())
                )
            except asyncio.TimeoutError:
                pass
            finally:
                self._waiters.discard(waiter)

    def delete(self, receipt_handle: str) -> bool:
        """Delete the message currently held under *receipt_handle*."""
        stored = self._find(receipt_handle)
        if stored is None:
            return False
        del self._messages[stored.id]
        return True

    def change_visibility(self, receipt_handle: str, visibility_timeout: float) -> None:
        """Make the message invisible for *visibility_timeout* seconds from now.

        Raises:
            TransportError: the handle is stale (message redelivered or deleted).
        """
        stored = self._find(receipt_handle)
        if stored is None:
            raise TransportError(
                "change_message_visibility",
                f"receipt handle {receipt_handle!r} is no longer valid",
            )
        stored.visible_at = self.clock() + visibility_timeout

    def in_flight(self) -> int:
        """Number of received messages still invisible."""
        now = self.clock()
        return sum(
            1
            for m in self._messages.values()
            if m.receipt_handle is not None and m.visible_at > now
        )

    def get_published(self) -> list[tuple[str, dict[str, TypedAttribute]]]:
        """Return all (body, attributes) sent so far, in order."""
        return list(self._published)

    def clear(self) -> None:
        """Drop stored and published messages (for test teardown)."""
        self._messages.clear()
        self._published.clear()

    def _take(self, max_messages: int, visibility_timeout: float) -> list[Message]:
        now = self.clock()
        batch: list[Message] = []
        for stored in self._messages.values():
            if len(batch) >= max_messages:
                break
            if stored.visible_at > now:
                continue
            stored.receipt_handle = uuid.uuid4().hex
            stored.receive_count += 1
            stored.visible_at = now + visibility_timeout
            batch.append(_to_message(stored))
        return batch

    def _find(self, receipt_handle: str) -> _StoredMessage | None:
        for stored in self._messages.values():
            if stored.receipt_handle == receipt_handle:
                return stored
        return None

    def _next_visible_in(self) -> float:
        now = self.clock()
        pending = [m.visible_at - now for m in self._messages.values()]
        return max(0.0, min(pending)) if pending else float("inf")


def _to_message(stored: _StoredMessage) -> Message:
    attributes: dict[str, object] = {
        key: decode_attribute(value.to_aws()) for key, value in stored.attributes.items()
    }
    attributes[RECEIPT_HANDLE] = stored.receipt_handle
    return Message(
        body=stored.body,
        id=stored.id,
        attributes=attributes,
        metadata=Metadata(
            id=stored.id,
            attributes={
                "ApproximateReceiveCount": str(stored.receive_count),
                "SentTimestamp": str(stored.sent_at),
            },
        ),
    )


class InMemoryBroker:
    """Registry of named queues shared by in-memory producers and consumers."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._queues: dict[str, InMemoryQueue] = {}

    def get_queue(self, name: str) -> InMemoryQueue:
        """Return the queue called *name*, creating it on first use."""
        queue = self._queues.get(name)
        if queue is None:
            queue = InMemoryQueue(name=name, clock=self._clock)
            self._queues[name] = queue
            logger.debug("Created in-memory queue %s", name)
        return queue

    def clear(self) -> None:
        """Drop all queues (for test teardown)."""
        self._queues.clear()


#: Broker used when none is passed explicitly.
default_broker = InMemoryBroker()
