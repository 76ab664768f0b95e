"""HeartbeatScheduler — periodic visibility renewal for in-flight messages.

One asyncio task per registered message id renews the message's visibility
every ``interval`` seconds until the message is acknowledged or the owning
consumer is closed. There is no timeout-based self-cancellation: an
unacknowledged message is renewed indefinitely.

The registration table is only mutated on the event loop thread between
awaits, so register/replace/cancel are linearizable without a lock.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .exceptions import QueueClosedError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger("cloud_queue.heartbeat")


@dataclass(frozen=True)
class HeartbeatRegistration:
    """Active renewal for one delivery of a message."""

    message_id: str
    receipt_handle: str
    task: asyncio.Task[None]

    @property
    def active(self) -> bool:
        return not self.task.done()


class HeartbeatScheduler:
    """Owns one cancellable repeating renewal task per in-flight message id.

    Renewal requests from all registrations share a bounded pool of
    ``pool_size`` concurrent slots. A failing renewal is logged and the next
    tick still fires.

    Example::

        scheduler = HeartbeatScheduler(30, extend_visibility, pool_size=4)
        scheduler.register(message.id, message.receipt_handle)
        ...
        scheduler.cancel(message.id, message.receipt_handle)
        await scheduler.close()
    """

    def __init__(
        self,
        interval: float,
        renew: Callable[[str], Awaitable[Any]],
        *,
        pool_size: int = 1,
    ) -> None:
        """Configure the scheduler.

        Args:
            interval: Seconds between renewals; the first fires one interval
                after registration.
            renew: Async callable receiving the receipt handle to renew.
            pool_size: Maximum renewal requests in flight at once.
        """
        if interval <= 0:
            raise ValueError("interval must be > 0")
        if pool_size < 1:
            raise ValueError("pool_size must be >= 1")
        self._interval = interval
        self._renew = renew
        self._pool = asyncio.Semaphore(pool_size)
        self._registrations: dict[str, HeartbeatRegistration] = {}
        self._closed = False

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._registrations)

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._registrations

    def get(self, message_id: str) -> HeartbeatRegistration | None:
        return self._registrations.get(message_id)

    def active_ids(self) -> set[str]:
        """Return the message ids with a live registration."""
        return set(self._registrations)

    def register(self, message_id: str, receipt_handle: str) -> HeartbeatRegistration:
        """Start renewing *receipt_handle* under *message_id*.

        If *message_id* is already registered the new task is installed first
        and the previous one cancelled afterwards (last write wins).

        Raises:
            QueueClosedError: the scheduler has been closed.
        """
        if self._closed:
            raise QueueClosedError("HeartbeatScheduler is closed")
        previous = self._registrations.get(message_id)
        task = asyncio.get_running_loop().create_task(
            self._run(message_id, receipt_handle),
            name=f"heartbeat:{message_id}",
        )
        registration = HeartbeatRegistration(message_id, receipt_handle, task)
        self._registrations[message_id] = registration
        if previous is not None:
            previous.task.cancel()
            logger.debug("Replaced heartbeat registration for message %s", message_id)
        else:
            logger.debug(
                "Registered heartbeat for message %s every %ss",
                message_id,
                self._interval,
            )
        return registration

    def cancel(self, message_id: str, receipt_handle: str | None = None) -> bool:
        """Cancel and remove the registration for *message_id*.

        When *receipt_handle* is given, only a registration for that same
        delivery is cancelled, so acknowledging an old delivery never cancels
        a newer registration of the same id. Returns True if one was removed.
        """
        registration = self._registrations.get(message_id)
        if registration is None:
            return False
        if receipt_handle is not None and registration.receipt_handle != receipt_handle:
            logger.debug(
                "Kept heartbeat for message %s: registered for a newer delivery",
                message_id,
            )
            return False
        del self._registrations[message_id]
        registration.task.cancel()
        logger.debug("Cancelled heartbeat for message %s", message_id)
        return True

    async def close(self) -> None:
        """Cancel every registration and refuse new ones. Idempotent."""
        self._closed = True
        registrations = list(self._registrations.values())
        self._registrations.clear()
        for registration in registrations:
            registration.task.cancel()
        current = asyncio.current_task()
        tasks = [r.task for r in registrations if r.task is not current]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.debug("Cancelled %d heartbeat(s) on close", len(tasks))

    async def _run(self, message_id: str, receipt_handle: str) -> None:
        loop = asyncio.get_running_loop()
        next_at = loop.time() + self._interval
        while True:
            await asyncio.sleep(max(0.0, next_at - loop.time()))
            next_at += self._interval
            # a renewal that overran the period skips the missed ticks
            while next_at <= loop.time():
                next_at += self._interval
            try:
                async with self._pool:
                    await self._renew(receipt_handle)
            except Exception:
                logger.exception("Failed to send heartbeat for message %s", message_id)
