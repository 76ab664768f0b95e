"""InMemoryProducer — MessageProducer with assertion helpers for tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from ..producer import MessageProducer
from .client import InMemoryClient

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..attributes import TypedAttribute
    from ..config import InMemoryConfig
    from .queue import InMemoryBroker, InMemoryQueue

T = TypeVar("T")


class InMemoryProducer(MessageProducer[T]):
    """In-memory producer. Supports message attributes.

    ``get_published()`` and ``assert_published()`` support test assertions.
    """

    SUPPORTS_ATTRIBUTES = True

    def __init__(
        self,
        config: InMemoryConfig,
        *,
        broker: InMemoryBroker | None = None,
        serializer: Callable[[T], str] | None = None,
    ) -> None:
        self._client = InMemoryClient(config, broker=broker)
        super().__init__(self._client, serializer=serializer)

    @property
    def queue(self) -> InMemoryQueue:
        return self._client.queue

    def get_published(self) -> list[tuple[str, dict[str, TypedAttribute]]]:
        """Return all (body, attributes) sent to the queue so far."""
        return self._client.queue.get_published()

    def assert_published(self, body: str, count: int = 1) -> None:
        """Assert that exactly *count* messages with *body* were sent.

        Raises AssertionError if not met.
        """
        published = [b for b, _ in self.get_published()]
        matching = [b for b in published if b == body]
        assert len(matching) == count, (
            f"Expected {count} message(s) with body={body!r}, "
            f"got {len(matching)}. Published: {published}"
        )
