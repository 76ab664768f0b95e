from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .attributes import TypedAttribute
    from .message import Message

T_contra = TypeVar("T_contra", contravariant=True)


@runtime_checkable
class IMessageProducer(Protocol[T_contra]):
    """
    Port for sending messages to a queue or topic.

    Provider packages (``sqs``, ``sns``, ``memory``) supply the adapters.
    """

    async def send(
        self, message: T_contra, attributes: Mapping[str, Any] | None = None
    ) -> None:
        """
        Send *message*, optionally with user attributes.

        Raises:
            UnsupportedOperationError: attributes given to a provider that
                does not support them.
        """
        ...

    def supports_attributes(self) -> bool: ...

    async def close(self) -> None: ...


@runtime_checkable
class IMessageConsumer(Protocol):
    """
    Port for receiving and acknowledging messages from a queue.
    """

    async def receive(self, timeout: int = 0) -> list[Message]:
        """
        Receive a batch; batch size is configuration-determined.

        Args:
            timeout: Seconds to wait for messages; 0 polls once without waiting.
        """
        ...

    async def acknowledge(self, message: Message) -> None:
        """Mark *message* processed, removing it from the queue."""
        ...

    async def send_heartbeat(self, message: Message) -> None:
        """Tell the provider *message* is still being processed."""
        ...

    async def close(self) -> None: ...


@runtime_checkable
class IProducerTransport(Protocol):
    """Vendor capability used by producers: enqueue with attributes."""

    async def send(
        self, body: str, attributes: Mapping[str, TypedAttribute] | None = None
    ) -> None: ...

    async def close(self) -> None: ...

    async def health_check(self) -> bool: ...


@runtime_checkable
class IConsumerTransport(Protocol):
    """Vendor capability used by consumers: receive, delete, extend visibility."""

    async def receive(self, timeout: int) -> list[Message]: ...

    async def delete_message(self, receipt_handle: str) -> None: ...

    async def change_message_visibility(
        self, receipt_handle: str, visibility_timeout: int
    ) -> None: ...

    async def close(self) -> None: ...

    async def health_check(self) -> bool: ...
