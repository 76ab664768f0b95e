"""MessageProducer — provider-agnostic producer facade."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .attributes import AttributeConverter
from .exceptions import QueueClosedError, UnsupportedOperationError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType

    from .ports import IProducerTransport

logger = logging.getLogger("cloud_queue.producer")

T = TypeVar("T")


class MessageProducer(Generic[T]):
    """Binds a producer transport to the uniform ``send`` contract.

    Each ``send`` issues exactly one outbound request. Attributes, when given,
    are validated and converted before anything is sent, so a conversion
    failure never results in a partial send.

    Subclasses set :attr:`SUPPORTS_ATTRIBUTES` to declare the provider's
    capability.
    """

    SUPPORTS_ATTRIBUTES: bool = False

    def __init__(
        self,
        transport: IProducerTransport,
        *,
        serializer: Callable[[T], str] | None = None,
    ) -> None:
        """Configure producer.

        Args:
            transport: Provider client performing the request.
            serializer: Turns a payload into the message body; default ``str``.
        """
        self._transport = transport
        self._serializer: Callable[[T], str] = serializer or str
        self._closed = False

    def supports_attributes(self) -> bool:
        return self.SUPPORTS_ATTRIBUTES

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(
        self, message: T, attributes: Mapping[str, Any] | None = None
    ) -> None:
        """Send *message* with optional user *attributes*.

        Raises:
            UnsupportedOperationError: attributes passed to a provider
                without attribute support.
            InvalidAttributeError, UnsupportedAttributeTypeError: bad attributes.
            QueueClosedError: the producer has been closed.
            TransportError: the provider request failed.
        """
        if attributes is not None and not self.supports_attributes():
            raise UnsupportedOperationError(
                "Message attributes are not supported by this provider"
            )
        if self._closed:
            raise QueueClosedError(f"{type(self).__name__} is closed")
        typed = AttributeConverter.convert(attributes)
        body = self._serializer(message)
        await self._transport.send(body, typed or None)
        logger.debug(
            "%s sent message (%d attribute(s))", type(self).__name__, len(typed)
        )

    async def health_check(self) -> bool:
        """Return True if the provider is reachable."""
        return await self._transport.health_check()

    async def close(self) -> None:
        """Release the transport client. Idempotent; never raises."""
        if self._closed:
            return
        self._closed = True
        try:
            await self._transport.close()
        except Exception:  # noqa: BLE001
            logger.warning("Error closing %s transport", type(self).__name__, exc_info=True)
        logger.info("%s closed", type(self).__name__)

    async def __aenter__(self) -> MessageProducer[T]:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
