"""SnsProducer — MessageProducer publishing to an SNS topic."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from ..producer import MessageProducer
from .client import SnsClient

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..config import SnsConfig

T = TypeVar("T")


class SnsProducer(MessageProducer[T]):
    """SNS adapter for :class:`MessageProducer`.

    Subscribers (e.g. SQS queues) can filter on the message attributes.
    """

    SUPPORTS_ATTRIBUTES = True

    def __init__(
        self,
        config: SnsConfig,
        *,
        client: SnsClient | None = None,
        serializer: Callable[[T], str] | None = None,
        **client_kwargs: Any,
    ) -> None:
        self._config = config
        super().__init__(
            client or SnsClient(config, **client_kwargs), serializer=serializer
        )

    @property
    def config(self) -> SnsConfig:
        return self._config
