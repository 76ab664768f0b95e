"""SqsProducer — MessageProducer sending to an SQS queue."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from ..producer import MessageProducer
from .client import SqsClient

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..config import SqsConfig

T = TypeVar("T")


class SqsProducer(MessageProducer[T]):
    """SQS adapter for :class:`MessageProducer`. Supports message attributes."""

    SUPPORTS_ATTRIBUTES = True

    def __init__(
        self,
        config: SqsConfig,
        *,
        client: SqsClient | None = None,
        serializer: Callable[[T], str] | None = None,
        **client_kwargs: Any,
    ) -> None:
        self._config = config
        super().__init__(
            client or SqsClient(config, **client_kwargs), serializer=serializer
        )

    @property
    def config(self) -> SqsConfig:
        return self._config
