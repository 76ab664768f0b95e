"""Provider factory — build producer/consumer facades from a configuration."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .config import (
    InMemoryConfig,
    QueueConfig,
    QueueProvider,
    SnsConfig,
    SqsConfig,
    load_config,
)
from .exceptions import InvalidConfigurationError, UnsupportedOperationError
from .memory import InMemoryConsumer, InMemoryProducer
from .sns import SnsProducer
from .sqs import SqsConsumer, SqsProducer

if TYPE_CHECKING:
    from collections.abc import Callable

    from .consumer import MessageConsumer
    from .producer import MessageProducer


def _resolve(config: QueueConfig | Mapping[str, Any]) -> QueueConfig:
    if isinstance(config, QueueConfig):
        return config
    if isinstance(config, Mapping):
        return load_config(config)
    raise InvalidConfigurationError(
        f"Expected a QueueConfig or mapping, got {type(config).__name__}"
    )


def create_producer(
    config: QueueConfig | Mapping[str, Any],
    *,
    serializer: Callable[[Any], str] | None = None,
    **client_kwargs: Any,
) -> MessageProducer[Any]:
    """Create the producer matching ``config.provider``.

    Args:
        config: Provider config, or a mapping accepted by :func:`load_config`.
        serializer: Payload-to-body function; default ``str``.
        **client_kwargs: Passed to the provider client (e.g. ``session``,
            ``connection``, or ``broker`` for the in-memory provider).

    Raises:
        InvalidConfigurationError: invalid config or unknown provider.
    """
    config = _resolve(config)
    if config.provider is QueueProvider.SQS and isinstance(config, SqsConfig):
        return SqsProducer(config, serializer=serializer, **client_kwargs)
    if config.provider is QueueProvider.SNS and isinstance(config, SnsConfig):
        return SnsProducer(config, serializer=serializer, **client_kwargs)
    if config.provider is QueueProvider.MEMORY and isinstance(config, InMemoryConfig):
        return InMemoryProducer(config, serializer=serializer, **client_kwargs)
    raise InvalidConfigurationError(
        f"Invalid message producer type: {config.provider}"
    )


def create_consumer(
    config: QueueConfig | Mapping[str, Any],
    **client_kwargs: Any,
) -> MessageConsumer:
    """Create the consumer matching ``config.provider``.

    Raises:
        UnsupportedOperationError: the provider is publish-only (SNS). Raised
            before any client is constructed.
        InvalidConfigurationError: invalid config or unknown provider.
    """
    config = _resolve(config)
    if config.provider is QueueProvider.SNS:
        raise UnsupportedOperationError(
            "SNS does not support consuming messages. Use subscriptions instead."
        )
    if config.provider is QueueProvider.SQS and isinstance(config, SqsConfig):
        return SqsConsumer(config, **client_kwargs)
    if config.provider is QueueProvider.MEMORY and isinstance(config, InMemoryConfig):
        return InMemoryConsumer(config, **client_kwargs)
    raise InvalidConfigurationError(
        f"Invalid message consumer type: {config.provider}"
    )
