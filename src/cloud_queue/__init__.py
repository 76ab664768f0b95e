"""cloud-queue — provider-agnostic async producers and consumers for SQS, SNS
and an in-memory queue, with visibility heartbeats for in-flight messages."""

from __future__ import annotations

from .attributes import AttributeConverter, AttributeDataType, TypedAttribute
from .config import (
    HeartbeatConfig,
    InMemoryConfig,
    QueueConfig,
    QueueProvider,
    SnsConfig,
    SqsConfig,
    load_config,
)
from .consumer import MessageConsumer
from .exceptions import (
    InvalidAttributeError,
    InvalidConfigurationError,
    MissingReceiptHandleError,
    QueueClosedError,
    QueueError,
    TransportError,
    UnsupportedAttributeTypeError,
    UnsupportedOperationError,
)
from .factory import create_consumer, create_producer
from .heartbeat import HeartbeatRegistration, HeartbeatScheduler
from .message import RECEIPT_HANDLE, Message, Metadata
from .ports import (
    IConsumerTransport,
    IMessageConsumer,
    IMessageProducer,
    IProducerTransport,
)
from .producer import MessageProducer

__all__ = [
    "RECEIPT_HANDLE",
    "AttributeConverter",
    "AttributeDataType",
    "HeartbeatConfig",
    "HeartbeatRegistration",
    "HeartbeatScheduler",
    "IConsumerTransport",
    "IMessageConsumer",
    "IMessageProducer",
    "IProducerTransport",
    "InMemoryConfig",
    "InvalidAttributeError",
    "InvalidConfigurationError",
    "Message",
    "MessageConsumer",
    "MessageProducer",
    "Metadata",
    "MissingReceiptHandleError",
    "QueueClosedError",
    "QueueConfig",
    "QueueError",
    "QueueProvider",
    "SnsConfig",
    "SqsConfig",
    "TransportError",
    "TypedAttribute",
    "UnsupportedAttributeTypeError",
    "UnsupportedOperationError",
    "create_consumer",
    "create_producer",
    "load_config",
]
