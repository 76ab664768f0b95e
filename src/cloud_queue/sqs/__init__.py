"""SQS provider adapters."""

from __future__ import annotations

from .client import SqsClient
from .consumer import SqsConsumer
from .producer import SqsProducer

__all__ = [
    "SqsClient",
    "SqsConsumer",
    "SqsProducer",
]
