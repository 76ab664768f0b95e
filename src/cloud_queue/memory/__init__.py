"""In-memory provider for testing and local development."""

from __future__ import annotations

from .client import InMemoryClient
from .consumer import InMemoryConsumer
from .producer import InMemoryProducer
from .queue import InMemoryBroker, InMemoryQueue, default_broker

__all__ = [
    "InMemoryBroker",
    "InMemoryClient",
    "InMemoryConsumer",
    "InMemoryProducer",
    "InMemoryQueue",
    "default_broker",
]
