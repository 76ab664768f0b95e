"""SNS provider adapters (publish only)."""

from __future__ import annotations

from .client import SnsClient
from .producer import SnsProducer

__all__ = [
    "SnsClient",
    "SnsProducer",
]
