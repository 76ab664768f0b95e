"""Exception hierarchy for cloud-queue."""

from __future__ import annotations


class QueueError(Exception):
    """Root exception for the entire cloud-queue library."""


class InvalidConfigurationError(QueueError):
    """Raised when a queue configuration is missing a field or names an
    unknown provider. Fatal at construction time."""


class InvalidAttributeError(QueueError, ValueError):
    """Raised when a message attribute has an invalid value (e.g. ``None``)."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        super().__init__(f"Message attribute '{key}' {reason}")


class UnsupportedAttributeTypeError(QueueError, TypeError):
    """Raised when a message attribute value is not a String, Number or Boolean."""

    def __init__(self, key: str, value_type: str) -> None:
        self.key = key
        self.value_type = value_type
        super().__init__(
            f"Unsupported message attribute type for key '{key}': {value_type}. "
            "Supported types: String, Number, Boolean"
        )


class MissingReceiptHandleError(QueueError, ValueError):
    """Raised when a message carries no receipt handle and therefore cannot be
    acknowledged or have its visibility extended."""

    def __init__(self, message_id: str | None = None) -> None:
        self.message_id = message_id
        super().__init__(f"Message {message_id!r} has no receipt handle")


class UnsupportedOperationError(QueueError):
    """Raised when the bound provider cannot perform the requested operation.

    Usage: producers without attribute support, consuming from a publish-only
    provider, asking a publish-only config for heartbeat settings.
    """


class QueueClosedError(QueueError):
    """Raised when a producer or consumer is used after ``close()``."""


class TransportError(QueueError):
    """Raised when a call to the underlying provider fails."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} failed: {reason}")
