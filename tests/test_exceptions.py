"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from cloud_queue.exceptions import (
    InvalidAttributeError,
    InvalidConfigurationError,
    MissingReceiptHandleError,
    QueueClosedError,
    QueueError,
    TransportError,
    UnsupportedAttributeTypeError,
    UnsupportedOperationError,
)


@pytest.mark.parametrize(
    "exc_type",
    [
        InvalidAttributeError,
        InvalidConfigurationError,
        MissingReceiptHandleError,
        QueueClosedError,
        TransportError,
        UnsupportedAttributeTypeError,
        UnsupportedOperationError,
    ],
)
def test_all_errors_are_queue_errors(exc_type: type[Exception]) -> None:
    assert issubclass(exc_type, QueueError)


def test_transport_error_has_operation() -> None:
    e = TransportError("delete_message", "boom")
    assert e.operation == "delete_message"
    assert "delete_message failed: boom" in str(e)


def test_invalid_attribute_is_value_error() -> None:
    e = InvalidAttributeError("k", "cannot be null")
    assert isinstance(e, ValueError)
    assert str(e) == "Message attribute 'k' cannot be null"
