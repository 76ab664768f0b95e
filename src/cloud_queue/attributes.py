"""Message attribute validation and conversion.

Application code passes a plain ``dict[str, object]``; providers need typed
attributes. :class:`AttributeConverter` validates the open input at the
boundary and converts it into the closed :class:`TypedAttribute` variant.

Supported values:

* ``str`` -> ``String``, passed through unchanged
* ``bool`` -> ``String`` (``"true"`` / ``"false"``), no provider has a boolean type
* ``int`` / ``float`` / ``Decimal`` -> ``Number``, natural decimal form

Everything else (``bytes``, lists, dicts, custom objects, ``None``) is rejected.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar, overload

from .exceptions import InvalidAttributeError, UnsupportedAttributeTypeError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

T = TypeVar("T")


class AttributeDataType(str, Enum):
    """Attribute data types shared by SQS and SNS."""

    STRING = "String"
    NUMBER = "Number"


@dataclass(frozen=True)
class TypedAttribute:
    """Immutable provider-neutral attribute: a data type tag and its string form."""

    data_type: AttributeDataType
    string_value: str

    def to_aws(self) -> dict[str, str]:
        """Return the ``MessageAttributeValue`` shape used by SQS and SNS."""
        return {"DataType": self.data_type.value, "StringValue": self.string_value}


def _format_number(key: str, value: int | float | Decimal) -> str:
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidAttributeError(key, f"must be a finite number, got {value!r}")
        return repr(value)
    if isinstance(value, Decimal) and not value.is_finite():
        raise InvalidAttributeError(key, f"must be a finite number, got {value}")
    return str(value)


def _to_typed(key: str, value: Any) -> TypedAttribute:
    if value is None:
        raise InvalidAttributeError(key, "cannot be null")
    # bool is an int subclass, so it must be checked first
    if isinstance(value, bool):
        return TypedAttribute(AttributeDataType.STRING, "true" if value else "false")
    if isinstance(value, str):
        return TypedAttribute(AttributeDataType.STRING, value)
    if isinstance(value, (int, float, Decimal)):
        return TypedAttribute(AttributeDataType.NUMBER, _format_number(key, value))
    raise UnsupportedAttributeTypeError(key, type(value).__name__)


class AttributeConverter:
    """Converts generic attribute bags into typed provider attributes.

    Stateless; all methods are static.
    """

    @overload
    @staticmethod
    def convert(
        attributes: Mapping[str, Any] | None,
    ) -> dict[str, TypedAttribute]: ...

    @overload
    @staticmethod
    def convert(
        attributes: Mapping[str, Any] | None,
        factory: Callable[[str, str], T],
    ) -> dict[str, T]: ...

    @staticmethod
    def convert(
        attributes: Mapping[str, Any] | None,
        factory: Callable[[str, str], Any] | None = None,
    ) -> dict[str, Any]:
        """Validate and convert *attributes*.

        Args:
            attributes: Attribute bag; ``None`` or empty yields ``{}``.
            factory: Optional ``(data_type, string_value) -> T`` building a
                provider-specific value instead of a :class:`TypedAttribute`.

        Raises:
            InvalidAttributeError: a value is ``None`` or a non-finite number.
            UnsupportedAttributeTypeError: a value is not String/Number/Boolean.
        """
        if not attributes:
            return {}
        converted: dict[str, Any] = {}
        for key, value in attributes.items():
            typed = _to_typed(key, value)
            converted[key] = (
                typed
                if factory is None
                else factory(typed.data_type.value, typed.string_value)
            )
        return converted

    @staticmethod
    def to_aws(attributes: Mapping[str, Any] | None) -> dict[str, dict[str, str]]:
        """Convert straight into the AWS ``MessageAttributes`` request shape."""
        return {
            key: typed.to_aws()
            for key, typed in AttributeConverter.convert(attributes).items()
        }


def decode_attribute(raw: Mapping[str, Any]) -> object:
    """Map a received AWS ``MessageAttributeValue`` back to a Python value.

    ``Number`` becomes ``int`` when integral, otherwise ``float`` (or
    ``Decimal`` when a float would lose precision). ``Binary`` is returned as
    bytes; everything else as its string value.
    """
    data_type = str(raw.get("DataType", AttributeDataType.STRING.value))
    if data_type.startswith("Binary"):
        return raw.get("BinaryValue")
    value = raw.get("StringValue")
    if value is None or not data_type.startswith(AttributeDataType.NUMBER.value):
        return value
    try:
        return int(value)
    except ValueError:
        pass
    try:
        as_float = float(value)
    except ValueError:
        return value
    if repr(as_float) == value:
        return as_float
    try:
        return Decimal(value)
    except InvalidOperation:
        return value
