"""Message and Metadata — immutable value objects returned by consumers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import MissingReceiptHandleError

#: Reserved attribute key carrying the provider's continuation token.
RECEIPT_HANDLE = "RECEIPT_HANDLE"


class Metadata(BaseModel):
    """System-level metadata populated by the queue provider.

    Holds the provider message id and system attributes such as timestamps
    or the approximate receive count.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    attributes: dict[str, object] = Field(default_factory=dict)


class Message(BaseModel):
    """A received message.

    ``id`` is assigned by the provider and may repeat across redeliveries of
    the same logical item. ``attributes`` holds user attributes plus the
    reserved :data:`RECEIPT_HANDLE` entry, which must round-trip unchanged to
    acknowledge or heartbeat the message.
    """

    model_config = ConfigDict(frozen=True)

    body: str
    id: str
    attributes: dict[str, object] = Field(default_factory=dict)
    metadata: Metadata | None = None

    @property
    def receipt_handle(self) -> str:
        """Return the continuation token or raise :class:`MissingReceiptHandleError`."""
        handle = self.attributes.get(RECEIPT_HANDLE)
        if handle is None or handle == "":
            raise MissingReceiptHandleError(self.id)
        return str(handle)

    @property
    def user_attributes(self) -> dict[str, object]:
        """Attributes without the reserved receipt handle entry."""
        return {k: v for k, v in self.attributes.items() if k != RECEIPT_HANDLE}
