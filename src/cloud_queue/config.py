"""Queue configuration models.

Configurations are frozen pydantic models: built once at startup, validated at
construction, then shared by reference between facades and schedulers.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import InvalidConfigurationError, UnsupportedOperationError

if TYPE_CHECKING:
    from collections.abc import Mapping


class QueueProvider(str, Enum):
    """Closed set of supported providers."""

    SQS = "sqs"
    SNS = "sns"
    MEMORY = "memory"


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "__root__"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


class QueueConfig(BaseModel):
    """Base class for provider configurations.

    Subclasses declare their :class:`QueueProvider` tag. Validation failures
    surface as :class:`InvalidConfigurationError`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    provider: ClassVar[QueueProvider]

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise InvalidConfigurationError(
                f"Invalid {type(self).__name__}: {_describe(e)}"
            ) from e


class HeartbeatConfig(BaseModel):
    """Visibility heartbeat settings for consumers.

    ``heartbeat_interval == 0`` disables heartbeats entirely.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    heartbeat_interval: int = Field(default=0, ge=0, description="Seconds")
    executor_pool_size: int = Field(
        default=1, ge=1, description="Max concurrent renewal requests"
    )

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise InvalidConfigurationError(
                f"Invalid HeartbeatConfig: {_describe(e)}"
            ) from e

    @property
    def enabled(self) -> bool:
        return self.heartbeat_interval > 0


class _AwsConfig(QueueConfig):
    region: str = Field(..., min_length=1)
    endpoint: str | None = None

    @field_validator("endpoint")
    @classmethod
    def _blank_endpoint_is_none(cls, v: str | None) -> str | None:
        return v or None


class SqsConfig(_AwsConfig):
    """SQS queue configuration (producer and consumer)."""

    provider: ClassVar[QueueProvider] = QueueProvider.SQS

    queue_url: str
    max_number_of_messages: int = Field(default=10, ge=1, le=10)
    visibility_timeout: int | None = Field(default=None, ge=0)
    message_group_id: str = "default"
    heartbeat_config: HeartbeatConfig = Field(default_factory=HeartbeatConfig)

    @property
    def is_fifo(self) -> bool:
        return self.queue_url.endswith(".fifo")


class SnsConfig(_AwsConfig):
    """SNS topic configuration. Publish-only."""

    provider: ClassVar[QueueProvider] = QueueProvider.SNS

    topic_arn: str = Field(..., min_length=1)

    @property
    def heartbeat_config(self) -> HeartbeatConfig:
        raise UnsupportedOperationError("Heartbeat config is not supported in SNS")


class InMemoryConfig(QueueConfig):
    """In-process queue configuration for tests and local development."""

    provider: ClassVar[QueueProvider] = QueueProvider.MEMORY

    queue_name: str = "default"
    max_number_of_messages: int = Field(default=10, ge=1)
    visibility_timeout: float = Field(default=30.0, gt=0)
    heartbeat_config: HeartbeatConfig = Field(default_factory=HeartbeatConfig)


CONFIG_TYPES: dict[QueueProvider, type[QueueConfig]] = {
    QueueProvider.SQS: SqsConfig,
    QueueProvider.SNS: SnsConfig,
    QueueProvider.MEMORY: InMemoryConfig,
}


def parse_provider(tag: object) -> QueueProvider:
    """Resolve a provider tag (enum member or case-insensitive string)."""
    if isinstance(tag, QueueProvider):
        return tag
    try:
        return QueueProvider(str(tag).lower())
    except ValueError:
        raise InvalidConfigurationError(f"Invalid queue provider: {tag!r}") from None


def load_config(data: Mapping[str, Any]) -> QueueConfig:
    """Build the provider-specific config from a plain mapping.

    The mapping must carry a ``"provider"`` key; the remaining keys are the
    fields of the matching config model.

    Example::

        config = load_config({
            "provider": "sqs",
            "region": "us-east-1",
            "queue_url": "https://sqs.us-east-1.amazonaws.com/123/jobs",
            "heartbeat_config": {"heartbeat_interval": 30},
        })
    """
    fields = dict(data)
    if "provider" not in fields:
        raise InvalidConfigurationError("Queue configuration is missing 'provider'")
    provider = parse_provider(fields.pop("provider"))
    return CONFIG_TYPES[provider](**fields)
