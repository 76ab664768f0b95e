"""SqsConsumer — MessageConsumer with visibility heartbeats for SQS."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..consumer import MessageConsumer
from .client import SqsClient

if TYPE_CHECKING:
    from ..config import SqsConfig
    from ..heartbeat import HeartbeatScheduler


class SqsConsumer(MessageConsumer):
    """SQS adapter for :class:`MessageConsumer`.

    ``receive`` long-polls for up to the given timeout (SQS caps this at 20s);
    ``send_heartbeat`` maps to ``ChangeMessageVisibility``.
    """

    def __init__(
        self,
        config: SqsConfig,
        *,
        client: SqsClient | None = None,
        scheduler: HeartbeatScheduler | None = None,
        **client_kwargs: Any,
    ) -> None:
        self._config = config
        super().__init__(
            client or SqsClient(config, **client_kwargs),
            config.heartbeat_config,
            scheduler=scheduler,
        )

    @property
    def config(self) -> SqsConfig:
        return self._config
