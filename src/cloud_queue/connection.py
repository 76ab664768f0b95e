"""aiobotocore client management shared by the SQS and SNS adapters."""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from aiobotocore.session import AioSession
from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import TransportError

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger("cloud_queue.connection")

# Cheapest read call per service, used by health_check().
_HEALTH_CHECKS: dict[str, tuple[str, dict[str, Any]]] = {
    "sqs": ("list_queues", {"MaxResults": 1}),
    "sns": ("list_topics", {}),
}


@contextmanager
def translate_errors(operation: str) -> Iterator[None]:
    """Re-raise botocore failures inside the block as :class:`TransportError`."""
    try:
        yield
    except (ClientError, BotoCoreError) as e:
        raise TransportError(operation, str(e)) from e


class AWSClientManager:
    """Manages one lazily-created aiobotocore client for a service."""

    def __init__(
        self,
        service_name: str,
        region_name: str = "us-east-1",
        *,
        endpoint_url: str | None = None,
        session: AioSession | None = None,
        **client_kwargs: Any,
    ) -> None:
        """Configure service, region and optional endpoint/session/client kwargs."""
        self._service = service_name
        self._region = region_name
        self._endpoint_url = endpoint_url
        self._session = session or AioSession()
        self._client_kwargs = client_kwargs
        self._client: Any = None
        self._client_cm: Any = None
        self._lock = asyncio.Lock()

    @property
    def service_name(self) -> str:
        return self._service

    async def get_client(self) -> Any:
        """Return shared client; create if needed.

        Concurrent first calls share a single client.
        """
        if self._client is not None:
            return self._client
        async with self._lock:
            if self._client is None:
                kwargs = dict(self._client_kwargs)
                if self._endpoint_url:
                    kwargs["endpoint_url"] = self._endpoint_url
                client_cm = self._session.create_client(
                    self._service,
                    region_name=self._region,
                    **kwargs,
                )
                self._client = await client_cm.__aenter__()
                self._client_cm = client_cm
                logger.debug(
                    "Opened %s client (region=%s, endpoint=%s)",
                    self._service,
                    self._region,
                    self._endpoint_url,
                )
        return self._client

    async def close(self) -> None:
        """Close the client if open."""
        if self._client_cm is not None:
            cm = self._client_cm
            self._client_cm = None
            self._client = None
            await cm.__aexit__(None, None, None)

    async def health_check(self) -> bool:
        """Return True if a lightweight list call succeeds."""
        operation, kwargs = _HEALTH_CHECKS.get(self._service, ("list_queues", {}))
        try:
            client = await self.get_client()
            await getattr(client, operation)(**kwargs)
            return True
        except Exception:  # noqa: BLE001
            return False
