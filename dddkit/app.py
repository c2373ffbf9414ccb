"""Composition root wiring the publisher and its collaborators."""

from __future__ import annotations

from typing import Any

from .config import DddKitConfig
from .domain.events import DomainEventPublisher, listener_name
from .messaging.queue import InMemoryMessageQueue
from .storage.base import DeliveryLog
from .storage.memory import InMemoryDeliveryLog
from .storage.sqlalchemy import AsyncSQLAlchemyDeliveryLog


class DomainApp:
    """Owns the one publisher a host process shares with its components."""

    def __init__(
        self,
        config: DddKitConfig,
        *,
        publisher: DomainEventPublisher | None = None,
        delivery_log: DeliveryLog | None = None,
        queue: InMemoryMessageQueue | None = None,
    ) -> None:
        self.config = config
        self._sqlalchemy_log: AsyncSQLAlchemyDeliveryLog | None = None
        self.delivery_log = delivery_log or self._wire_delivery_log()
        self.publisher = publisher or DomainEventPublisher(
            log_dispatch=config.publisher.log_dispatch,
        )
        if self.publisher.delivery_log is None:
            self.publisher.attach_delivery_log(self.delivery_log)
        self.queue = queue or InMemoryMessageQueue(max_pending=config.queue.max_pending)

    def _wire_delivery_log(self) -> DeliveryLog | None:
        settings = self.config.delivery_log
        if settings.backend == "none":
            return None
        if settings.backend == "memory":
            return InMemoryDeliveryLog(maxlen=settings.maxlen)
        if settings.backend == "sqlalchemy":
            dsn = settings.resolve_dsn()
            if not dsn:
                raise ValueError("SQLAlchemy delivery log requires a DSN")
            log = AsyncSQLAlchemyDeliveryLog(dsn, echo=settings.echo_sql)
            self._sqlalchemy_log = log
            return log
        raise ValueError(f"Unsupported delivery log backend {settings.backend}")

    def snapshot(self) -> dict[str, Any]:
        """Export current wiring for debugging."""
        return {
            "delivery_log": self.config.delivery_log.backend,
            "publishing": self.publisher.is_publishing,
            "subscribers": [listener_name(sub) for sub in self.publisher.subscribers],
            "pending_jobs": [job.name for job in self.queue.pending()],
        }

    def reset(self) -> None:
        """Drop all subscribers between independent sessions."""
        self.publisher.reset()

    async def init_backend(self) -> None:
        """Create delivery log tables when a database backend is configured."""
        if self._sqlalchemy_log:
            await self._sqlalchemy_log.init_models()

    async def close(self) -> None:
        if self._sqlalchemy_log:
            await self._sqlalchemy_log.dispose()
