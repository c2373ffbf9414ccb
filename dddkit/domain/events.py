"""Domain event dispatch."""

from __future__ import annotations

import asyncio
import inspect
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Protocol, Sequence

from ..storage.base import DeliveryLog, DeliveryRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """A named, timestamped fact raised by domain code."""

    type: str
    payload: Mapping[str, Any] = field(default_factory=dict)
    occurred_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        type: str,
        payload: Mapping[str, Any] | None = None,
        *,
        occurred_on: datetime | None = None,
    ) -> "DomainEvent":
        return cls(
            type=type,
            payload=MappingProxyType(dict(payload or {})),
            occurred_on=occurred_on or datetime.now(timezone.utc),
        )


class Listener(Protocol):
    """Anything with a ``handle`` method; the event shape is not guaranteed."""

    def handle(self, event: object) -> Any: ...


@dataclass(slots=True)
class DeliveryOutcome:
    listener: Listener
    error: BaseException | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


def listener_name(listener: object) -> str:
    try:
        name = getattr(listener, "name", None)
    except Exception:
        name = None
    if isinstance(name, str) and name:
        return name
    cls = type(listener)
    return f"{cls.__module__}.{cls.__qualname__}"


class DomainEventPublisher:
    """Broadcast domain events to every subscribed listener.

    Delivery is best effort: each listener present when ``publish`` starts is
    invoked once, in subscription order, and all of them are awaited together.
    A failing listener never affects the others nor the caller of ``publish``.

    The subscriber list is frozen while a dispatch is running. ``subscribe``
    calls made during dispatch are dropped, ``unsubscribe`` calls are refused
    with a warning, and nested ``publish`` calls return without delivering.
    """

    def __init__(
        self,
        *,
        delivery_log: DeliveryLog | None = None,
        log_dispatch: bool = False,
    ) -> None:
        self._subscribers: list[Listener] = []
        self._publishing = False
        self._delivery_log = delivery_log
        self._log_dispatch = log_dispatch

    @property
    def is_publishing(self) -> bool:
        return self._publishing

    @property
    def subscribers(self) -> tuple[Listener, ...]:
        return tuple(self._subscribers)

    @property
    def delivery_log(self) -> DeliveryLog | None:
        return self._delivery_log

    def attach_delivery_log(self, delivery_log: DeliveryLog | None) -> None:
        self._delivery_log = delivery_log

    def subscribe(self, listener: Listener) -> None:
        if self._publishing:
            return
        self._subscribers.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if self._publishing:
            logger.warning(
                "Refusing to unsubscribe %s while an event is being published.",
                listener_name(listener),
            )
            return
        for index, subscriber in enumerate(self._subscribers):
            if subscriber is listener:
                del self._subscribers[index]
                return

    async def publish(self, event: DomainEvent) -> None:
        if self._publishing:
            return
        with self._dispatching():
            outcomes = await self._deliver(event)
        await self._record(event, outcomes)

    def reset(self) -> None:
        """Drop every subscriber; meant for use between independent sessions."""
        self._subscribers = []

    @contextmanager
    def _dispatching(self) -> Iterator[None]:
        self._publishing = True
        try:
            yield
        finally:
            self._publishing = False

    async def _deliver(self, event: DomainEvent) -> list[DeliveryOutcome]:
        outcomes: list[DeliveryOutcome] = []
        pending: list[Any] = []
        waiting: list[DeliveryOutcome] = []
        for subscriber in self._subscribers:
            outcome = DeliveryOutcome(listener=subscriber)
            outcomes.append(outcome)
            if self._log_dispatch:
                logger.debug(
                    "Calling %s for event '%s'.", listener_name(subscriber), _event_type(event)
                )
            try:
                result = subscriber.handle(event)
            except Exception as exc:
                outcome.error = exc
                continue
            if inspect.isawaitable(result):
                pending.append(result)
                waiting.append(outcome)

        results = await asyncio.gather(*pending, return_exceptions=True)
        for outcome, result in zip(waiting, results):
            if isinstance(result, BaseException):
                outcome.error = result

        for outcome in outcomes:
            if outcome.error is not None:
                logger.error(
                    "Listener %s failed handling event '%s': %s",
                    listener_name(outcome.listener),
                    _event_type(event),
                    outcome.error,
                    exc_info=outcome.error,
                )
        return outcomes

    async def _record(self, event: DomainEvent, outcomes: Sequence[DeliveryOutcome]) -> None:
        if self._delivery_log is None or not outcomes:
            return
        try:
            records: list[DeliveryRecord] = [
                DeliveryRecord.from_outcome(event, listener_name(outcome.listener), outcome.error)
                for outcome in outcomes
            ]
            await self._delivery_log.add_records(records)
        except Exception:
            logger.exception(
                "Delivery log failed to record outcomes for event '%s'.", _event_type(event)
            )


def _event_type(event: object) -> str:
    return str(getattr(event, "type", type(event).__name__))


__all__ = [
    "DeliveryOutcome",
    "DomainEvent",
    "DomainEventPublisher",
    "Listener",
    "listener_name",
]
