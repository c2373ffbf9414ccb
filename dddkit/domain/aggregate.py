"""Aggregate roots collect events until they are handed to the publisher."""

from __future__ import annotations

from .entity import Entity, IdT
from .events import DomainEvent, DomainEventPublisher


class AggregateRoot(Entity[IdT]):
    def __init__(self, id: IdT) -> None:
        super().__init__(id)
        self._domain_events: list[DomainEvent] = []

    def add_domain_event(self, event: DomainEvent) -> None:
        self._domain_events.append(event)

    @property
    def domain_events(self) -> tuple[DomainEvent, ...]:
        return tuple(self._domain_events)

    def clear_domain_events(self) -> None:
        self._domain_events.clear()

    def pull_domain_events(self) -> list[DomainEvent]:
        events = list(self._domain_events)
        self._domain_events.clear()
        return events


async def publish_pending_events(
    aggregate: AggregateRoot, publisher: DomainEventPublisher
) -> int:
    """Publish and clear the aggregate's pending events in the order they were raised.

    Returns the number of events handed to the publisher. Called from inside
    a listener the publisher drops these events, since it is still dispatching.
    """
    events = aggregate.pull_domain_events()
    for event in events:
        await publisher.publish(event)
    return len(events)
