"""dddkit public API."""

from .app import DomainApp
from .config import DddKitConfig
from .domain import AggregateRoot, DomainEvent, DomainEventPublisher, Entity, EntityId

__all__ = [
    "AggregateRoot",
    "DddKitConfig",
    "DomainApp",
    "DomainEvent",
    "DomainEventPublisher",
    "Entity",
    "EntityId",
]
