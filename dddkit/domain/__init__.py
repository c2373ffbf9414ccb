"""Domain building blocks and the event publisher."""

from .events import DomainEvent, DomainEventPublisher, Listener
from .entity import Entity, EntityId
from .aggregate import AggregateRoot, publish_pending_events
from .listeners import FunctionListener, TypedListener, narrow_event
from .exceptions import (
    BusinessRuleViolation,
    DddKitError,
    DomainError,
    EntityNotFound,
    InvalidValue,
    ProcessorAlreadyRegistered,
)

__all__ = [
    "DomainEvent",
    "DomainEventPublisher",
    "Listener",
    "Entity",
    "EntityId",
    "AggregateRoot",
    "publish_pending_events",
    "FunctionListener",
    "TypedListener",
    "narrow_event",
    "BusinessRuleViolation",
    "DddKitError",
    "DomainError",
    "EntityNotFound",
    "InvalidValue",
    "ProcessorAlreadyRegistered",
]
