"""Identity primitives for domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar
from uuid import uuid4

from .exceptions import InvalidValue


@dataclass(frozen=True, slots=True)
class EntityId:
    """String identifier compared by value."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise InvalidValue(f"{type(self).__name__} requires a non-empty string, got {self.value!r}")

    @classmethod
    def generate(cls) -> "EntityId":
        return cls(uuid4().hex)

    def __str__(self) -> str:
        return self.value


IdT = TypeVar("IdT", bound=EntityId)


class Entity(Generic[IdT]):
    """Base class for objects defined by identity rather than attributes.

    Two entities are equal when they are the same object or when they are
    instances of the same class carrying equal identifiers.
    """

    def __init__(self, id: IdT) -> None:
        self._id = id

    @property
    def id(self) -> IdT:
        return self._id

    def __eq__(self, other: object) -> bool:
        if other is None or not isinstance(other, Entity):
            return False
        if self is other:
            return True
        return type(self) is type(other) and self._id == other._id

    def __hash__(self) -> int:
        return hash((type(self), self._id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id.value!r})"
