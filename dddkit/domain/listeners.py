"""Helpers for writing listeners.

The publisher hands every listener whatever was passed to ``publish``; these
helpers do the narrowing so listener code only sees the events it expects.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, ClassVar

from .events import DomainEvent

EventCallback = Callable[[DomainEvent], "Awaitable[None] | None"]


def narrow_event(event: object, *types: str) -> DomainEvent | None:
    """Return ``event`` if it is a ``DomainEvent`` of one of ``types``."""
    if not isinstance(event, DomainEvent):
        return None
    if types and event.type not in types:
        return None
    return event


class FunctionListener:
    """Adapt a plain function or coroutine function into a listener."""

    def __init__(
        self,
        func: EventCallback,
        *,
        event_types: tuple[str, ...] = (),
        name: str | None = None,
    ) -> None:
        self._func = func
        self._event_types = event_types
        self.name = name or getattr(func, "__qualname__", repr(func))

    async def handle(self, event: object) -> None:
        narrowed = narrow_event(event, *self._event_types)
        if narrowed is None:
            return
        result: Any = self._func(narrowed)
        if inspect.isawaitable(result):
            await result

    def __repr__(self) -> str:
        return f"FunctionListener({self.name})"


class TypedListener(ABC):
    """Listener base that only reacts to the event types it declares.

    An empty ``event_types`` accepts every ``DomainEvent``.
    """

    event_types: ClassVar[tuple[str, ...]] = ()

    async def handle(self, event: object) -> None:
        narrowed = narrow_event(event, *self.event_types)
        if narrowed is None:
            return
        await self.on_event(narrowed)

    @abstractmethod
    async def on_event(self, event: DomainEvent) -> None:
        ...


__all__ = ["EventCallback", "FunctionListener", "TypedListener", "narrow_event"]
