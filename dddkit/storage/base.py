"""Storage abstractions for delivery outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.events import DomainEvent


@dataclass(slots=True)
class DeliveryRecord:
    event_type: str
    occurred_on: datetime | None
    listener: str
    succeeded: bool
    error: str | None = None
    recorded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_outcome(
        cls, event: "DomainEvent | object", listener: str, error: BaseException | None
    ) -> "DeliveryRecord":
        return cls(
            event_type=str(getattr(event, "type", type(event).__name__)),
            occurred_on=getattr(event, "occurred_on", None),
            listener=listener,
            succeeded=error is None,
            error=_describe_error(error) if error is not None else None,
        )


def _describe_error(error: BaseException) -> str:
    try:
        return repr(error)
    except Exception:
        return type(error).__name__


class DeliveryLog(Protocol):
    async def add_records(self, records: Sequence[DeliveryRecord]) -> None:
        ...

    async def recent(self, limit: int = 50, *, failed_only: bool = False) -> Sequence[DeliveryRecord]:
        ...
