"""In-memory delivery log."""

from __future__ import annotations

from collections import deque
from typing import Deque, Sequence

from .base import DeliveryLog, DeliveryRecord


class InMemoryDeliveryLog(DeliveryLog):
    def __init__(self, *, maxlen: int = 1000) -> None:
        self._records: Deque[DeliveryRecord] = deque(maxlen=maxlen)

    async def add_records(self, records: Sequence[DeliveryRecord]) -> None:
        self._records.extend(records)

    async def recent(self, limit: int = 50, *, failed_only: bool = False) -> Sequence[DeliveryRecord]:
        filtered = [
            rec for rec in reversed(self._records) if not failed_only or not rec.succeeded
        ]
        return filtered[:limit]

    def dump(self) -> list[DeliveryRecord]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()
