"""Job queue abstraction and an in-process implementation."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Deque, Dict, Generic, Protocol, TypeVar
from uuid import uuid4

from ..domain.events import DomainEvent
from ..domain.exceptions import ProcessorAlreadyRegistered

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class Job(Generic[T]):
    name: str
    data: T
    opts: Dict[str, Any] | None = None
    job_id: str = field(default_factory=lambda: uuid4().hex)


JobProcessor = Callable[[Job[Any]], Awaitable[None]]


class MessageQueue(Protocol):
    async def add(self, job: Job[Any]) -> Job[Any]:
        ...

    def process(self, name: str, callback: JobProcessor) -> None:
        ...


@dataclass(slots=True)
class QueueRunReport:
    processed: int = 0
    failed: int = 0
    skipped: int = 0


class InMemoryMessageQueue(MessageQueue):
    """FIFO queue drained explicitly with ``run_pending``."""

    def __init__(self, *, max_pending: int = 10000) -> None:
        if max_pending <= 0:
            raise ValueError("max_pending must be positive")
        self._max_pending = max_pending
        self._pending: Deque[Job[Any]] = deque()
        self._processors: Dict[str, JobProcessor] = {}

    async def add(self, job: Job[Any]) -> Job[Any]:
        if len(self._pending) >= self._max_pending:
            dropped = self._pending.popleft()
            logger.warning(
                "Queue is full (%s jobs); discarding oldest job '%s' (%s).",
                self._max_pending,
                dropped.name,
                dropped.job_id,
            )
        self._pending.append(job)
        return job

    def process(self, name: str, callback: JobProcessor) -> None:
        if name in self._processors:
            raise ProcessorAlreadyRegistered(name)
        self._processors[name] = callback

    def has_processor(self, name: str) -> bool:
        return name in self._processors

    def pending(self) -> tuple[Job[Any], ...]:
        return tuple(self._pending)

    async def run_pending(self) -> QueueRunReport:
        """Run every pending job that has a processor, in FIFO order.

        Jobs without a processor stay queued. Jobs added while draining wait
        for the next call.
        """
        report = QueueRunReport()
        batch = list(self._pending)
        self._pending.clear()
        unprocessed: list[Job[Any]] = []
        for job in batch:
            processor = self._processors.get(job.name)
            if processor is None:
                unprocessed.append(job)
                report.skipped += 1
                continue
            try:
                await processor(job)
            except Exception as exc:
                report.failed += 1
                logger.error("Job '%s' (%s) failed: %s", job.name, job.job_id, exc, exc_info=True)
                continue
            report.processed += 1
        self._pending.extendleft(reversed(unprocessed))
        return report


class QueueingListener:
    """Forward each published domain event to a queue as a job named after its type."""

    def __init__(self, queue: MessageQueue, *, name: str = "queueing-listener") -> None:
        self.queue = queue
        self.name = name

    async def handle(self, event: object) -> None:
        if not isinstance(event, DomainEvent):
            return
        await self.queue.add(Job(name=event.type, data=event))


__all__ = [
    "InMemoryMessageQueue",
    "Job",
    "JobProcessor",
    "MessageQueue",
    "QueueRunReport",
    "QueueingListener",
]
