"""Automated checks to highlight wiring issues."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from ..app import DomainApp
from ..domain.events import listener_name
from ..messaging.queue import InMemoryMessageQueue, QueueingListener


@dataclass(slots=True)
class ChecklistIssue:
    severity: str
    message: str


def run_checklist(app: DomainApp) -> list[ChecklistIssue]:
    issues: list[ChecklistIssue] = []
    subscribers = app.publisher.subscribers
    if not subscribers:
        issues.append(ChecklistIssue("warning", "No listeners subscribed to the publisher."))

    counts = Counter(id(sub) for sub in subscribers)
    reported: set[int] = set()
    for sub in subscribers:
        key = id(sub)
        if counts[key] > 1 and key not in reported:
            reported.add(key)
            issues.append(
                ChecklistIssue(
                    "warning",
                    f"Listener {listener_name(sub)} is subscribed {counts[key]} times "
                    "and will receive every event more than once.",
                )
            )

    for sub in subscribers:
        if not isinstance(sub, QueueingListener) or not isinstance(sub.queue, InMemoryMessageQueue):
            continue
        orphaned = sorted(
            {job.name for job in sub.queue.pending() if not sub.queue.has_processor(job.name)}
        )
        for name in orphaned:
            issues.append(
                ChecklistIssue("warning", f"Queued jobs '{name}' have no registered processor.")
            )

    settings = app.config.delivery_log
    if settings.backend == "sqlalchemy" and not settings.dsn:
        issues.append(
            ChecklistIssue(
                "error",
                "SQLAlchemy delivery log has no DSN configured; set DDDKIT_DELIVERY_LOG_DSN "
                "instead of relying on the implicit ./dddkit.db file.",
            )
        )

    return issues
