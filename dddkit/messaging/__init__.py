"""Messaging helpers."""

from .queue import InMemoryMessageQueue, Job, MessageQueue, QueueRunReport, QueueingListener

__all__ = [
    "InMemoryMessageQueue",
    "Job",
    "MessageQueue",
    "QueueRunReport",
    "QueueingListener",
]
