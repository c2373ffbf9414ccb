"""Testing utilities for dddkit."""

from .factory import EventFactory
from .fixtures import app_fixture, memory_app, publisher
from .recorder import FailingListener, RecordingListener, SyncFailingListener, republishing_side_effect

__all__ = [
    "EventFactory",
    "FailingListener",
    "RecordingListener",
    "SyncFailingListener",
    "app_fixture",
    "memory_app",
    "publisher",
    "republishing_side_effect",
]
