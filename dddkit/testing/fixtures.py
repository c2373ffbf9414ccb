"""Pytest fixtures for dddkit."""

from __future__ import annotations

import pytest

from ..app import DomainApp
from ..config import DddKitConfig
from ..domain.events import DomainEventPublisher


@pytest.fixture()
def publisher() -> DomainEventPublisher:
    return DomainEventPublisher()


@pytest.fixture()
def memory_app() -> DomainApp:
    return DomainApp(DddKitConfig())


def app_fixture(**kwargs) -> DomainApp:
    """Helper for ad-hoc tests where pytest is not available."""
    return DomainApp(DddKitConfig(**kwargs))
