"""Configuration models for dddkit."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Literal, get_args


DeliveryLogBackend = Literal["none", "memory", "sqlalchemy"]

_TRUTHY = {"1", "true", "yes"}


@dataclass(slots=True)
class PublisherConfig:
    """Switches for the event publisher."""

    log_dispatch: bool = False


@dataclass(slots=True)
class DeliveryLogConfig:
    """Where per-listener delivery outcomes are recorded."""

    backend: DeliveryLogBackend = "memory"
    dsn: str | None = None
    echo_sql: bool = False
    maxlen: int = 1000

    def resolve_dsn(self) -> str | None:
        if self.dsn:
            return self.dsn
        if self.backend == "sqlalchemy":
            return "sqlite+aiosqlite:///./dddkit.db"
        return None


@dataclass(slots=True)
class QueueConfig:
    max_pending: int = 10000


@dataclass(slots=True)
class DddKitConfig:
    """Top-level configuration container."""

    publisher: PublisherConfig = field(default_factory=PublisherConfig)
    delivery_log: DeliveryLogConfig = field(default_factory=DeliveryLogConfig)
    queue: QueueConfig = field(default_factory=QueueConfig)

    @classmethod
    def from_env(cls) -> "DddKitConfig":
        """Create config from environment variables prefixed with DDDKIT_."""
        prefix = "DDDKIT_"
        backend = os.getenv(f"{prefix}DELIVERY_LOG_BACKEND", "memory").strip().lower()
        if backend not in get_args(DeliveryLogBackend):
            raise ValueError(f"Unsupported delivery log backend '{backend}'")

        return cls(
            publisher=PublisherConfig(
                log_dispatch=os.getenv(f"{prefix}LOG_DISPATCH", "false").lower() in _TRUTHY,
            ),
            delivery_log=DeliveryLogConfig(
                backend=backend,  # type: ignore[arg-type]
                dsn=os.getenv(f"{prefix}DELIVERY_LOG_DSN") or None,
                echo_sql=os.getenv(f"{prefix}DELIVERY_LOG_ECHO_SQL", "false").lower() in _TRUTHY,
                maxlen=_parse_positive_int(f"{prefix}DELIVERY_LOG_MAXLEN", "1000"),
            ),
            queue=QueueConfig(
                max_pending=_parse_positive_int(f"{prefix}QUEUE_MAX_PENDING", "10000"),
            ),
        )


def _parse_positive_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid integer for {name}: {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive")
    return value
