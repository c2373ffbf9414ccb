"""Delivery log backends for dddkit."""

from .base import DeliveryLog, DeliveryRecord
from .memory import InMemoryDeliveryLog
from .sqlalchemy import AsyncSQLAlchemyDeliveryLog

__all__ = [
    "DeliveryLog",
    "DeliveryRecord",
    "InMemoryDeliveryLog",
    "AsyncSQLAlchemyDeliveryLog",
]
