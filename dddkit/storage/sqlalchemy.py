"""SQLAlchemy delivery log backend."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Sequence

from sqlalchemy import Boolean, DateTime, Integer, String, Text, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .base import DeliveryLog, DeliveryRecord


class Base(DeclarativeBase):
    pass


class DeliveryTable(Base):
    __tablename__ = "dddkit_deliveries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_type: Mapped[str] = mapped_column(String(255), index=True)
    occurred_on: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    listener: Mapped[str] = mapped_column(String(512))
    succeeded: Mapped[bool] = mapped_column(Boolean, default=True)
    error: Mapped[str | None] = mapped_column(Text, nullable=True)
    recorded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))


class AsyncSQLAlchemyDeliveryLog(DeliveryLog):
    """Delivery log backed by an async SQLAlchemy engine."""

    def __init__(self, dsn: str, *, echo: bool = False) -> None:
        self._engine = create_async_engine(dsn, echo=echo, future=True)
        self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            yield session

    async def init_models(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()

    async def add_records(self, records: Sequence[DeliveryRecord]) -> None:
        async with self.session() as session:
            session.add_all(
                [
                    DeliveryTable(
                        event_type=record.event_type,
                        occurred_on=record.occurred_on,
                        listener=record.listener,
                        succeeded=record.succeeded,
                        error=record.error,
                        recorded_at=record.recorded_at,
                    )
                    for record in records
                ]
            )
            await session.commit()

    async def recent(self, limit: int = 50, *, failed_only: bool = False) -> Sequence[DeliveryRecord]:
        async with self.session() as session:
            stmt = select(DeliveryTable)
            if failed_only:
                stmt = stmt.where(DeliveryTable.succeeded.is_(False))
            stmt = stmt.order_by(DeliveryTable.id.desc()).limit(limit)
            rows = (await session.execute(stmt)).scalars().all()
            return [
                DeliveryRecord(
                    event_type=row.event_type,
                    occurred_on=row.occurred_on,
                    listener=row.listener,
                    succeeded=row.succeeded,
                    error=row.error,
                    recorded_at=row.recorded_at,
                )
                for row in rows
            ]
