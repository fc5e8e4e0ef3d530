"""SQLAlchemy implementation of LocationStore.

Locations live in an embedded SQLite database accessed through SQLAlchemy's
asyncio extension (``aiosqlite`` driver). Each operation opens its own
session, so no session is ever shared between concurrent requests.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, Float, String, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from weather_cache.config import settings
from weather_cache.entities import LocationEntity

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset({"name", "latitude", "longitude"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class LocationRow(Base):
    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def to_entity(self) -> LocationEntity:
        return LocationEntity(
            id=self.id,
            name=self.name,
            latitude=self.latitude,
            longitude=self.longitude,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class SqlLocationRepository:
    """Async SQLAlchemy implementation of the LocationStore protocol.

    Example:
        ```python
        repository = SqlLocationRepository.from_url("sqlite+aiosqlite:///weather.db")
        await repository.startup()
        boise = await repository.create("Boise", 43.6, -116.2)
        await repository.shutdown()
        ```
    """

    def __init__(self, engine: AsyncEngine) -> None:
        """Initialize the repository.

        Args:
            engine: Async engine bound to the location database.
        """
        self._engine = engine
        self._sessions = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_url(cls, database_url: str | None = None, echo: bool | None = None) -> "SqlLocationRepository":
        """Factory method to create SqlLocationRepository with defaults.

        Args:
            database_url: SQLAlchemy async URL. If None, uses settings.
            echo: Log emitted SQL. If None, uses settings.

        Returns:
            Configured SqlLocationRepository
        """
        engine = create_async_engine(
            database_url or settings.database_url,
            echo=settings.database_echo if echo is None else echo,
        )
        return cls(engine)

    async def startup(self) -> None:
        """Create tables if they do not exist yet."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Location store initialized")

    async def shutdown(self) -> None:
        """Dispose of the engine and its connections."""
        await self._engine.dispose()
        logger.info("Location store connections closed")

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        async with self._sessions() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def create(self, name: str, latitude: float, longitude: float) -> LocationEntity:
        async with self._session() as session:
            row = LocationRow(name=name, latitude=latitude, longitude=longitude)
            session.add(row)
            await session.commit()
            logger.info("Created location %d (%s)", row.id, name)
            return row.to_entity()

    async def list_all(self) -> list[LocationEntity]:
        async with self._session() as session:
            result = await session.execute(select(LocationRow).order_by(LocationRow.id))
            return [row.to_entity() for row in result.scalars()]

    async def get(self, location_id: int) -> LocationEntity | None:
        async with self._session() as session:
            row = await session.get(LocationRow, location_id)
            return row.to_entity() if row is not None else None

    async def update(self, location_id: int, **fields: Any) -> LocationEntity | None:
        """Apply a partial update to name, latitude and/or longitude.

        Unknown field names raise ValueError. An update with no fields
        leaves the row (and its ``updated_at``) untouched.
        """
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update location fields: {sorted(unknown)}")

        async with self._session() as session:
            row = await session.get(LocationRow, location_id)
            if row is None:
                return None
            if fields:
                for name, value in fields.items():
                    setattr(row, name, value)
                row.updated_at = _utcnow()
                await session.commit()
            return row.to_entity()

    async def delete(self, location_id: int) -> bool:
        async with self._session() as session:
            row = await session.get(LocationRow, location_id)
            if row is None:
                return False
            await session.delete(row)
            await session.commit()
            logger.info("Deleted location %d", location_id)
            return True

    async def health_check(self) -> bool:
        """Check if the database is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning("Location store health check failed: %s", e)
            return False
