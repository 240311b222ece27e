"""
Fleet API — Car SQLAlchemy Model
=================================

What:  ORM model representing the `cars` table.
Who:   Used by the cars DocumentStore and by Alembic for schema management.

Table Design Rationale:
    - UUID primary key: generated in Python so the same model works on
      PostgreSQL and SQLite
    - driver_id: free-text reference to a driver, deliberately not a foreign key
    - created_at: internal insertion timestamp, orders list results; not exposed
    - Index on driver_id: backs GET /api/cars/findByDriverId/{driverId}
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fleet_api.database import Base


class Car(Base):
    """A car assigned to a driver."""

    __tablename__ = "cars"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    driver_id: Mapped[str] = mapped_column(String(64), nullable=False)
    make: Mapped[str] = mapped_column(String(100), nullable=False)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    number: Mapped[str] = mapped_column(String(32), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_cars_driver_id", "driver_id"),
    )

    def __repr__(self) -> str:
        return f"<Car(id={self.id}, number='{self.number}', driver_id='{self.driver_id}')>"
