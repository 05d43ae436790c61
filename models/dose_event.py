"""
DoseEvent model: one scheduled or taken dose.
"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean
from sqlalchemy.sql import func

from core.database import Base


class DoseEvent(Base):
    """A dose of a medication at a specific local wall-clock time."""

    __tablename__ = "dose_events"

    id = Column(Integer, primary_key=True, index=True)

    # Naive local time; both schedule key and sort key
    timestamp = Column(DateTime, nullable=False, index=True)

    # Denormalized medication name, independent of the catalogue row's lifecycle
    name = Column(String(255), nullable=False, default="")
    amount = Column(String(100), nullable=False, default="")
    is_completed = Column(Boolean, nullable=False, default=False)

    notification_id = Column(String(512), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<DoseEvent(id={self.id}, name='{self.name}', timestamp={self.timestamp})>"
