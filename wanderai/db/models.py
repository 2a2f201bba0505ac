"""SQLAlchemy ORM models for cloud-synced itineraries and day notes."""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKeyConstraint, Index, Integer, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func

JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class SavedItinerary(Base):
    """Saved itinerary table - full snapshot stored as a JSON document."""

    __tablename__ = "saved_itinerary"
    __table_args__ = (Index("idx_saved_itinerary_user", "user_id", "created_at"),)

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    itinerary_id: Mapped[str] = mapped_column(Text, primary_key=True)
    destination: Mapped[str] = mapped_column(Text, nullable=False)
    data: Mapped[dict[str, Any]] = mapped_column(JSONDocument, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Relationships
    notes: Mapped[list["DayNote"]] = relationship(
        "DayNote", back_populates="itinerary", cascade="all, delete-orphan"
    )


class DayNote(Base):
    """Day note table - notes synced per day, independent of the snapshot."""

    __tablename__ = "day_note"
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id", "itinerary_id"],
            ["saved_itinerary.user_id", "saved_itinerary.itinerary_id"],
            ondelete="CASCADE",
        ),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    itinerary_id: Mapped[str] = mapped_column(Text, primary_key=True)
    day: Mapped[int] = mapped_column(Integer, primary_key=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Relationships
    itinerary: Mapped["SavedItinerary"] = relationship("SavedItinerary", back_populates="notes")
