"""Event ORM model."""
import uuid
import enum
from sqlalchemy import Column, String, Text, DateTime, Integer, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from campus_events.database import Base


class EventStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class Event(Base):
    __tablename__ = "events"

    event_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(String(100), nullable=True)
    venue_id = Column(
        String(36), ForeignKey("resources.resource_id", ondelete="SET NULL"), nullable=True,
    )
    resources_required = Column(Text, nullable=True)
    organizer_id = Column(
        String(36), ForeignKey("accounts.account_id", ondelete="CASCADE"), nullable=False, index=True,
    )
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    max_participants = Column(Integer, nullable=True)
    status = Column(SAEnum(EventStatus), nullable=False, default=EventStatus.pending, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    organizer = relationship("Account")
    venue = relationship("Resource")
    registrations = relationship(
        "EventRegistration", back_populates="event",
        cascade="all, delete-orphan", passive_deletes=True,
    )

    @property
    def organizer_name(self):
        return self.organizer.full_name if self.organizer else "Unknown"

    @property
    def venue_name(self):
        return self.venue.name if self.venue else None
