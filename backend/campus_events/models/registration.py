"""EventRegistration ORM model — a (event, student) membership pair."""
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from campus_events.database import Base


class EventRegistration(Base):
    __tablename__ = "event_registrations"
    __table_args__ = (
        UniqueConstraint("event_id", "student_id", name="uq_event_registrations_event_student"),
    )

    registration_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(
        String(36), ForeignKey("events.event_id", ondelete="CASCADE"), nullable=False, index=True,
    )
    student_id = Column(
        String(36), ForeignKey("accounts.account_id", ondelete="CASCADE"), nullable=False, index=True,
    )
    registered_at = Column(DateTime(timezone=True), server_default=func.now())

    event = relationship("Event", back_populates="registrations")
