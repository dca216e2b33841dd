"""EventMutation ORM model — append-only history of event writes."""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, JSON, Enum as SAEnum
from sqlalchemy.sql import func
from campus_events.database import Base


class ActionType(str, enum.Enum):
    create = "create"
    update = "update"
    approve = "approve"
    reject = "reject"
    delete = "delete"


class EventMutation(Base):
    __tablename__ = "event_mutations"

    mutation_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Not a foreign key: history outlives the event it describes.
    event_id = Column(String(36), nullable=False, index=True)
    actor_id = Column(String(36), nullable=False)
    action_type = Column(SAEnum(ActionType), nullable=False)
    before_snapshot = Column(JSON, nullable=True)
    after_snapshot = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
