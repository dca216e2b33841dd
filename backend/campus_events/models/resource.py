"""Resource (venue / equipment) ORM model."""
import uuid
import enum
from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, Enum as SAEnum
from sqlalchemy.sql import func
from campus_events.database import Base


class ResourceType(str, enum.Enum):
    venue = "venue"
    music_instruments = "music_instruments"
    projector = "projector"
    chairs = "chairs"
    tables = "tables"
    microphone = "microphone"
    speakers = "speakers"
    other = "other"


class Resource(Base):
    __tablename__ = "resources"

    resource_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(150), nullable=False)
    type = Column(SAEnum(ResourceType), nullable=False, default=ResourceType.other)
    description = Column(Text, nullable=True)
    capacity = Column(Integer, nullable=True)
    location = Column(String(255), nullable=True)
    is_available = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
