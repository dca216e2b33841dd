"""Pydantic schemas for Events."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from campus_events.models.event import EventStatus


class EventContent(BaseModel):
    """Content fields an organizer controls; also the full payload of an update."""

    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    category: Optional[str] = None
    venue_id: Optional[str] = None
    resources_required: Optional[str] = None
    start_time: datetime
    end_time: datetime
    max_participants: Optional[int] = Field(default=None, gt=0)


class EventCreate(EventContent):
    # Accepted for compatibility with older clients and ignored: new events are always pending.
    status: Optional[str] = None


class EventUpdate(EventContent):
    pass


class EventOut(BaseModel):
    event_id: str
    title: str
    description: str
    category: Optional[str] = None
    venue_id: Optional[str] = None
    venue_name: Optional[str] = None
    resources_required: Optional[str] = None
    organizer_id: str
    organizer_name: str
    start_time: datetime
    end_time: datetime
    max_participants: Optional[int] = None
    status: EventStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RegistrationStatus(BaseModel):
    event_id: str
    is_registered: bool
    registered_count: int
    max_participants: Optional[int] = None
