"""Pydantic schemas for dashboard statistics."""
from pydantic import BaseModel


class AdminStats(BaseModel):
    total_events: int
    pending_events: int
    approved_events: int
    rejected_events: int
    total_accounts: int
    pending_accounts: int
    total_resources: int


class OrganizerStats(BaseModel):
    my_events: int
    total_participants: int
