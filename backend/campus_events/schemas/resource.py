"""Pydantic schemas for Resources."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from campus_events.models.resource import ResourceType


class ResourceCreate(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    type: ResourceType = ResourceType.other
    description: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    location: Optional[str] = None
    is_available: bool = True


class ResourceUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    type: Optional[ResourceType] = None
    description: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    location: Optional[str] = None
    is_available: Optional[bool] = None

    @field_validator("name", "type", "is_available")
    @classmethod
    def not_null(cls, value):
        # Omit a field to leave it unchanged; null is not a value these columns hold.
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class ResourceOut(BaseModel):
    resource_id: str
    name: str
    type: ResourceType
    description: Optional[str] = None
    capacity: Optional[int] = None
    location: Optional[str] = None
    is_available: bool
    created_at: datetime

    model_config = {"from_attributes": True}
