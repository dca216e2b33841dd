"""Event API routes, delegating every rule to event_service."""
import logging
from typing import Optional
from datetime import datetime
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from campus_events.database import get_db
from campus_events.dependencies import get_principal
from campus_events.models.account import Account
from campus_events.models.event import EventStatus
from campus_events.schemas.event import EventCreate, EventUpdate, EventOut, RegistrationStatus
from campus_events.services import event_service, registration_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    db: Session = Depends(get_db),
    principal: Account = Depends(get_principal),
):
    """Propose an event. It starts pending whatever status the payload carries."""
    return event_service.create_event(
        db=db,
        actor_id=principal.account_id,
        fields=payload.model_dump(exclude={"status"}),
    )


@router.get("/", response_model=list[EventOut])
def list_events(
    status_filter: Optional[EventStatus] = Query(None, alias="status"),
    organizer_id: Optional[str] = Query(None),
    start_after: Optional[datetime] = Query(None),
    start_before: Optional[datetime] = Query(None),
    upcoming: bool = Query(False, description="Approved events that have not started yet"),
    db: Session = Depends(get_db),
    principal: Account = Depends(get_principal),
):
    """List events with optional filters."""
    return event_service.list_events(
        db,
        status=status_filter,
        organizer_id=organizer_id,
        start_after=start_after,
        start_before=start_before,
        upcoming=upcoming,
    )


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, db: Session = Depends(get_db), principal: Account = Depends(get_principal)):
    """Fetch a single event by ID."""
    return event_service.get_event(db, event_id)


@router.put("/{event_id}", response_model=EventOut)
def update_event(
    event_id: str,
    payload: EventUpdate,
    db: Session = Depends(get_db),
    principal: Account = Depends(get_principal),
):
    """Replace an event's content (organizer or admin). Status is unchanged."""
    return event_service.update_event(
        db=db,
        event_id=event_id,
        actor_id=principal.account_id,
        fields=payload.model_dump(),
    )


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(event_id: str, db: Session = Depends(get_db), principal: Account = Depends(get_principal)):
    """Delete an event and its registrations (organizer or admin)."""
    event_service.delete_event(db, event_id, principal.account_id)


@router.post("/{event_id}/approve", response_model=EventOut)
def approve_event(event_id: str, db: Session = Depends(get_db), principal: Account = Depends(get_principal)):
    """Approve an event (admin only). Approving twice is a no-op."""
    return event_service.approve_event(db, event_id, principal.account_id)


@router.post("/{event_id}/reject", response_model=EventOut)
def reject_event(event_id: str, db: Session = Depends(get_db), principal: Account = Depends(get_principal)):
    """Reject an event (admin only), including one already approved."""
    return event_service.reject_event(db, event_id, principal.account_id)


@router.get("/{event_id}/registration", response_model=RegistrationStatus)
def registration_status(
    event_id: str,
    db: Session = Depends(get_db),
    principal: Account = Depends(get_principal),
):
    """Whether the caller is registered, and how many seats are taken."""
    event = event_service.get_event(db, event_id)
    return RegistrationStatus(
        event_id=event_id,
        is_registered=registration_service.is_registered(db, principal.account_id, event_id),
        registered_count=registration_service.count_for(db, event_id),
        max_participants=event.max_participants,
    )


@router.post("/{event_id}/registration", response_model=RegistrationStatus, status_code=status.HTTP_201_CREATED)
def register(event_id: str, db: Session = Depends(get_db), principal: Account = Depends(get_principal)):
    """Register the calling student for an approved event."""
    registration_service.register(db, principal.account_id, event_id)
    return registration_status(event_id, db, principal)


@router.delete("/{event_id}/registration", status_code=status.HTTP_204_NO_CONTENT)
def unregister(event_id: str, db: Session = Depends(get_db), principal: Account = Depends(get_principal)):
    """Drop the caller's registration. Succeeds even if there was none."""
    registration_service.unregister(db, principal.account_id, event_id)
