"""Core event service — owns the event lifecycle.

Responsibilities:
- Authorization hook: organizer or admin may edit/delete, only admins decide status
- Status machine: pending → approved/rejected, approved ⇄ rejected on re-review
- Schedule and venue validation before anything is written
- Mutation ledger (EventMutations) for every write
"""
import logging
from datetime import datetime, timezone
from typing import Optional, Any

from sqlalchemy.orm import Session

from campus_events.database import commit_or_raise
from campus_events.errors import Forbidden, InvalidSchedule, NotFound, UnknownVenue
from campus_events.models.account import Role
from campus_events.models.event import Event, EventStatus
from campus_events.models.event_mutation import EventMutation, ActionType
from campus_events.models.resource import Resource, ResourceType
from campus_events.services.directory_service import require_role

logger = logging.getLogger(__name__)

CONTENT_FIELDS = (
    "title",
    "description",
    "category",
    "venue_id",
    "resources_required",
    "start_time",
    "end_time",
    "max_participants",
)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _event_snapshot(event: Event) -> dict[str, Any]:
    """Serialize an event to a JSON-safe dict for the mutation ledger."""
    return {
        "event_id": event.event_id,
        "title": event.title,
        "category": event.category,
        "venue_id": event.venue_id,
        "start_time": event.start_time.isoformat() if event.start_time else None,
        "end_time": event.end_time.isoformat() if event.end_time else None,
        "max_participants": event.max_participants,
        "status": event.status.value if event.status else None,
    }


def _record(
    db: Session,
    event_id: str,
    actor_id: str,
    action: ActionType,
    before: Optional[dict],
    after: Optional[dict],
) -> None:
    db.add(EventMutation(
        event_id=event_id,
        actor_id=actor_id,
        action_type=action,
        before_snapshot=before,
        after_snapshot=after,
    ))


def _check_authorization(db: Session, event: Event, actor_id: str) -> None:
    """Only the organizer or an admin may change an event's content or delete it."""
    role = require_role(db, actor_id)
    if role != Role.admin and event.organizer_id != actor_id:
        raise Forbidden("Only the organizer or an admin may modify this event")


def _validated_content(db: Session, fields: dict[str, Any]) -> dict[str, Any]:
    """Return the content fields, normalized to UTC, or raise on the first invalid one."""
    content = {name: fields.get(name) for name in CONTENT_FIELDS}
    if content["start_time"] is None or content["end_time"] is None:
        raise InvalidSchedule("Both start and end time are required")
    content["start_time"] = as_utc(content["start_time"])
    content["end_time"] = as_utc(content["end_time"])
    if content["start_time"] >= content["end_time"]:
        raise InvalidSchedule()

    venue_id = content["venue_id"] or None
    content["venue_id"] = venue_id
    if venue_id is not None:
        venue = db.get(Resource, venue_id)
        if venue is None or venue.type != ResourceType.venue:
            raise UnknownVenue(f"Venue {venue_id} does not exist")

    content["description"] = content["description"] or ""
    return content


def get_event(db: Session, event_id: str) -> Event:
    event = db.get(Event, event_id)
    if not event:
        raise NotFound("Event not found")
    return event


def create_event(db: Session, actor_id: str, fields: dict[str, Any]) -> Event:
    """Create a pending event organized by ``actor_id``.

    Any status or organizer in ``fields`` is ignored.
    """
    require_role(db, actor_id)
    content = _validated_content(db, fields)

    event = Event(
        **content,
        organizer_id=actor_id,
        status=EventStatus.pending,
    )
    db.add(event)
    db.flush()

    _record(db, event.event_id, actor_id, ActionType.create, None, _event_snapshot(event))
    commit_or_raise(db)
    db.refresh(event)
    logger.info("Created event '%s' (%s) by organizer %s", event.title, event.event_id, actor_id)
    return event


def update_event(db: Session, event_id: str, actor_id: str, fields: dict[str, Any]) -> Event:
    """Replace an event's content wholesale. Status and organizer are left untouched."""
    event = get_event(db, event_id)
    _check_authorization(db, event, actor_id)
    content = _validated_content(db, fields)

    before = _event_snapshot(event)
    for field, value in content.items():
        setattr(event, field, value)
    event.updated_at = datetime.now(timezone.utc)

    _record(db, event.event_id, actor_id, ActionType.update, before, _event_snapshot(event))
    commit_or_raise(db)
    db.refresh(event)
    logger.info("Updated event %s by %s", event_id, actor_id)
    return event


def _set_status(
    db: Session,
    event_id: str,
    actor_id: str,
    new_status: EventStatus,
    action: ActionType,
) -> Event:
    require_role(db, actor_id, Role.admin)
    event = get_event(db, event_id)
    if event.status == new_status:
        return event

    before = _event_snapshot(event)
    event.status = new_status
    event.updated_at = datetime.now(timezone.utc)

    _record(db, event.event_id, actor_id, action, before, _event_snapshot(event))
    commit_or_raise(db)
    db.refresh(event)
    logger.info("Event %s %s by admin %s", event_id, new_status.value, actor_id)
    return event


def approve_event(db: Session, event_id: str, actor_id: str) -> Event:
    return _set_status(db, event_id, actor_id, EventStatus.approved, ActionType.approve)


def reject_event(db: Session, event_id: str, actor_id: str) -> Event:
    return _set_status(db, event_id, actor_id, EventStatus.rejected, ActionType.reject)


def delete_event(db: Session, event_id: str, actor_id: str) -> None:
    """Hard-delete an event; its registrations go with it."""
    event = get_event(db, event_id)
    _check_authorization(db, event, actor_id)

    before = _event_snapshot(event)
    db.delete(event)
    _record(db, event_id, actor_id, ActionType.delete, before, None)
    commit_or_raise(db)
    logger.info("Deleted event %s by %s", event_id, actor_id)


def list_events(
    db: Session,
    status: Optional[EventStatus] = None,
    organizer_id: Optional[str] = None,
    start_after: Optional[datetime] = None,
    start_before: Optional[datetime] = None,
    upcoming: bool = False,
) -> list[Event]:
    """List events with optional filters. ``upcoming`` means approved and not yet started."""
    query = db.query(Event)
    if upcoming:
        status = EventStatus.approved
        now = datetime.now(timezone.utc)
        start_after = max(as_utc(start_after), now) if start_after else now
    if status:
        query = query.filter(Event.status == status)
    if organizer_id:
        query = query.filter(Event.organizer_id == organizer_id)
    if start_after:
        query = query.filter(Event.start_time >= as_utc(start_after))
    if start_before:
        query = query.filter(Event.start_time <= as_utc(start_before))
    return query.order_by(Event.start_time).all()
