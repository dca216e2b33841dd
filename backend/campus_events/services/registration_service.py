"""Registration service — student membership in approved events.

Capacity is enforced by the database, not by a read in Python followed by a
write: the insert itself is conditional on the event being approved and below
its limit, and it runs after the event row is locked (``SELECT … FOR UPDATE``
on backends that support it; SQLite serializes writers on its own). The unique
(event_id, student_id) constraint catches duplicates that race past the
pre-check.
"""
import logging
import uuid

from sqlalchemy import String, and_, exists, func, insert, literal, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from campus_events.database import commit_or_raise
from campus_events.errors import (
    AlreadyRegistered, Conflict, EventFull, EventNotOpen, StorageUnavailable,
)
from campus_events.models.account import Role
from campus_events.models.event import Event, EventStatus
from campus_events.models.registration import EventRegistration
from campus_events.services.directory_service import require_role

logger = logging.getLogger(__name__)


def is_registered(db: Session, student_id: str, event_id: str) -> bool:
    return db.query(
        exists().where(
            EventRegistration.event_id == event_id,
            EventRegistration.student_id == student_id,
        )
    ).scalar()


def count_for(db: Session, event_id: str) -> int:
    return (
        db.query(func.count(EventRegistration.registration_id))
        .filter(EventRegistration.event_id == event_id)
        .scalar()
    )


def _conditional_insert(registration_id: str, student_id: str, event_id: str):
    """INSERT … SELECT that only produces a row while the event is approved and has room."""
    registrations = EventRegistration.__table__
    events = Event.__table__

    taken = (
        select(func.count())
        .select_from(registrations)
        .where(registrations.c.event_id == event_id)
        .correlate(None)
        .scalar_subquery()
    )
    open_with_room = exists().where(
        and_(
            events.c.event_id == event_id,
            events.c.status == EventStatus.approved,
            or_(events.c.max_participants.is_(None), taken < events.c.max_participants),
        )
    ).correlate(None)
    row = select(
        literal(registration_id, String(36)),
        literal(event_id, String(36)),
        literal(student_id, String(36)),
    ).where(open_with_room)
    return insert(registrations).from_select(["registration_id", "event_id", "student_id"], row)


def register(db: Session, student_id: str, event_id: str) -> EventRegistration:
    require_role(db, student_id, Role.student)

    event = db.query(Event).filter(Event.event_id == event_id).with_for_update().first()
    if event is None or event.status != EventStatus.approved:
        db.rollback()
        raise EventNotOpen()
    if is_registered(db, student_id, event_id):
        db.rollback()
        raise AlreadyRegistered()

    registration_id = str(uuid.uuid4())
    try:
        inserted = db.execute(_conditional_insert(registration_id, student_id, event_id)).rowcount
    except IntegrityError as exc:
        db.rollback()
        if is_registered(db, student_id, event_id):
            raise AlreadyRegistered() from exc
        raise Conflict() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Registration insert for event %s failed: %s", event_id, exc)
        raise StorageUnavailable() from exc

    if inserted != 1:
        db.rollback()
        db.expire_all()
        event = db.get(Event, event_id)
        if event is None or event.status != EventStatus.approved:
            raise EventNotOpen()
        logger.info("Event %s is full, refused student %s", event_id, student_id)
        raise EventFull()

    commit_or_raise(db)
    logger.info("Student %s registered for event %s", student_id, event_id)
    return db.get(EventRegistration, registration_id)


def unregister(db: Session, student_id: str, event_id: str) -> None:
    """Remove the registration if present; a missing one is not an error."""
    removed = (
        db.query(EventRegistration)
        .filter(
            EventRegistration.event_id == event_id,
            EventRegistration.student_id == student_id,
        )
        .delete(synchronize_session=False)
    )
    commit_or_raise(db)
    if removed:
        logger.info("Student %s unregistered from event %s", student_id, event_id)


def list_for_student(db: Session, student_id: str) -> list[Event]:
    return (
        db.query(Event)
        .join(EventRegistration, EventRegistration.event_id == Event.event_id)
        .filter(EventRegistration.student_id == student_id)
        .order_by(Event.start_time)
        .all()
    )
