"""Dashboard counters for admins and organizers."""
from sqlalchemy import func
from sqlalchemy.orm import Session

from campus_events.models.account import Account, Role
from campus_events.models.event import Event, EventStatus
from campus_events.models.registration import EventRegistration
from campus_events.models.resource import Resource
from campus_events.services.directory_service import require_role


def admin_stats(db: Session, actor_id: str) -> dict[str, int]:
    require_role(db, actor_id, Role.admin)
    by_status = dict(
        db.query(Event.status, func.count(Event.event_id)).group_by(Event.status).all()
    )
    return {
        "total_events": sum(by_status.values()),
        "pending_events": by_status.get(EventStatus.pending, 0),
        "approved_events": by_status.get(EventStatus.approved, 0),
        "rejected_events": by_status.get(EventStatus.rejected, 0),
        "total_accounts": db.query(func.count(Account.account_id)).scalar(),
        "pending_accounts": (
            db.query(func.count(Account.account_id))
            .filter(Account.is_approved.is_(False))
            .scalar()
        ),
        "total_resources": db.query(func.count(Resource.resource_id)).scalar(),
    }


def organizer_stats(db: Session, actor_id: str) -> dict[str, int]:
    """Events the actor organized and how many registrations they drew in total."""
    require_role(db, actor_id)
    my_events = (
        db.query(func.count(Event.event_id))
        .filter(Event.organizer_id == actor_id)
        .scalar()
    )
    total_participants = (
        db.query(func.count(EventRegistration.registration_id))
        .join(Event, Event.event_id == EventRegistration.event_id)
        .filter(Event.organizer_id == actor_id)
        .scalar()
    )
    return {"my_events": my_events, "total_participants": total_participants}
