"""Dashboard statistics routes."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_events.database import get_db
from campus_events.dependencies import get_principal
from campus_events.models.account import Account
from campus_events.schemas.stats import AdminStats, OrganizerStats
from campus_events.services import stats_service

router = APIRouter()


@router.get("/admin", response_model=AdminStats)
def admin_stats(db: Session = Depends(get_db), principal: Account = Depends(get_principal)):
    return stats_service.admin_stats(db, principal.account_id)


@router.get("/organizer", response_model=OrganizerStats)
def organizer_stats(db: Session = Depends(get_db), principal: Account = Depends(get_principal)):
    """Counts for the events the caller organized."""
    return stats_service.organizer_stats(db, principal.account_id)
