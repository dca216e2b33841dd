"""Student registration listing."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_events.database import get_db
from campus_events.dependencies import get_principal
from campus_events.models.account import Account
from campus_events.schemas.event import EventOut
from campus_events.services import registration_service

router = APIRouter()


@router.get("/mine", response_model=list[EventOut])
def my_registrations(db: Session = Depends(get_db), principal: Account = Depends(get_principal)):
    """Events the caller is registered for."""
    return registration_service.list_for_student(db, principal.account_id)
