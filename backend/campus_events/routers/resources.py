"""Resource directory routes — venues and equipment."""
import logging
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from campus_events.database import get_db
from campus_events.dependencies import get_principal
from campus_events.models.account import Account
from campus_events.schemas.resource import ResourceCreate, ResourceUpdate, ResourceOut
from campus_events.services import resource_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[ResourceOut])
def list_resources(
    available_only: bool = Query(False),
    db: Session = Depends(get_db),
    principal: Account = Depends(get_principal),
):
    return resource_service.list_resources(db, available_only=available_only)


@router.get("/venues", response_model=list[ResourceOut])
def list_venues(db: Session = Depends(get_db), principal: Account = Depends(get_principal)):
    """Available venues to choose from when proposing an event."""
    return resource_service.list_venues(db)


@router.post("/", response_model=ResourceOut, status_code=status.HTTP_201_CREATED)
def create_resource(
    payload: ResourceCreate,
    db: Session = Depends(get_db),
    principal: Account = Depends(get_principal),
):
    return resource_service.create_resource(db, principal.account_id, payload.model_dump())


@router.get("/{resource_id}", response_model=ResourceOut)
def get_resource(resource_id: str, db: Session = Depends(get_db), principal: Account = Depends(get_principal)):
    return resource_service.get_resource(db, resource_id)


@router.patch("/{resource_id}", response_model=ResourceOut)
def update_resource(
    resource_id: str,
    payload: ResourceUpdate,
    db: Session = Depends(get_db),
    principal: Account = Depends(get_principal),
):
    """Partial update (admin only)."""
    return resource_service.update_resource(
        db, resource_id, principal.account_id, payload.model_dump(exclude_unset=True),
    )


@router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_resource(resource_id: str, db: Session = Depends(get_db), principal: Account = Depends(get_principal)):
    resource_service.delete_resource(db, resource_id, principal.account_id)
