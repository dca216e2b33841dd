"""Resource directory — venues and equipment referenced by events."""
import logging
from typing import Any

from sqlalchemy.orm import Session

from campus_events.database import commit_or_raise
from campus_events.errors import NotFound
from campus_events.models.account import Role
from campus_events.models.resource import Resource, ResourceType
from campus_events.services.directory_service import require_role

logger = logging.getLogger(__name__)


def get_resource(db: Session, resource_id: str) -> Resource:
    resource = db.get(Resource, resource_id)
    if resource is None:
        raise NotFound("Resource not found")
    return resource


def list_resources(db: Session, available_only: bool = False) -> list[Resource]:
    query = db.query(Resource)
    if available_only:
        query = query.filter(Resource.is_available.is_(True))
    return query.order_by(Resource.name).all()


def list_venues(db: Session) -> list[Resource]:
    """Available venues, as offered when an event is proposed."""
    return (
        db.query(Resource)
        .filter(Resource.type == ResourceType.venue, Resource.is_available.is_(True))
        .order_by(Resource.name)
        .all()
    )


def create_resource(db: Session, actor_id: str, fields: dict[str, Any]) -> Resource:
    require_role(db, actor_id, Role.admin)
    resource = Resource(**fields)
    db.add(resource)
    commit_or_raise(db)
    db.refresh(resource)
    logger.info("Created %s resource '%s' (%s)", resource.type.value, resource.name, resource.resource_id)
    return resource


def update_resource(db: Session, resource_id: str, actor_id: str, updates: dict[str, Any]) -> Resource:
    require_role(db, actor_id, Role.admin)
    resource = get_resource(db, resource_id)
    for field, value in updates.items():
        setattr(resource, field, value)
    commit_or_raise(db)
    db.refresh(resource)
    logger.info("Updated resource %s", resource_id)
    return resource


def delete_resource(db: Session, resource_id: str, actor_id: str) -> None:
    """Delete a resource; events pointing at it as their venue lose the reference."""
    require_role(db, actor_id, Role.admin)
    resource = get_resource(db, resource_id)
    db.delete(resource)
    commit_or_raise(db)
    logger.info("Deleted resource %s", resource_id)
