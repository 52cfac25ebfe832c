"""Relationship tracking routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_db, get_current_user
from api.responses import success_response
from domain.enums import Priority, RelationshipType, RelationshipStatus
from domain.models import AppUser
from domain.schemas.record_schemas import (
    RelationshipCreate,
    RelationshipUpdate,
    RelationshipResponse,
    CommunicationLogCreate,
    CommunicationLogResponse,
)
from services.record_service import RelationshipService

router = APIRouter(prefix="/relationships", tags=["Relationships"])
logger = logging.getLogger("lyfe.api.relationships")


@router.get("", response_model=List[RelationshipResponse])
def list_relationships(
    rel_type: Optional[RelationshipType] = Query(None, alias="type"),
    rel_status: Optional[RelationshipStatus] = Query(None, alias="status"),
    priority: Optional[Priority] = Query(None),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return RelationshipService.list_relationships(db, user.user_id, rel_type, rel_status, priority)


@router.post("", response_model=RelationshipResponse, status_code=status.HTTP_201_CREATED)
def create_relationship(
    payload: RelationshipCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return RelationshipService.create_relationship(db, user.user_id, payload)


@router.get("/{relationship_id}", response_model=RelationshipResponse)
def get_relationship(
    relationship_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return RelationshipService.get_relationship(db, user.user_id, relationship_id)


@router.put("/{relationship_id}", response_model=RelationshipResponse)
def update_relationship(
    relationship_id: UUID,
    payload: RelationshipUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return RelationshipService.update_relationship(db, user.user_id, relationship_id, payload)


@router.delete("/{relationship_id}")
def delete_relationship(
    relationship_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    RelationshipService.delete_relationship(db, user.user_id, relationship_id)
    return success_response(message="Relationship deleted")


@router.post(
    "/{relationship_id}/communications",
    response_model=CommunicationLogResponse,
    status_code=status.HTTP_201_CREATED,
)
def log_communication(
    relationship_id: UUID,
    payload: CommunicationLogCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Record a conversation; ``last_contact`` moves forward when it is newer"""
    return RelationshipService.log_communication(db, user.user_id, relationship_id, payload)


@router.get("/{relationship_id}/communications", response_model=List[CommunicationLogResponse])
def list_communications(
    relationship_id: UUID,
    limit: Optional[int] = Query(None, ge=1, le=500),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return RelationshipService.list_communications(db, user.user_id, relationship_id, limit)
