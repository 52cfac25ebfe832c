"""Household contact and message routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_db, get_current_user
from api.responses import success_response
from domain.enums import (
    ContactType,
    ContactCategory,
    ContactStatus,
    MessageStatus,
    MessageType,
)
from domain.models import AppUser
from domain.schemas.record_schemas import (
    ContactCreate,
    ContactUpdate,
    ContactResponse,
    MessageCreate,
    MessageUpdate,
    MessageStatusUpdate,
    MessageResponse,
)
from services.record_service import CommunicationService

router = APIRouter(prefix="/communication", tags=["Communication"])
logger = logging.getLogger("lyfe.api.communication")


# ------------------ contacts ------------------
@router.get("/contacts", response_model=List[ContactResponse])
def list_contacts(
    contact_type: Optional[ContactType] = Query(None, alias="type"),
    category: Optional[ContactCategory] = Query(None),
    contact_status: Optional[ContactStatus] = Query(None, alias="status"),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CommunicationService.list_contacts(
        db, user.user_id, contact_type, category, contact_status
    )


@router.post("/contacts", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
def create_contact(
    payload: ContactCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CommunicationService.create_contact(db, user.user_id, payload)


@router.get("/contacts/{contact_id}", response_model=ContactResponse)
def get_contact(
    contact_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CommunicationService.get_contact(db, user.user_id, contact_id)


@router.put("/contacts/{contact_id}", response_model=ContactResponse)
def update_contact(
    contact_id: UUID,
    payload: ContactUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CommunicationService.update_contact(db, user.user_id, contact_id, payload)


@router.delete("/contacts/{contact_id}")
def delete_contact(
    contact_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    CommunicationService.delete_contact(db, user.user_id, contact_id)
    return success_response(message="Contact deleted")


# ------------------ messages ------------------
@router.get("/messages", response_model=List[MessageResponse])
def list_messages(
    contact_id: Optional[UUID] = Query(None),
    message_status: Optional[MessageStatus] = Query(None, alias="status"),
    message_type: Optional[MessageType] = Query(None, alias="type"),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CommunicationService.list_messages(
        db, user.user_id, contact_id, message_status, message_type
    )


@router.post("/messages", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def create_message(
    payload: MessageCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Draft a message; ``contact_id`` must be one of the user's contacts (404)"""
    return CommunicationService.create_message(db, user.user_id, payload)


@router.get("/messages/{message_id}", response_model=MessageResponse)
def get_message(
    message_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CommunicationService.get_message(db, user.user_id, message_id)


@router.put("/messages/{message_id}", response_model=MessageResponse)
def update_message(
    message_id: UUID,
    payload: MessageUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CommunicationService.update_message(db, user.user_id, message_id, payload)


@router.patch("/messages/{message_id}/status", response_model=MessageResponse)
def update_message_status(
    message_id: UUID,
    payload: MessageStatusUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CommunicationService.update_status(db, user.user_id, message_id, payload.status)


@router.delete("/messages/{message_id}")
def delete_message(
    message_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    CommunicationService.delete_message(db, user.user_id, message_id)
    return success_response(message="Message deleted")
