"""Personal document routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_db, get_current_user
from api.responses import success_response
from domain.enums import DocumentType, DocumentCategory, DocumentStatus
from domain.models import AppUser
from domain.schemas.record_schemas import DocumentCreate, DocumentUpdate, DocumentResponse
from services.record_service import DocumentService

router = APIRouter(prefix="/documents", tags=["Documents"])
logger = logging.getLogger("lyfe.api.documents")


@router.get("", response_model=List[DocumentResponse])
def list_documents(
    doc_type: Optional[DocumentType] = Query(None, alias="type"),
    category: Optional[DocumentCategory] = Query(None),
    doc_status: Optional[DocumentStatus] = Query(None, alias="status"),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return DocumentService.list_documents(db, user.user_id, doc_type, category, doc_status)


@router.get("/expiring", response_model=List[DocumentResponse])
def expiring_documents(
    days: int = Query(30, ge=1, le=3650),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Active documents expiring within the next ``days`` days, soonest first"""
    return DocumentService.list_expiring(db, user.user_id, days)


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
def create_document(
    payload: DocumentCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return DocumentService.create_document(db, user.user_id, payload)


@router.get("/{document_id}", response_model=DocumentResponse)
def get_document(
    document_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return DocumentService.get_document(db, user.user_id, document_id)


@router.put("/{document_id}", response_model=DocumentResponse)
def update_document(
    document_id: UUID,
    payload: DocumentUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return DocumentService.update_document(db, user.user_id, document_id, payload)


@router.delete("/{document_id}")
def delete_document(
    document_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    DocumentService.delete_document(db, user.user_id, document_id)
    return success_response(message="Document deleted")
