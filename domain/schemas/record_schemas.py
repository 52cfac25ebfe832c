"""Schemas for documents, relationships and household communication."""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import date as date_type, datetime
from uuid import UUID
from decimal import Decimal

from domain.enums import (
    DocumentType,
    DocumentCategory,
    DocumentStatus,
    AccessLevel,
    Priority,
    RelationshipType,
    RelationshipStatus,
    CommunicationFrequency,
    CommunicationMethod,
    CommunicationDirection,
    ContactType,
    ContactCategory,
    ContactStatus,
    MessageType,
    DeliveryMethod,
    MessageStatus,
)


# ----------------------------- Documents -----------------------------


class DocumentCreate(BaseModel):
    title: str = Field(..., min_length=1)
    type: DocumentType
    category: DocumentCategory
    description: Optional[str] = None
    document_number: Optional[str] = None
    issue_date: Optional[date_type] = None
    expiry_date: Optional[date_type] = None
    amount: Optional[Decimal] = Field(None, ge=0)
    currency: str = "USD"
    status: DocumentStatus = DocumentStatus.ACTIVE
    priority: Priority = Priority.MEDIUM
    tags: List[str] = Field(default_factory=list)
    location: Optional[str] = None
    access_level: AccessLevel = AccessLevel.PRIVATE


class DocumentUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    type: Optional[DocumentType] = None
    category: Optional[DocumentCategory] = None
    description: Optional[str] = None
    document_number: Optional[str] = None
    issue_date: Optional[date_type] = None
    expiry_date: Optional[date_type] = None
    amount: Optional[Decimal] = Field(None, ge=0)
    currency: Optional[str] = None
    status: Optional[DocumentStatus] = None
    priority: Optional[Priority] = None
    tags: Optional[List[str]] = None
    location: Optional[str] = None
    access_level: Optional[AccessLevel] = None


class DocumentResponse(DocumentCreate):
    document_id: UUID
    user_id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}


# --------------------------- Relationships ---------------------------


class RelationshipCreate(BaseModel):
    name: str = Field(..., min_length=1)
    type: RelationshipType
    relationship: Optional[str] = None
    contact: Dict[str, Any] = Field(default_factory=dict)
    important_dates: List[Dict[str, Any]] = Field(default_factory=list)
    communication_frequency: Optional[CommunicationFrequency] = None
    preferred_method: Optional[CommunicationMethod] = None
    status: RelationshipStatus = RelationshipStatus.ACTIVE
    priority: Priority = Priority.MEDIUM
    notes: Optional[str] = None


class RelationshipUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    type: Optional[RelationshipType] = None
    relationship: Optional[str] = None
    contact: Optional[Dict[str, Any]] = None
    important_dates: Optional[List[Dict[str, Any]]] = None
    communication_frequency: Optional[CommunicationFrequency] = None
    preferred_method: Optional[CommunicationMethod] = None
    status: Optional[RelationshipStatus] = None
    priority: Optional[Priority] = None
    notes: Optional[str] = None


class RelationshipResponse(RelationshipCreate):
    relationship_id: UUID
    user_id: UUID
    last_contact: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class CommunicationLogCreate(BaseModel):
    date: Optional[datetime] = None
    type: CommunicationMethod
    direction: Optional[CommunicationDirection] = None
    summary: Optional[str] = None
    mood: Optional[str] = None
    quality: Optional[str] = None


class CommunicationLogResponse(CommunicationLogCreate):
    log_id: UUID
    relationship_id: UUID
    date: datetime

    model_config = {"from_attributes": True}


# ------------------------ Household contacts -------------------------


class ContactCreate(BaseModel):
    name: str = Field(..., min_length=1)
    type: ContactType
    category: ContactCategory = ContactCategory.HOUSEHOLD
    phone: Optional[str] = None
    email: Optional[str] = None
    status: ContactStatus = ContactStatus.ACTIVE
    notes: Optional[str] = None


class ContactUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    type: Optional[ContactType] = None
    category: Optional[ContactCategory] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    status: Optional[ContactStatus] = None
    notes: Optional[str] = None


class ContactResponse(ContactCreate):
    contact_id: UUID
    user_id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}


class MessageCreate(BaseModel):
    contact_id: UUID
    type: MessageType
    priority: Priority = Priority.MEDIUM
    subject: Optional[str] = None
    content: str = Field(..., min_length=1)
    instructions: List[str] = Field(default_factory=list)
    delivery_method: DeliveryMethod
    notes: Optional[str] = None


class MessageUpdate(BaseModel):
    type: Optional[MessageType] = None
    priority: Optional[Priority] = None
    subject: Optional[str] = None
    content: Optional[str] = Field(None, min_length=1)
    instructions: Optional[List[str]] = None
    delivery_method: Optional[DeliveryMethod] = None
    notes: Optional[str] = None


class MessageStatusUpdate(BaseModel):
    status: MessageStatus


class MessageResponse(MessageCreate):
    message_id: UUID
    user_id: UUID
    status: MessageStatus
    sent_at: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}
