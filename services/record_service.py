"""Documents, relationships and household communication.

The three areas share the same owner-scoped CRUD shape, so each service
delegates to the helpers below and only adds its own rules on top.
"""

from typing import List, Any, Optional, Type
from datetime import datetime, timedelta
from sqlalchemy.orm import Session
from pydantic import BaseModel
import logging
import uuid

from app.exceptions import NotFoundError
from domain.enums import MessageStatus
from domain.models import Document, Relationship, CommunicationLog, Contact, Message
from domain.schemas.record_schemas import (
    DocumentCreate,
    DocumentUpdate,
    RelationshipCreate,
    RelationshipUpdate,
    CommunicationLogCreate,
    ContactCreate,
    ContactUpdate,
    MessageCreate,
    MessageUpdate,
)
from repositories import (
    DocumentRepository,
    RelationshipRepository,
    CommunicationLogRepository,
    ContactRepository,
    MessageRepository,
)
from repositories.base import BaseRepository
from services.local_day import local_today, to_naive_utc

logger = logging.getLogger("lyfe.records")

DEFAULT_EXPIRY_WINDOW_DAYS = 30


def _get_or_404(repo: BaseRepository, user_id: uuid.UUID, entity_id: uuid.UUID, label: str) -> Any:
    entity = repo.get_for_user(entity_id, user_id)
    if not entity:
        raise NotFoundError(f"{label} not found: {entity_id}")
    return entity


def _create(repo: BaseRepository, model: Type, user_id: uuid.UUID, data: BaseModel) -> Any:
    return repo.create(model(user_id=user_id, **data.model_dump(mode="python")))


def _update(
    repo: BaseRepository, user_id: uuid.UUID, entity_id: uuid.UUID, data: BaseModel, label: str
) -> Any:
    entity = _get_or_404(repo, user_id, entity_id, label)
    return repo.apply_changes(entity, data.model_dump(exclude_unset=True))


def _delete(repo: BaseRepository, user_id: uuid.UUID, entity_id: uuid.UUID, label: str) -> None:
    if not repo.delete_for_user(entity_id, user_id):
        raise NotFoundError(f"{label} not found: {entity_id}")


class DocumentService:
    @staticmethod
    def list_documents(
        db: Session,
        user_id: uuid.UUID,
        type: Optional[str] = None,
        category: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Document]:
        return DocumentRepository(db).list_filtered(
            user_id, type=type, category=category, status=status
        )

    @staticmethod
    def get_document(db: Session, user_id: uuid.UUID, document_id: uuid.UUID) -> Document:
        return _get_or_404(DocumentRepository(db), user_id, document_id, "Document")

    @staticmethod
    def create_document(db: Session, user_id: uuid.UUID, data: DocumentCreate) -> Document:
        document = _create(DocumentRepository(db), Document, user_id, data)
        logger.info(f"Document {document.document_id} created for user {user_id}")
        return document

    @staticmethod
    def update_document(
        db: Session, user_id: uuid.UUID, document_id: uuid.UUID, data: DocumentUpdate
    ) -> Document:
        return _update(DocumentRepository(db), user_id, document_id, data, "Document")

    @staticmethod
    def delete_document(db: Session, user_id: uuid.UUID, document_id: uuid.UUID) -> None:
        _delete(DocumentRepository(db), user_id, document_id, "Document")

    @staticmethod
    def list_expiring(
        db: Session, user_id: uuid.UUID, days: int = DEFAULT_EXPIRY_WINDOW_DAYS
    ) -> List[Document]:
        """Active documents whose expiry date falls in the next ``days`` days"""
        today = local_today()
        return DocumentRepository(db).list_expiring(user_id, today, today + timedelta(days=days))


class RelationshipService:
    @staticmethod
    def list_relationships(
        db: Session,
        user_id: uuid.UUID,
        type: Optional[str] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> List[Relationship]:
        return RelationshipRepository(db).list_filtered(
            user_id, type=type, status=status, priority=priority
        )

    @staticmethod
    def get_relationship(
        db: Session, user_id: uuid.UUID, relationship_id: uuid.UUID
    ) -> Relationship:
        return _get_or_404(RelationshipRepository(db), user_id, relationship_id, "Relationship")

    @staticmethod
    def create_relationship(
        db: Session, user_id: uuid.UUID, data: RelationshipCreate
    ) -> Relationship:
        return _create(RelationshipRepository(db), Relationship, user_id, data)

    @staticmethod
    def update_relationship(
        db: Session, user_id: uuid.UUID, relationship_id: uuid.UUID, data: RelationshipUpdate
    ) -> Relationship:
        return _update(RelationshipRepository(db), user_id, relationship_id, data, "Relationship")

    @staticmethod
    def delete_relationship(db: Session, user_id: uuid.UUID, relationship_id: uuid.UUID) -> None:
        _delete(RelationshipRepository(db), user_id, relationship_id, "Relationship")

    @staticmethod
    def log_communication(
        db: Session, user_id: uuid.UUID, relationship_id: uuid.UUID, data: CommunicationLogCreate
    ) -> CommunicationLog:
        """Record a conversation and move the relationship's last_contact forward"""
        relationship = RelationshipService.get_relationship(db, user_id, relationship_id)
        when = to_naive_utc(data.date) or datetime.utcnow()
        log = CommunicationLog(
            user_id=user_id,
            relationship_id=relationship.relationship_id,
            date=when,
            type=data.type,
            direction=data.direction,
            summary=data.summary,
            mood=data.mood,
            quality=data.quality,
        )
        db.add(log)
        if relationship.last_contact is None or when > relationship.last_contact:
            relationship.last_contact = when
        db.commit()
        db.refresh(log)
        return log

    @staticmethod
    def list_communications(
        db: Session, user_id: uuid.UUID, relationship_id: uuid.UUID, limit: Optional[int] = None
    ) -> List[CommunicationLog]:
        RelationshipService.get_relationship(db, user_id, relationship_id)
        return CommunicationLogRepository(db).list_for_relationship(user_id, relationship_id, limit)


class CommunicationService:
    # ------------------ contacts ------------------
    @staticmethod
    def list_contacts(
        db: Session,
        user_id: uuid.UUID,
        type: Optional[str] = None,
        category: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Contact]:
        return ContactRepository(db).list_filtered(
            user_id, type=type, category=category, status=status
        )

    @staticmethod
    def get_contact(db: Session, user_id: uuid.UUID, contact_id: uuid.UUID) -> Contact:
        return _get_or_404(ContactRepository(db), user_id, contact_id, "Contact")

    @staticmethod
    def create_contact(db: Session, user_id: uuid.UUID, data: ContactCreate) -> Contact:
        return _create(ContactRepository(db), Contact, user_id, data)

    @staticmethod
    def update_contact(
        db: Session, user_id: uuid.UUID, contact_id: uuid.UUID, data: ContactUpdate
    ) -> Contact:
        return _update(ContactRepository(db), user_id, contact_id, data, "Contact")

    @staticmethod
    def delete_contact(db: Session, user_id: uuid.UUID, contact_id: uuid.UUID) -> None:
        _delete(ContactRepository(db), user_id, contact_id, "Contact")

    # ------------------ messages ------------------
    @staticmethod
    def list_messages(
        db: Session,
        user_id: uuid.UUID,
        contact_id: Optional[uuid.UUID] = None,
        status: Optional[str] = None,
        type: Optional[str] = None,
    ) -> List[Message]:
        return MessageRepository(db).list_filtered(
            user_id, contact_id=contact_id, status=status, type=type
        )

    @staticmethod
    def get_message(db: Session, user_id: uuid.UUID, message_id: uuid.UUID) -> Message:
        return _get_or_404(MessageRepository(db), user_id, message_id, "Message")

    @staticmethod
    def create_message(db: Session, user_id: uuid.UUID, data: MessageCreate) -> Message:
        CommunicationService.get_contact(db, user_id, data.contact_id)
        message = _create(MessageRepository(db), Message, user_id, data)
        logger.info(f"Message {message.message_id} drafted for contact {data.contact_id}")
        return message

    @staticmethod
    def update_message(
        db: Session, user_id: uuid.UUID, message_id: uuid.UUID, data: MessageUpdate
    ) -> Message:
        return _update(MessageRepository(db), user_id, message_id, data, "Message")

    @staticmethod
    def update_status(
        db: Session, user_id: uuid.UUID, message_id: uuid.UUID, status: MessageStatus
    ) -> Message:
        """Move a message through its lifecycle; the first SENT stamps sent_at"""
        repo = MessageRepository(db)
        message = _get_or_404(repo, user_id, message_id, "Message")
        changes = {"status": status}
        if status == MessageStatus.SENT and message.sent_at is None:
            changes["sent_at"] = datetime.utcnow()
        return repo.apply_changes(message, changes)

    @staticmethod
    def delete_message(db: Session, user_id: uuid.UUID, message_id: uuid.UUID) -> None:
        _delete(MessageRepository(db), user_id, message_id, "Message")
