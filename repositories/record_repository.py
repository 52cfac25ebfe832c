"""
Record Repositories - documents, relationships, communication logs,
household contacts and messages
"""

from typing import List, Optional
from uuid import UUID
from datetime import date
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Document, Relationship, CommunicationLog, Contact, Message
from domain.enums import DocumentStatus


class _FilteredRepository(BaseRepository):
    """list_filtered(user_id, **filters): equality filters, newest first"""

    def list_filtered(self, user_id: UUID, **filters) -> List:
        query = self.db.query(self.model).filter(self.model.user_id == user_id)
        for field, value in filters.items():
            if value is not None:
                query = query.filter(getattr(self.model, field) == value)
        return query.order_by(self.model.created_at.desc()).all()


class DocumentRepository(_FilteredRepository):
    id_field = "document_id"

    def __init__(self, db: Session):
        super().__init__(db, Document)

    def list_expiring(self, user_id: UUID, today: date, until: date) -> List[Document]:
        """Active documents expiring within [today, until]"""
        return (
            self.db.query(Document)
            .filter(
                Document.user_id == user_id,
                Document.status == DocumentStatus.ACTIVE,
                Document.expiry_date.isnot(None),
                Document.expiry_date >= today,
                Document.expiry_date <= until,
            )
            .order_by(Document.expiry_date.asc())
            .all()
        )


class RelationshipRepository(_FilteredRepository):
    id_field = "relationship_id"

    def __init__(self, db: Session):
        super().__init__(db, Relationship)


class CommunicationLogRepository(BaseRepository[CommunicationLog]):
    id_field = "log_id"

    def __init__(self, db: Session):
        super().__init__(db, CommunicationLog)

    def list_for_relationship(
        self, user_id: UUID, relationship_id: UUID, limit: Optional[int] = None
    ) -> List[CommunicationLog]:
        query = (
            self.db.query(CommunicationLog)
            .filter(
                CommunicationLog.user_id == user_id,
                CommunicationLog.relationship_id == relationship_id,
            )
            .order_by(CommunicationLog.date.desc())
        )
        if limit:
            query = query.limit(limit)
        return query.all()


class ContactRepository(_FilteredRepository):
    id_field = "contact_id"

    def __init__(self, db: Session):
        super().__init__(db, Contact)


class MessageRepository(_FilteredRepository):
    id_field = "message_id"

    def __init__(self, db: Session):
        super().__init__(db, Message)
