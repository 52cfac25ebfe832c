"""
Personal records: documents, relationships and household contacts.
"""

from datetime import datetime
from sqlalchemy import Column, Text, Date, DateTime, ForeignKey, Numeric, JSON, Uuid
import uuid

from domain.models.database import Base, TimestampMixin, enum_column
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


class Document(TimestampMixin, Base):
    __tablename__ = "document"

    document_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    title = Column(Text, nullable=False)
    type = enum_column(DocumentType, nullable=False)
    category = enum_column(DocumentCategory, nullable=False)
    description = Column(Text)
    document_number = Column(Text)
    issue_date = Column(Date)
    expiry_date = Column(Date)
    amount = Column(Numeric(12, 2))
    currency = Column(Text, nullable=False, default="USD")
    status = enum_column(DocumentStatus, nullable=False, default=DocumentStatus.ACTIVE)
    priority = enum_column(Priority, nullable=False, default=Priority.MEDIUM)
    tags = Column(JSON, nullable=False, default=list)
    location = Column(Text)
    access_level = enum_column(AccessLevel, nullable=False, default=AccessLevel.PRIVATE)


class Relationship(TimestampMixin, Base):
    """A person in the user's life.

    contact:         {"phone", "email", "address", "social_media": {...}}
    important_dates: [{"type", "date", "reminder_days"}]
    """

    __tablename__ = "relationship"

    relationship_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    name = Column(Text, nullable=False)
    type = enum_column(RelationshipType, nullable=False)
    relationship = Column(Text)
    contact = Column(JSON, nullable=False, default=dict)
    important_dates = Column(JSON, nullable=False, default=list)
    communication_frequency = enum_column(CommunicationFrequency)
    preferred_method = enum_column(CommunicationMethod)
    last_contact = Column(DateTime)
    status = enum_column(
        RelationshipStatus, nullable=False, default=RelationshipStatus.ACTIVE
    )
    priority = enum_column(Priority, nullable=False, default=Priority.MEDIUM)
    notes = Column(Text)


class CommunicationLog(TimestampMixin, Base):
    __tablename__ = "communication_log"

    log_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    relationship_id = Column(
        Uuid,
        ForeignKey("relationship.relationship_id", ondelete="CASCADE"),
        nullable=False,
    )
    date = Column(DateTime, nullable=False, default=datetime.utcnow)
    type = enum_column(CommunicationMethod, nullable=False)
    direction = enum_column(CommunicationDirection)
    summary = Column(Text)
    mood = Column(Text)
    quality = Column(Text)


class Contact(TimestampMixin, Base):
    """Household or service contact (maid, cook, driver, ...)"""

    __tablename__ = "contact"

    contact_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    name = Column(Text, nullable=False)
    type = enum_column(ContactType, nullable=False)
    category = enum_column(ContactCategory, nullable=False, default=ContactCategory.HOUSEHOLD)
    phone = Column(Text)
    email = Column(Text)
    status = enum_column(ContactStatus, nullable=False, default=ContactStatus.ACTIVE)
    notes = Column(Text)


class Message(TimestampMixin, Base):
    __tablename__ = "message"

    message_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    contact_id = Column(
        Uuid, ForeignKey("contact.contact_id", ondelete="CASCADE"), nullable=False
    )
    type = enum_column(MessageType, nullable=False)
    priority = enum_column(Priority, nullable=False, default=Priority.MEDIUM)
    subject = Column(Text)
    content = Column(Text, nullable=False)
    instructions = Column(JSON, nullable=False, default=list)
    delivery_method = enum_column(DeliveryMethod, nullable=False)
    sent_at = Column(DateTime)
    status = enum_column(MessageStatus, nullable=False, default=MessageStatus.DRAFT)
    notes = Column(Text)
