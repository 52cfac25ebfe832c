"""
Journal models.
"""

from datetime import datetime
from sqlalchemy import Column, Text, DateTime, ForeignKey, Integer, Boolean, JSON, Uuid
from sqlalchemy.orm import relationship
import uuid

from domain.models.database import Base, TimestampMixin, enum_column
from domain.enums import JournalEntryType, Mood, JournalPrivacy


class Journal(TimestampMixin, Base):
    """One journal per user, holding settings and running stats"""

    __tablename__ = "journal"

    journal_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid,
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    default_privacy = enum_column(
        JournalPrivacy, nullable=False, default=JournalPrivacy.PRIVATE
    )
    reminders_enabled = Column(Boolean, nullable=False, default=False)
    reminder_time = Column(Text)
    total_entries = Column(Integer, nullable=False, default=0)
    current_streak = Column(Integer, nullable=False, default=0)
    longest_streak = Column(Integer, nullable=False, default=0)
    last_entry_date = Column(DateTime)

    entries = relationship(
        "JournalEntry",
        back_populates="journal",
        cascade="all, delete-orphan",
        order_by="JournalEntry.created_at.desc()",
    )


class JournalEntry(Base):
    __tablename__ = "journal_entry"

    entry_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    journal_id = Column(
        Uuid, ForeignKey("journal.journal_id", ondelete="CASCADE"), nullable=False
    )
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    type = enum_column(JournalEntryType, nullable=False, default=JournalEntryType.DAILY)
    mood = enum_column(Mood, nullable=False, default=Mood.NEUTRAL)
    tags = Column(JSON, nullable=False, default=list)
    is_private = Column(Boolean, nullable=False, default=True)
    location = Column(Text)
    weather = Column(Text)
    analysis = Column(JSON(none_as_null=True))
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    journal = relationship("Journal", back_populates="entries")
