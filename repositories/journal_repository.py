"""
Journal Repository - Data access layer for journals and their entries
"""

from typing import List, Optional, Tuple
from uuid import UUID
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy import cast, String, or_

from repositories.base import BaseRepository
from domain.models import Journal, JournalEntry


class JournalRepository(BaseRepository[Journal]):
    """Repository for journal data access"""

    id_field = "journal_id"

    def __init__(self, db: Session):
        super().__init__(db, Journal)

    def get_by_user(self, user_id: UUID) -> Optional[Journal]:
        return self.db.query(Journal).filter(Journal.user_id == user_id).first()

    def get_or_create(self, user_id: UUID) -> Journal:
        """The user's single journal, created on first access"""
        journal = self.get_by_user(user_id)
        if journal is None:
            journal = self.create(Journal(user_id=user_id))
        return journal

    def get_entry(self, journal_id: UUID, entry_id: UUID) -> Optional[JournalEntry]:
        return (
            self.db.query(JournalEntry)
            .filter(
                JournalEntry.journal_id == journal_id,
                JournalEntry.entry_id == entry_id,
            )
            .first()
        )

    def filter_entries(
        self,
        journal_id: UUID,
        entry_type: Optional[str] = None,
        mood: Optional[str] = None,
        tags: Optional[List[str]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[JournalEntry], int]:
        """Filtered entries newest first; returns (entries, total)"""
        query = self.db.query(JournalEntry).filter(JournalEntry.journal_id == journal_id)
        if entry_type:
            query = query.filter(JournalEntry.type == entry_type)
        if mood:
            query = query.filter(JournalEntry.mood == mood)
        if tags:
            # any of the given tags
            query = query.filter(
                or_(*[cast(JournalEntry.tags, String).like(f'%"{tag}"%') for tag in tags])
            )
        if start_date:
            query = query.filter(JournalEntry.created_at >= start_date)
        if end_date:
            query = query.filter(JournalEntry.created_at <= end_date)

        total = query.count()
        entries = (
            query.order_by(JournalEntry.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return entries, total

    def recent_analyzed(self, journal_id: UUID, limit: int = 10) -> List[JournalEntry]:
        return (
            self.db.query(JournalEntry)
            .filter(
                JournalEntry.journal_id == journal_id,
                JournalEntry.analysis.isnot(None),
            )
            .order_by(JournalEntry.created_at.desc())
            .limit(limit)
            .all()
        )
