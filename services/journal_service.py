from typing import List, Dict, Any, Optional
from datetime import datetime, timedelta
from sqlalchemy.orm import Session
import logging
import math
import uuid

from app.exceptions import NotFoundError
from domain.enums import JournalPrivacy
from domain.models import Journal, JournalEntry
from domain.schemas.journal_schemas import (
    JournalEntryCreate,
    JournalEntryUpdate,
    JournalSettingsUpdate,
)
from repositories import JournalRepository
from services.local_day import local_date_of

logger = logging.getLogger("lyfe.journal")


class JournalService:
    @staticmethod
    def get_journal(db: Session, user_id: uuid.UUID) -> Journal:
        """The user's journal with entries newest first (created on first use)"""
        return JournalRepository(db).get_or_create(user_id)

    @staticmethod
    def _update_streak(journal: Journal, entry_time: datetime) -> None:
        """Same local day keeps the streak, the next day extends it, a gap resets it"""
        today = local_date_of(entry_time)
        if journal.last_entry_date is None:
            journal.current_streak = 1
        else:
            last_day = local_date_of(journal.last_entry_date)
            if today == last_day:
                journal.current_streak = max(journal.current_streak or 0, 1)
            elif today - last_day == timedelta(days=1):
                journal.current_streak = (journal.current_streak or 0) + 1
            elif today > last_day:
                journal.current_streak = 1
        journal.longest_streak = max(journal.longest_streak or 0, journal.current_streak)
        if journal.last_entry_date is None or entry_time > journal.last_entry_date:
            journal.last_entry_date = entry_time

    @staticmethod
    def add_entry(db: Session, user_id: uuid.UUID, data: JournalEntryCreate) -> JournalEntry:
        repo = JournalRepository(db)
        journal = repo.get_or_create(user_id)

        is_private = data.is_private
        if is_private is None:
            is_private = journal.default_privacy == JournalPrivacy.PRIVATE

        now = datetime.utcnow()
        entry = JournalEntry(
            journal_id=journal.journal_id,
            title=data.title,
            content=data.content,
            type=data.type,
            mood=data.mood,
            tags=list(data.tags),
            is_private=is_private,
            location=data.location,
            weather=data.weather,
            created_at=now,
            updated_at=now,
        )
        journal.entries.insert(0, entry)
        journal.total_entries = (journal.total_entries or 0) + 1
        JournalService._update_streak(journal, now)
        db.commit()
        db.refresh(entry)
        logger.info(
            f"Journal entry {entry.entry_id} added for user {user_id} "
            f"(streak {journal.current_streak})"
        )
        return entry

    @staticmethod
    def get_entry(db: Session, user_id: uuid.UUID, entry_id: uuid.UUID) -> JournalEntry:
        repo = JournalRepository(db)
        journal = repo.get_by_user(user_id)
        entry = repo.get_entry(journal.journal_id, entry_id) if journal else None
        if not entry:
            raise NotFoundError(f"Journal entry not found: {entry_id}")
        return entry

    @staticmethod
    def update_entry(
        db: Session, user_id: uuid.UUID, entry_id: uuid.UUID, data: JournalEntryUpdate
    ) -> JournalEntry:
        entry = JournalService.get_entry(db, user_id, entry_id)
        changes = data.model_dump(exclude_unset=True)
        if "tags" in changes and changes["tags"] is not None:
            changes["tags"] = list(changes["tags"])
        return JournalRepository(db).apply_changes(entry, changes)

    @staticmethod
    def delete_entry(db: Session, user_id: uuid.UUID, entry_id: uuid.UUID) -> None:
        entry = JournalService.get_entry(db, user_id, entry_id)
        journal = entry.journal
        journal.entries.remove(entry)
        journal.total_entries = max((journal.total_entries or 0) - 1, 0)
        db.commit()
        logger.info(f"Journal entry {entry_id} deleted")

    @staticmethod
    def list_entries(
        db: Session,
        user_id: uuid.UUID,
        entry_type: Optional[str] = None,
        mood: Optional[str] = None,
        tags: Optional[List[str]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Dict[str, Any]:
        repo = JournalRepository(db)
        journal = repo.get_or_create(user_id)
        entries, total = repo.filter_entries(
            journal.journal_id, entry_type, mood, tags, start_date, end_date, page, limit
        )
        pages = math.ceil(total / limit) if limit else 0
        return {
            "entries": entries,
            "pagination": {
                "current_page": page,
                "total_pages": pages,
                "total_entries": total,
                "has_next": page < pages,
                "has_prev": page > 1,
            },
        }

    @staticmethod
    def update_settings(
        db: Session, user_id: uuid.UUID, data: JournalSettingsUpdate
    ) -> Journal:
        repo = JournalRepository(db)
        journal = repo.get_or_create(user_id)
        return repo.apply_changes(journal, data.model_dump(exclude_unset=True, exclude_none=True))

    @staticmethod
    def get_stats(db: Session, user_id: uuid.UUID) -> Dict[str, Any]:
        journal = JournalRepository(db).get_by_user(user_id)
        if not journal:
            return {
                "total_entries": 0,
                "current_streak": 0,
                "longest_streak": 0,
                "last_entry_date": None,
                "entries_by_type": {},
                "entries_by_mood": {},
                "monthly_entries": [0] * 12,
            }

        by_type: Dict[str, int] = {}
        by_mood: Dict[str, int] = {}
        monthly = [0] * 12
        for entry in journal.entries:
            by_type[entry.type.value] = by_type.get(entry.type.value, 0) + 1
            by_mood[entry.mood.value] = by_mood.get(entry.mood.value, 0) + 1
            monthly[entry.created_at.month - 1] += 1

        return {
            "total_entries": journal.total_entries,
            "current_streak": journal.current_streak,
            "longest_streak": journal.longest_streak,
            "last_entry_date": journal.last_entry_date,
            "entries_by_type": by_type,
            "entries_by_mood": by_mood,
            "monthly_entries": monthly,
        }
