from typing import Dict, Any, Optional, List, Tuple
from datetime import date
from sqlalchemy.orm import Session
import logging
import uuid

from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import MindfulnessAssessment, JournalEntryType, Mood
from domain.models import MindfulnessCheckin, DIMENSIONS
from domain.schemas.journal_schemas import JournalEntryCreate
from domain.schemas.mindfulness_schemas import (
    MindfulnessCheckinCreate,
    MindfulnessCheckinUpdate,
)
from repositories import MindfulnessRepository
from services.journal_service import JournalService
from services.local_day import local_today

logger = logging.getLogger("lyfe.mindfulness")

REFLECTION_TAGS = ["mindfulness", "daily-reflection", "journal"]


def assess(total_score: float) -> MindfulnessAssessment:
    """Map a 0-25 total score to its assessment band"""
    if total_score >= 20:
        return MindfulnessAssessment.FULLY_PRESENT
    if total_score >= 15:
        return MindfulnessAssessment.MINDFUL
    if total_score >= 10:
        return MindfulnessAssessment.DEVELOPING
    return MindfulnessAssessment.BEGINNER


def total_score(checkin: MindfulnessCheckin) -> int:
    return sum(int((getattr(checkin, dim) or {}).get("rating") or 0) for dim in DIMENSIONS)


class MindfulnessService:
    @staticmethod
    def _recompute(checkin: MindfulnessCheckin) -> None:
        checkin.total_score = total_score(checkin)
        checkin.overall_assessment = assess(checkin.total_score)

    @staticmethod
    def _journal_reflection(
        db: Session, user_id: uuid.UUID, checkin: MindfulnessCheckin, reflection: str
    ) -> None:
        """File the day's reflection as a journal entry and remember its id"""
        entry = JournalService.add_entry(
            db,
            user_id,
            JournalEntryCreate(
                title=f"Mindfulness reflection - {checkin.date.isoformat()}",
                content=reflection,
                type=JournalEntryType.REFLECTION,
                mood=Mood.CALM,
                tags=REFLECTION_TAGS,
            ),
        )
        # reassign so the JSON column is flagged dirty
        checkin.journal_entry_ids = list(checkin.journal_entry_ids or []) + [str(entry.entry_id)]

    @staticmethod
    def upsert_checkin(
        db: Session, user_id: uuid.UUID, data: MindfulnessCheckinCreate
    ) -> Tuple[MindfulnessCheckin, bool]:
        """Create the day's check-in, or overwrite it when one exists.

        Returns:
            (checkin, was_update)
        """
        repo = MindfulnessRepository(db)
        day = data.date or local_today()
        checkin = repo.get_by_date(user_id, day)
        was_update = checkin is not None
        if checkin is None:
            checkin = MindfulnessCheckin(user_id=user_id, date=day)
            db.add(checkin)

        for dim in DIMENSIONS:
            setattr(checkin, dim, getattr(data, dim).model_dump())
        checkin.daily_notes = data.daily_notes
        checkin.day_reflection = data.day_reflection
        MindfulnessService._recompute(checkin)

        if data.day_reflection and data.day_reflection.strip():
            # add_entry commits, which also flushes the check-in
            MindfulnessService._journal_reflection(db, user_id, checkin, data.day_reflection)

        checkin = repo.update(checkin)
        logger.info(
            f"Mindfulness check-in {'updated' if was_update else 'created'} for "
            f"user {user_id} on {day} (score {checkin.total_score})"
        )
        return checkin, was_update

    @staticmethod
    def list_checkins(
        db: Session,
        user_id: uuid.UUID,
        day: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 30,
    ) -> List[MindfulnessCheckin]:
        if day:
            start_date = end_date = day
        return MindfulnessRepository(db).list_range(user_id, start_date, end_date, limit=limit)

    @staticmethod
    def get_by_date(db: Session, user_id: uuid.UUID, day: date) -> MindfulnessCheckin:
        checkin = MindfulnessRepository(db).get_by_date(user_id, day)
        if not checkin:
            raise NotFoundError(f"No mindfulness check-in for {day}")
        return checkin

    @staticmethod
    def update_checkin(
        db: Session, user_id: uuid.UUID, checkin_id: uuid.UUID, data: MindfulnessCheckinUpdate
    ) -> MindfulnessCheckin:
        repo = MindfulnessRepository(db)
        checkin = repo.get_for_user(checkin_id, user_id)
        if not checkin:
            raise NotFoundError(f"Mindfulness check-in not found: {checkin_id}")

        changes = data.model_dump(exclude_unset=True)
        for dim in DIMENSIONS:
            if changes.get(dim) is not None:
                setattr(checkin, dim, changes[dim])
        for field in ("daily_notes", "day_reflection"):
            if field in changes:
                setattr(checkin, field, changes[field])
        MindfulnessService._recompute(checkin)

        reflection = changes.get("day_reflection")
        if reflection and reflection.strip():
            MindfulnessService._journal_reflection(db, user_id, checkin, reflection)
        return repo.update(checkin)

    @staticmethod
    def delete_checkin(db: Session, user_id: uuid.UUID, checkin_id: uuid.UUID) -> None:
        if not MindfulnessRepository(db).delete_for_user(checkin_id, user_id):
            raise NotFoundError(f"Mindfulness check-in not found: {checkin_id}")

    @staticmethod
    def get_stats(
        db: Session,
        user_id: uuid.UUID,
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> Dict[str, Any]:
        """Aggregates over an inclusive date range.

        Raises:
            ServiceValidationError: either bound missing
        """
        if not start_date or not end_date:
            raise ServiceValidationError("start_date and end_date are required")

        checkins = MindfulnessRepository(db).list_range(
            user_id, start_date, end_date, newest_first=False
        )
        if not checkins:
            return {
                "total_checkins": 0,
                "average_score": 0,
                "score_trend": [],
                "dimension_averages": {dim: 0 for dim in DIMENSIONS},
                "overall_assessment": MindfulnessAssessment.BEGINNER,
            }

        count = len(checkins)
        average = round(sum(c.total_score for c in checkins) / count, 2)
        dimension_averages = {
            dim: round(
                sum(int((getattr(c, dim) or {}).get("rating") or 0) for c in checkins) / count,
                2,
            )
            for dim in DIMENSIONS
        }
        return {
            "total_checkins": count,
            "average_score": average,
            "score_trend": [{"date": c.date, "score": c.total_score} for c in checkins],
            "dimension_averages": dimension_averages,
            "overall_assessment": assess(average),
        }
