"""
Goal Repository - Data access layer for lifestyle goals, time blocks and
goal-aligned day snapshots
"""

from typing import List, Optional, Tuple
from uuid import UUID
from datetime import date
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import LifestyleGoal, TimeBlock, GoalAlignedDay


class GoalRepository(BaseRepository[LifestyleGoal]):
    """Repository for lifestyle goals"""

    id_field = "goal_id"

    def __init__(self, db: Session):
        super().__init__(db, LifestyleGoal)

    def list_active(self, user_id: UUID) -> List[LifestyleGoal]:
        return (
            self.db.query(LifestyleGoal)
            .filter(
                LifestyleGoal.user_id == user_id, LifestyleGoal.is_active.is_(True)
            )
            .order_by(LifestyleGoal.created_at.asc())
            .all()
        )


class TimeBlockRepository(BaseRepository[TimeBlock]):
    """Repository for scheduled time blocks"""

    id_field = "block_id"

    def __init__(self, db: Session):
        super().__init__(db, TimeBlock)

    def list_by_date(self, user_id: UUID, day: date) -> List[TimeBlock]:
        return (
            self.db.query(TimeBlock)
            .filter(TimeBlock.user_id == user_id, TimeBlock.date == day)
            .order_by(TimeBlock.start_time.asc())
            .all()
        )

    def list_range(
        self, user_id: UUID, start_date: Optional[date], end_date: Optional[date]
    ) -> List[TimeBlock]:
        query = self.db.query(TimeBlock).filter(TimeBlock.user_id == user_id)
        if start_date:
            query = query.filter(TimeBlock.date >= start_date)
        if end_date:
            query = query.filter(TimeBlock.date <= end_date)
        return query.order_by(TimeBlock.date.desc(), TimeBlock.start_time.asc()).all()


class GoalAlignedDayRepository(BaseRepository[GoalAlignedDay]):
    """Repository for per-day goal metrics snapshots"""

    id_field = "day_id"

    def __init__(self, db: Session):
        super().__init__(db, GoalAlignedDay)

    def get_by_date(self, user_id: UUID, day: date) -> Optional[GoalAlignedDay]:
        return (
            self.db.query(GoalAlignedDay)
            .filter(GoalAlignedDay.user_id == user_id, GoalAlignedDay.date == day)
            .first()
        )

    def get_latest(self, user_id: UUID) -> Optional[GoalAlignedDay]:
        return (
            self.db.query(GoalAlignedDay)
            .filter(GoalAlignedDay.user_id == user_id)
            .order_by(GoalAlignedDay.date.desc())
            .first()
        )

    def list_range(self, user_id: UUID, start: date, end: date) -> List[GoalAlignedDay]:
        return (
            self.db.query(GoalAlignedDay)
            .filter(
                GoalAlignedDay.user_id == user_id,
                GoalAlignedDay.date >= start,
                GoalAlignedDay.date <= end,
            )
            .order_by(GoalAlignedDay.date.asc())
            .all()
        )

    def list_paginated(
        self, user_id: UUID, page: int = 1, limit: int = 30
    ) -> Tuple[List[GoalAlignedDay], int]:
        query = self.db.query(GoalAlignedDay).filter(GoalAlignedDay.user_id == user_id)
        total = query.count()
        days = (
            query.order_by(GoalAlignedDay.date.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return days, total
