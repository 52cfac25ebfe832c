"""
Habit Repository - Data access layer for habits and habit check-ins
"""

from typing import List
from uuid import UUID
from datetime import date, datetime
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Habit, HabitCheckin


class HabitRepository(BaseRepository[Habit]):
    """Repository for habit data access"""

    id_field = "habit_id"

    def __init__(self, db: Session):
        super().__init__(db, Habit)

    def list_current(self, user_id: UUID, now: datetime) -> List[Habit]:
        """Active habits whose [start_date, end_date] window covers ``now``"""
        return (
            self.db.query(Habit)
            .filter(
                Habit.user_id == user_id,
                Habit.is_active.is_(True),
                Habit.start_date <= now,
                Habit.end_date >= now,
            )
            .order_by(Habit.created_at.desc())
            .all()
        )

    def list_all(self, user_id: UUID) -> List[Habit]:
        return (
            self.db.query(Habit)
            .filter(Habit.user_id == user_id)
            .order_by(Habit.created_at.desc())
            .all()
        )


class HabitCheckinRepository(BaseRepository[HabitCheckin]):
    """Repository for standalone habit check-ins"""

    id_field = "checkin_id"

    def __init__(self, db: Session):
        super().__init__(db, HabitCheckin)

    def list_by_date(self, user_id: UUID, day: date) -> List[HabitCheckin]:
        return (
            self.db.query(HabitCheckin)
            .filter(HabitCheckin.user_id == user_id, HabitCheckin.date == day)
            .order_by(HabitCheckin.created_at.asc())
            .all()
        )

    def list_goal_checkins(self, user_id: UUID, day: date) -> List[HabitCheckin]:
        """Check-ins of the day that count toward a goal"""
        return (
            self.db.query(HabitCheckin)
            .filter(
                HabitCheckin.user_id == user_id,
                HabitCheckin.date == day,
                HabitCheckin.goal_id.isnot(None),
            )
            .all()
        )
