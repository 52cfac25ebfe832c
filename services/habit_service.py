from typing import List, Dict, Any, Optional
from datetime import date, datetime
from sqlalchemy.orm import Session
import logging
import uuid

from app.exceptions import NotFoundError, ServiceValidationError
from domain.models import Habit, HabitCheckin
from domain.schemas.habit_schemas import (
    HabitCreate,
    HabitUpdate,
    EmbeddedCheckinCreate,
    HabitCheckinCreate,
    HabitCheckinUpdate,
)
from repositories import HabitRepository, HabitCheckinRepository, GoalRepository
from services.local_day import local_today, to_naive_utc

logger = logging.getLogger("lyfe.habits")


def _parse_ts(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return to_naive_utc(value)
    if isinstance(value, str):
        try:
            return to_naive_utc(datetime.fromisoformat(value))
        except ValueError:
            return None
    return None


class HabitService:
    @staticmethod
    def _check_goal(db: Session, user_id: uuid.UUID, goal_id: Optional[uuid.UUID]) -> None:
        if goal_id and not GoalRepository(db).get_for_user(goal_id, user_id):
            raise NotFoundError(f"Goal not found: {goal_id}")

    @staticmethod
    def _get_habit(db: Session, user_id: uuid.UUID, habit_id: uuid.UUID) -> Habit:
        habit = HabitRepository(db).get_for_user(habit_id, user_id)
        if not habit:
            raise NotFoundError(f"Habit not found: {habit_id}")
        return habit

    @staticmethod
    def list_habits(
        db: Session, user_id: uuid.UUID, include_inactive: bool = False
    ) -> List[Habit]:
        """Habits running right now, or every habit with include_inactive"""
        repo = HabitRepository(db)
        if include_inactive:
            return repo.list_all(user_id)
        return repo.list_current(user_id, datetime.utcnow())

    @staticmethod
    def create_habit(db: Session, user_id: uuid.UUID, data: HabitCreate) -> Habit:
        if not data.habit or not data.habit.strip():
            raise ServiceValidationError("Habit name is required")
        if data.end_date is None:
            raise ServiceValidationError("End date is required")

        start = to_naive_utc(data.start_date) or datetime.utcnow()
        end = to_naive_utc(data.end_date)
        if end < start:
            raise ServiceValidationError("End date must be after the start date")
        HabitService._check_goal(db, user_id, data.goal_id)

        habit = Habit(
            user_id=user_id,
            habit=data.habit.strip(),
            value_min=data.value_min,
            notes=data.notes,
            start_date=start,
            end_date=end,
            quality=data.quality,
            goal_id=data.goal_id,
        )
        habit = HabitRepository(db).create(habit)
        logger.info(f"Habit {habit.habit_id} created for user {user_id}")
        return habit

    @staticmethod
    def update_habit(
        db: Session, user_id: uuid.UUID, habit_id: uuid.UUID, data: HabitUpdate
    ) -> Habit:
        habit = HabitService._get_habit(db, user_id, habit_id)
        changes = data.model_dump(exclude_unset=True)
        if "goal_id" in changes:
            HabitService._check_goal(db, user_id, changes["goal_id"])
        return HabitRepository(db).apply_changes(habit, changes)

    @staticmethod
    def delete_habit(db: Session, user_id: uuid.UUID, habit_id: uuid.UUID) -> None:
        if not HabitRepository(db).delete_for_user(habit_id, user_id):
            raise NotFoundError(f"Habit not found: {habit_id}")
        logger.info(f"Habit {habit_id} deleted")

    # ------------------ embedded check-ins ------------------
    @staticmethod
    def add_embedded_checkin(
        db: Session, user_id: uuid.UUID, habit_id: uuid.UUID, data: EmbeddedCheckinCreate
    ) -> Habit:
        habit = HabitService._get_habit(db, user_id, habit_id)
        entry = {
            "date": (to_naive_utc(data.date) or datetime.utcnow()).isoformat(),
            "completed": data.completed,
            "duration": data.duration if data.duration is not None else habit.value_min,
            "notes": data.notes,
            "quality": (data.quality or habit.quality).value,
        }
        # new list so the JSON column change is detected
        return HabitRepository(db).apply_changes(
            habit, {"checkins": list(habit.checkins or []) + [entry]}
        )

    @staticmethod
    def list_embedded_checkins(
        db: Session,
        user_id: uuid.UUID,
        habit_id: uuid.UUID,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        habit = HabitService._get_habit(db, user_id, habit_id)
        selected = []
        for checkin in habit.checkins or []:
            ts = _parse_ts(checkin.get("date"))
            if ts is None:
                continue
            if start_date and ts < to_naive_utc(start_date):
                continue
            if end_date and ts > to_naive_utc(end_date):
                continue
            selected.append(checkin)
        return sorted(selected, key=lambda c: c["date"], reverse=True)

    # ------------------ standalone check-ins ------------------
    @staticmethod
    def list_checkins_by_date(db: Session, user_id: uuid.UUID, day: date) -> List[HabitCheckin]:
        return HabitCheckinRepository(db).list_by_date(user_id, day)

    @staticmethod
    def create_checkin(db: Session, user_id: uuid.UUID, data: HabitCheckinCreate) -> HabitCheckin:
        habit = HabitService._get_habit(db, user_id, data.habit_id)
        goal_id = data.goal_id or habit.goal_id
        if data.goal_id:
            HabitService._check_goal(db, user_id, data.goal_id)

        checkin = HabitCheckin(
            user_id=user_id,
            habit_id=habit.habit_id,
            goal_id=goal_id,
            date=data.date or local_today(),
            value_min=data.value_min or habit.value_min,
            completed=data.completed,
            notes=data.notes,
            quality=data.quality,
        )
        checkin = HabitCheckinRepository(db).create(checkin)
        logger.info(f"Habit check-in {checkin.checkin_id} for habit {habit.habit_id}")
        return checkin

    @staticmethod
    def update_checkin(
        db: Session, user_id: uuid.UUID, checkin_id: uuid.UUID, data: HabitCheckinUpdate
    ) -> HabitCheckin:
        repo = HabitCheckinRepository(db)
        checkin = repo.get_for_user(checkin_id, user_id)
        if not checkin:
            raise NotFoundError(f"Habit check-in not found: {checkin_id}")
        changes = data.model_dump(exclude_unset=True)
        if changes.get("goal_id"):
            HabitService._check_goal(db, user_id, changes["goal_id"])
        return repo.apply_changes(checkin, changes)

    @staticmethod
    def delete_checkin(db: Session, user_id: uuid.UUID, checkin_id: uuid.UUID) -> None:
        if not HabitCheckinRepository(db).delete_for_user(checkin_id, user_id):
            raise NotFoundError(f"Habit check-in not found: {checkin_id}")
