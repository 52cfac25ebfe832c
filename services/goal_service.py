from typing import List, Dict, Any, Optional, Tuple
from datetime import date, timedelta
from sqlalchemy.orm import Session
import logging
import uuid

from app.exceptions import NotFoundError, ServiceValidationError
from domain.models import LifestyleGoal, TimeBlock, GoalAlignedDay
from domain.schemas.goal_schemas import GoalCreate, GoalUpdate, TimeBlockCreate
from repositories import (
    GoalRepository,
    TimeBlockRepository,
    GoalAlignedDayRepository,
    HabitCheckinRepository,
    TaskRepository,
)
from services.local_day import day_bounds_utc, local_today, local_date_of, to_naive_utc, week_bounds

logger = logging.getLogger("lyfe.goals")

DEFAULT_TASK_MINUTES = 25
DEFAULT_MINDFUL_RATING = 3
MINDFUL_RATING_THRESHOLD = 4
MINUTES_PER_DAY = 1440
DEFAULT_TARGET_HOURS = 8


def _round1(value: float) -> float:
    return round(value * 10) / 10


class GoalService:
    # ------------------ goals ------------------
    @staticmethod
    def list_goals(db: Session, user_id: uuid.UUID) -> List[LifestyleGoal]:
        return GoalRepository(db).list_active(user_id)

    @staticmethod
    def create_goal(db: Session, user_id: uuid.UUID, data: GoalCreate) -> LifestyleGoal:
        if not data.name.strip():
            raise ServiceValidationError("Goal name is required")
        goal = LifestyleGoal(user_id=user_id, **{**data.model_dump(), "name": data.name.strip()})
        goal = GoalRepository(db).create(goal)
        logger.info(f"Goal {goal.goal_id} created for user {user_id}")
        return goal

    @staticmethod
    def update_goal(
        db: Session, user_id: uuid.UUID, goal_id: uuid.UUID, data: GoalUpdate
    ) -> LifestyleGoal:
        repo = GoalRepository(db)
        goal = repo.get_for_user(goal_id, user_id)
        if not goal:
            raise NotFoundError(f"Goal not found: {goal_id}")
        return repo.apply_changes(goal, data.model_dump(exclude_unset=True))

    @staticmethod
    def delete_goal(db: Session, user_id: uuid.UUID, goal_id: uuid.UUID) -> None:
        if not GoalRepository(db).delete_for_user(goal_id, user_id):
            raise NotFoundError(f"Goal not found: {goal_id}")
        logger.info(f"Goal {goal_id} deleted")

    # ------------------ daily metrics ------------------
    @staticmethod
    def calculate_daily_metrics(
        db: Session, user_id: uuid.UUID, day: Optional[date] = None
    ) -> Dict[str, Any]:
        """Goal-aligned minutes for one local day, saved as that day's snapshot.

        Minutes come from goal-tagged time blocks, goal-tagged habit check-ins
        and completed goal tasks. Tasks covered by a time block are counted
        through the block only.
        """
        day = day or local_today()
        start, end = day_bounds_utc(day)
        goals = {str(g.goal_id): g for g in GoalRepository(db).list_active(user_id)}
        per_goal: Dict[str, float] = {}

        def credit(goal_id: str, minutes: float) -> None:
            per_goal[goal_id] = per_goal.get(goal_id, 0) + minutes

        block_minutes = 0
        block_task_ids = set()
        for block in TimeBlockRepository(db).list_by_date(user_id, day):
            if block.goal_id and block.duration:
                block_minutes += block.duration
                credit(str(block.goal_id), block.duration)
                if block.task_id:
                    block_task_ids.add(str(block.task_id))

        habit_minutes = 0
        for checkin in HabitCheckinRepository(db).list_goal_checkins(user_id, day):
            if checkin.value_min:
                habit_minutes += checkin.value_min
                credit(str(checkin.goal_id), checkin.value_min)

        goal_tasks = [
            t
            for t in TaskRepository(db).list_completed_between(user_id, start, end)
            if t.goal_ids
        ]
        task_minutes = 0
        mindful_tasks = 0
        mindful_minutes = 0
        for task in goal_tasks:
            if str(task.task_id) in block_task_ids:
                continue
            duration = task.duration_minutes or DEFAULT_TASK_MINUTES
            task_minutes += duration
            if (task.mindful_rating or 0) >= MINDFUL_RATING_THRESHOLD:
                mindful_tasks += 1
                mindful_minutes += duration
            share = duration / len(task.goal_ids)
            for goal_id in task.goal_ids:
                credit(str(goal_id), share)

        total = min(block_minutes + habit_minutes + task_minutes, MINUTES_PER_DAY)
        score24 = min(24, _round1(total / 60))
        score_percentage = _round1(score24 / 24 * 100) if total > 0 else 0

        if goal_tasks:
            ratings = [t.mindful_rating or DEFAULT_MINDFUL_RATING for t in goal_tasks]
            average_rating = min(5, max(1, _round1(sum(ratings) / len(ratings))))
        else:
            average_rating = 1

        breakdown = [
            {
                "goal_id": goal_id,
                "goal_name": goals[goal_id].name,
                "goal_color": goals[goal_id].color,
                "minutes": round(minutes),
                "percentage": round(minutes / total * 100) if total > 0 else 0,
            }
            for goal_id, minutes in per_goal.items()
            if goal_id in goals
        ]
        breakdown.sort(key=lambda item: item["minutes"], reverse=True)

        metrics = {
            "date": day,
            "tasks_goal_aligned": len(goal_tasks),
            "block_minutes": block_minutes,
            "habit_minutes": habit_minutes,
            "task_minutes": task_minutes,
            "total_goal_aligned_minutes": total,
            "score24": score24,
            "score_percentage": min(100, score_percentage),
            "goal_breakdown": breakdown,
            "mindful_tasks": mindful_tasks,
            "mindful_minutes": mindful_minutes,
            "average_mindful_rating": average_rating,
        }
        record = GoalService._save_day(db, user_id, day, metrics)
        metrics["current_streak"] = record.current_streak
        metrics["longest_streak"] = record.longest_streak
        return metrics

    @staticmethod
    def _save_day(
        db: Session, user_id: uuid.UUID, day: date, metrics: Dict[str, Any]
    ) -> GoalAlignedDay:
        repo = GoalAlignedDayRepository(db)
        record = repo.get_by_date(user_id, day)
        if record is None:
            record = GoalAlignedDay(user_id=user_id, date=day, target_hours=DEFAULT_TARGET_HOURS)
            db.add(record)

        for field, value in metrics.items():
            if field != "date":
                setattr(record, field, value)

        yesterday = repo.get_by_date(user_id, day - timedelta(days=1))
        previous_longest = max(
            (yesterday.longest_streak if yesterday else 0), record.longest_streak or 0
        )
        if metrics["total_goal_aligned_minutes"] > 0:
            if yesterday and yesterday.total_goal_aligned_minutes > 0:
                record.current_streak = (yesterday.current_streak or 0) + 1
            else:
                record.current_streak = 1
        else:
            record.current_streak = 0
        record.longest_streak = max(previous_longest, record.current_streak)
        return repo.update(record)

    @staticmethod
    def get_streak(db: Session, user_id: uuid.UUID) -> Dict[str, Any]:
        latest = GoalAlignedDayRepository(db).get_latest(user_id)
        if not latest:
            return {
                "current_streak": 0,
                "longest_streak": 0,
                "target_hours": DEFAULT_TARGET_HOURS,
                "date": None,
            }
        return {
            "current_streak": latest.current_streak,
            "longest_streak": latest.longest_streak,
            "target_hours": latest.target_hours,
            "date": latest.date,
        }

    @staticmethod
    def get_weekly(
        db: Session, user_id: uuid.UUID, day: Optional[date] = None
    ) -> List[Dict[str, Any]]:
        """Snapshots for the Sunday-Saturday week containing ``day``"""
        start, end = week_bounds(day or local_today())
        return [
            {
                "date": d.date,
                "score24": d.score24,
                "score_percentage": d.score_percentage,
                "total_minutes": d.total_goal_aligned_minutes,
            }
            for d in GoalAlignedDayRepository(db).list_range(user_id, start, end)
        ]

    @staticmethod
    def get_history(
        db: Session, user_id: uuid.UUID, page: int = 1, limit: int = 30
    ) -> Tuple[List[GoalAlignedDay], int]:
        """Snapshots newest first; returns (days, total)"""
        return GoalAlignedDayRepository(db).list_paginated(user_id, page, limit)

    # ------------------ time blocks ------------------
    @staticmethod
    def list_blocks(
        db: Session,
        user_id: uuid.UUID,
        day: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[TimeBlock]:
        repo = TimeBlockRepository(db)
        if day:
            return repo.list_by_date(user_id, day)
        return repo.list_range(user_id, start_date, end_date)

    @staticmethod
    def create_block(db: Session, user_id: uuid.UUID, data: TimeBlockCreate) -> TimeBlock:
        start_time = to_naive_utc(data.start_time)
        end_time = to_naive_utc(data.end_time)
        if start_time and end_time and end_time < start_time:
            raise ServiceValidationError("end_time must be after start_time")

        duration = data.duration
        if duration is None:
            if not (start_time and end_time):
                raise ServiceValidationError("duration or start_time and end_time are required")
            duration = int((end_time - start_time).total_seconds() // 60)

        if data.goal_id and not GoalRepository(db).get_for_user(data.goal_id, user_id):
            raise NotFoundError(f"Goal not found: {data.goal_id}")
        if data.task_id and not TaskRepository(db).get_for_user(data.task_id, user_id):
            raise NotFoundError(f"Task not found: {data.task_id}")

        if data.date:
            day = data.date
        elif start_time:
            day = local_date_of(start_time)
        else:
            day = local_today()

        block = TimeBlock(
            user_id=user_id,
            date=day,
            title=data.title,
            start_time=start_time,
            end_time=end_time,
            duration=duration,
            goal_id=data.goal_id,
            task_id=data.task_id,
        )
        block = TimeBlockRepository(db).create(block)
        logger.info(f"Time block {block.block_id} ({duration} min) created for user {user_id}")
        return block

    @staticmethod
    def delete_block(db: Session, user_id: uuid.UUID, block_id: uuid.UUID) -> None:
        if not TimeBlockRepository(db).delete_for_user(block_id, user_id):
            raise NotFoundError(f"Time block not found: {block_id}")
