from typing import List, Dict, Any, Optional
from datetime import date, datetime
from sqlalchemy.orm import Session
import logging
import math
import uuid

from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import TaskStatus
from domain.models import Task
from domain.schemas.task_schemas import (
    TaskCreate,
    TaskUpdate,
    SubtaskCreate,
    SubtaskUpdate,
)
from repositories import TaskRepository
from services.local_day import day_bounds_utc, local_today, to_naive_utc

logger = logging.getLogger("lyfe.tasks")


def _prepare_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
    """JSON columns hold strings; timestamps are stored naive UTC"""
    if changes.get("goal_ids") is not None:
        changes["goal_ids"] = [str(g) for g in changes["goal_ids"]]
    if changes.get("tags") is not None:
        changes["tags"] = list(changes["tags"])
    if "due_date" in changes:
        changes["due_date"] = to_naive_utc(changes["due_date"])
    return changes


class TaskService:
    @staticmethod
    def get_task(db: Session, user_id: uuid.UUID, task_id: uuid.UUID) -> Task:
        task = TaskRepository(db).get_for_user(task_id, user_id)
        if not task:
            raise NotFoundError(f"Task not found: {task_id}")
        return task

    @staticmethod
    def list_tasks(
        db: Session,
        user_id: uuid.UUID,
        status: Optional[TaskStatus] = None,
        category: Optional[str] = None,
        priority: Optional[str] = None,
        energy_level: Optional[str] = None,
        due_date: Optional[date] = None,
        search: Optional[str] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        page: int = 1,
        limit: int = 20,
    ) -> Dict[str, Any]:
        due_from = due_to = None
        if due_date:
            due_from, due_to = day_bounds_utc(due_date)

        tasks, total = TaskRepository(db).search(
            user_id,
            {
                "status": status,
                "category": category,
                "priority": priority,
                "energy_level": energy_level,
            },
            search=search,
            due_from=due_from,
            due_to=due_to,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            limit=limit,
        )
        return {
            "tasks": tasks,
            "total_pages": math.ceil(total / limit) if limit else 0,
            "current_page": page,
            "total_tasks": total,
        }

    @staticmethod
    def create_task(db: Session, user_id: uuid.UUID, data: TaskCreate) -> Task:
        """Log a piece of work. Tasks are recorded once done, so they start completed."""
        now = datetime.utcnow()
        task = Task(
            user_id=user_id,
            title=data.title,
            description=data.description,
            status=TaskStatus.COMPLETED,
            completed_at=now,
            priority=data.priority,
            category=data.category,
            energy_level=data.energy_level,
            due_date=to_naive_utc(data.due_date),
            duration_minutes=data.duration_minutes,
            mindful_rating=data.mindful_rating,
            goal_ids=[str(g) for g in data.goal_ids],
            tags=list(data.tags),
            subtasks=[s.model_dump(mode="json") for s in data.subtasks],
        )
        task = TaskRepository(db).create(task)
        logger.info(f"Task {task.task_id} logged for user {user_id}")
        return task

    @staticmethod
    def update_task(
        db: Session, user_id: uuid.UUID, task_id: uuid.UUID, data: TaskUpdate
    ) -> Task:
        task = TaskService.get_task(db, user_id, task_id)
        changes = _prepare_changes(data.model_dump(exclude_unset=True))

        new_status = changes.get("status")
        if new_status == TaskStatus.COMPLETED and task.status != TaskStatus.COMPLETED:
            changes["completed_at"] = datetime.utcnow()
        elif new_status is not None and new_status != TaskStatus.COMPLETED:
            changes["completed_at"] = None
        return TaskRepository(db).apply_changes(task, changes)

    @staticmethod
    def delete_task(db: Session, user_id: uuid.UUID, task_id: uuid.UUID) -> None:
        if not TaskRepository(db).delete_for_user(task_id, user_id):
            raise NotFoundError(f"Task not found: {task_id}")
        logger.info(f"Task {task_id} deleted")

    @staticmethod
    def complete_task(
        db: Session, user_id: uuid.UUID, task_id: uuid.UUID, completion_notes: Optional[str] = None
    ) -> Task:
        task = TaskService.get_task(db, user_id, task_id)
        changes: Dict[str, Any] = {
            "status": TaskStatus.COMPLETED,
            "completed_at": datetime.utcnow(),
        }
        if completion_notes is not None:
            changes["completion_notes"] = completion_notes
        return TaskRepository(db).apply_changes(task, changes)

    # ------------------ subtasks ------------------
    @staticmethod
    def add_subtask(
        db: Session, user_id: uuid.UUID, task_id: uuid.UUID, data: SubtaskCreate
    ) -> Task:
        task = TaskService.get_task(db, user_id, task_id)
        subtask = {"title": data.title, "completed": False, "completed_at": None}
        return TaskRepository(db).apply_changes(
            task, {"subtasks": list(task.subtasks or []) + [subtask]}
        )

    @staticmethod
    def update_subtask(
        db: Session,
        user_id: uuid.UUID,
        task_id: uuid.UUID,
        index: int,
        data: SubtaskUpdate,
    ) -> Task:
        task = TaskService.get_task(db, user_id, task_id)
        subtasks = [dict(s) for s in task.subtasks or []]
        if index < 0 or index >= len(subtasks):
            raise ServiceValidationError(
                "Invalid subtask index", details={"index": index, "count": len(subtasks)}
            )

        subtask = subtasks[index]
        if data.title is not None:
            subtask["title"] = data.title
        if data.completed is not None:
            subtask["completed"] = data.completed
            subtask["completed_at"] = (
                datetime.utcnow().isoformat() if data.completed else None
            )
        return TaskRepository(db).apply_changes(task, {"subtasks": subtasks})

    # ------------------ views ------------------
    @staticmethod
    def by_category(db: Session, user_id: uuid.UUID, category: str) -> List[Task]:
        return TaskRepository(db).list_by(user_id, category=category)

    @staticmethod
    def by_priority(db: Session, user_id: uuid.UUID, priority: str) -> List[Task]:
        return TaskRepository(db).list_by(user_id, priority=priority)

    @staticmethod
    def overdue(db: Session, user_id: uuid.UUID) -> List[Task]:
        return TaskRepository(db).list_overdue(user_id, datetime.utcnow())

    @staticmethod
    def due_today(db: Session, user_id: uuid.UUID) -> List[Task]:
        start, end = day_bounds_utc(local_today())
        return TaskRepository(db).list_due_between(user_id, start, end)

    # ------------------ bulk ------------------
    @staticmethod
    def bulk_update(
        db: Session, user_id: uuid.UUID, task_ids: List[uuid.UUID], updates: TaskUpdate
    ) -> int:
        if not task_ids:
            raise ServiceValidationError("task_ids must be a non-empty list")
        repo = TaskRepository(db)
        changes = _prepare_changes(updates.model_dump(exclude_unset=True))
        tasks = repo.list_by_ids(user_id, task_ids)
        now = datetime.utcnow()
        for task in tasks:
            for field, value in changes.items():
                setattr(task, field, value)
            if changes.get("status") == TaskStatus.COMPLETED and not task.completed_at:
                task.completed_at = now
        db.commit()
        logger.info(f"Bulk updated {len(tasks)} tasks for user {user_id}")
        return len(tasks)

    @staticmethod
    def bulk_delete(db: Session, user_id: uuid.UUID, task_ids: List[uuid.UUID]) -> int:
        if not task_ids:
            raise ServiceValidationError("task_ids must be a non-empty list")
        deleted = TaskRepository(db).delete_by_ids(user_id, task_ids)
        logger.info(f"Bulk deleted {deleted} tasks for user {user_id}")
        return deleted

    @staticmethod
    def get_stats(db: Session, user_id: uuid.UUID) -> Dict[str, Any]:
        repo = TaskRepository(db)
        by_status = repo.count_grouped(user_id, "status")
        overview = {
            "total": sum(by_status.values()),
            "completed": by_status.get(TaskStatus.COMPLETED.value, 0),
            "pending": by_status.get(TaskStatus.PENDING.value, 0),
            "in_progress": by_status.get(TaskStatus.IN_PROGRESS.value, 0),
            "overdue": len(repo.list_overdue(user_id, datetime.utcnow())),
        }
        by_category = [
            {"category": k, "count": v}
            for k, v in sorted(repo.count_grouped(user_id, "category").items(), key=lambda kv: -kv[1])
        ]
        by_priority = [
            {"priority": k, "count": v}
            for k, v in sorted(repo.count_grouped(user_id, "priority").items(), key=lambda kv: -kv[1])
        ]
        return {"overview": overview, "by_category": by_category, "by_priority": by_priority}
