"""
Task Repository - Data access layer for tasks
"""

from typing import List, Optional, Tuple, Dict, Any
from uuid import UUID
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy import or_, cast, String, func

from repositories.base import BaseRepository
from domain.models import Task
from domain.enums import TaskStatus

SORTABLE_FIELDS = {
    "created_at",
    "updated_at",
    "due_date",
    "completed_at",
    "priority",
    "title",
    "status",
}


class TaskRepository(BaseRepository[Task]):
    """Repository for task data access"""

    id_field = "task_id"

    def __init__(self, db: Session):
        super().__init__(db, Task)

    def _user_query(self, user_id: UUID):
        return self.db.query(Task).filter(Task.user_id == user_id)

    def search(
        self,
        user_id: UUID,
        filters: Dict[str, Any],
        search: Optional[str] = None,
        due_from: Optional[datetime] = None,
        due_to: Optional[datetime] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Task], int]:
        """Filtered, sorted page of tasks; returns (tasks, total)"""
        query = self._user_query(user_id)
        for field, value in filters.items():
            if value is not None:
                query = query.filter(getattr(Task, field) == value)
        if due_from is not None:
            query = query.filter(Task.due_date >= due_from)
        if due_to is not None:
            query = query.filter(Task.due_date < due_to)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Task.title.ilike(pattern),
                    Task.description.ilike(pattern),
                    cast(Task.tags, String).ilike(pattern),
                )
            )

        total = query.count()
        column = getattr(Task, sort_by if sort_by in SORTABLE_FIELDS else "created_at")
        query = query.order_by(column.asc() if sort_order == "asc" else column.desc())
        tasks = query.offset((page - 1) * limit).limit(limit).all()
        return tasks, total

    def list_by(self, user_id: UUID, **filters) -> List[Task]:
        query = self._user_query(user_id)
        for field, value in filters.items():
            query = query.filter(getattr(Task, field) == value)
        return query.order_by(Task.created_at.desc()).all()

    def list_overdue(self, user_id: UUID, now: datetime) -> List[Task]:
        return (
            self._user_query(user_id)
            .filter(
                Task.due_date.isnot(None),
                Task.due_date < now,
                Task.status != TaskStatus.COMPLETED,
            )
            .order_by(Task.due_date.asc())
            .all()
        )

    def list_due_between(self, user_id: UUID, start: datetime, end: datetime) -> List[Task]:
        return (
            self._user_query(user_id)
            .filter(Task.due_date >= start, Task.due_date < end)
            .order_by(Task.due_date.asc())
            .all()
        )

    def list_completed_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> List[Task]:
        return (
            self._user_query(user_id)
            .filter(
                Task.status == TaskStatus.COMPLETED,
                Task.completed_at >= start,
                Task.completed_at < end,
            )
            .all()
        )

    def list_by_ids(self, user_id: UUID, task_ids: List[UUID]) -> List[Task]:
        return self._user_query(user_id).filter(Task.task_id.in_(task_ids)).all()

    def delete_by_ids(self, user_id: UUID, task_ids: List[UUID]) -> int:
        count = (
            self._user_query(user_id)
            .filter(Task.task_id.in_(task_ids))
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return count

    def count_grouped(self, user_id: UUID, column_name: str) -> Dict[str, int]:
        """{value: count} for one column, None values skipped"""
        column = getattr(Task, column_name)
        rows = (
            self.db.query(column, func.count(Task.task_id))
            .filter(Task.user_id == user_id)
            .group_by(column)
            .all()
        )
        grouped = {}
        for value, count in rows:
            if value is None:
                continue
            key = value.value if hasattr(value, "value") else str(value)
            grouped[key] = count
        return grouped

    def count(self, user_id: UUID, **filters) -> int:
        query = self._user_query(user_id)
        for field, value in filters.items():
            query = query.filter(getattr(Task, field) == value)
        return query.count()
