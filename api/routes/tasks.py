"""Task routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from datetime import date
from typing import List, Optional

from api.dependencies import get_db, get_current_user
from api.responses import success_response
from domain.enums import TaskStatus, Priority, EnergyLevel
from domain.models import AppUser
from domain.schemas.task_schemas import (
    TaskCreate,
    TaskUpdate,
    TaskCompleteRequest,
    SubtaskCreate,
    SubtaskUpdate,
    TaskResponse,
    TaskListResponse,
    BulkUpdateRequest,
    BulkDeleteRequest,
    TaskStatsResponse,
)
from services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["Tasks"])
logger = logging.getLogger("lyfe.api.tasks")


@router.get("", response_model=TaskListResponse)
def list_tasks(
    status_filter: Optional[TaskStatus] = Query(None, alias="status"),
    category: Optional[str] = Query(None),
    priority: Optional[Priority] = Query(None),
    energy_level: Optional[EnergyLevel] = Query(None),
    due_date: Optional[date] = Query(None, description="Tasks due on this local day"),
    search: Optional[str] = Query(None, description="Matches title, description and tags"),
    sort_by: str = Query("created_at"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return TaskService.list_tasks(
        db,
        user.user_id,
        status=status_filter,
        category=category,
        priority=priority,
        energy_level=energy_level,
        due_date=due_date,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Log a finished piece of work (stored as completed now)"""
    return TaskService.create_task(db, user.user_id, payload)


# Fixed paths are declared before /{task_id}


@router.get("/stats/overview", response_model=TaskStatsResponse)
def task_stats(user: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return TaskService.get_stats(db, user.user_id)


@router.get("/overdue/all", response_model=List[TaskResponse])
def overdue_tasks(user: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return TaskService.overdue(db, user.user_id)


@router.get("/due/today", response_model=List[TaskResponse])
def tasks_due_today(user: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return TaskService.due_today(db, user.user_id)


@router.get("/category/{category}", response_model=List[TaskResponse])
def tasks_by_category(
    category: str,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return TaskService.by_category(db, user.user_id, category)


@router.get("/priority/{priority}", response_model=List[TaskResponse])
def tasks_by_priority(
    priority: Priority,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return TaskService.by_priority(db, user.user_id, priority)


@router.put("/bulk/update")
def bulk_update_tasks(
    payload: BulkUpdateRequest,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    modified = TaskService.bulk_update(db, user.user_id, payload.task_ids, payload.updates)
    return {"modified_count": modified}


@router.delete("/bulk/delete")
def bulk_delete_tasks(
    payload: BulkDeleteRequest,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    deleted = TaskService.bulk_delete(db, user.user_id, payload.task_ids)
    return {"deleted_count": deleted}


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return TaskService.get_task(db, user.user_id, task_id)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: UUID,
    payload: TaskUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return TaskService.update_task(db, user.user_id, task_id, payload)


@router.delete("/{task_id}")
def delete_task(
    task_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    TaskService.delete_task(db, user.user_id, task_id)
    return success_response(message="Task deleted")


@router.put("/{task_id}/complete", response_model=TaskResponse)
def complete_task(
    task_id: UUID,
    payload: Optional[TaskCompleteRequest] = None,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    notes = payload.completion_notes if payload else None
    return TaskService.complete_task(db, user.user_id, task_id, notes)


@router.post("/{task_id}/subtasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def add_subtask(
    task_id: UUID,
    payload: SubtaskCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return TaskService.add_subtask(db, user.user_id, task_id, payload)


@router.put("/{task_id}/subtasks/{index}", response_model=TaskResponse)
def update_subtask(
    task_id: UUID,
    index: int,
    payload: SubtaskUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Edit the subtask at ``index``; an out-of-range index answers 400"""
    return TaskService.update_subtask(db, user.user_id, task_id, index, payload)
