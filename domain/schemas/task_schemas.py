from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime
from uuid import UUID

from domain.enums import TaskStatus, Priority, EnergyLevel


class Subtask(BaseModel):
    title: str = Field(..., min_length=1)
    completed: bool = False
    completed_at: Optional[datetime] = None


class TaskCreate(BaseModel):
    """Logged task; the service stores it as completed at creation time"""

    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    category: Optional[str] = None
    energy_level: Optional[EnergyLevel] = None
    due_date: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(None, ge=0, le=1440)
    mindful_rating: Optional[int] = Field(None, ge=1, le=5)
    goal_ids: List[UUID] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    subtasks: List[Subtask] = Field(default_factory=list)


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[Priority] = None
    category: Optional[str] = None
    energy_level: Optional[EnergyLevel] = None
    due_date: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(None, ge=0, le=1440)
    mindful_rating: Optional[int] = Field(None, ge=1, le=5)
    goal_ids: Optional[List[UUID]] = None
    tags: Optional[List[str]] = None


class TaskCompleteRequest(BaseModel):
    completion_notes: Optional[str] = None


class SubtaskCreate(BaseModel):
    title: str = Field(..., min_length=1)


class SubtaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    completed: Optional[bool] = None


class TaskResponse(BaseModel):
    task_id: UUID
    user_id: UUID
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: Priority
    category: Optional[str] = None
    energy_level: Optional[EnergyLevel] = None
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    completion_notes: Optional[str] = None
    duration_minutes: Optional[int] = None
    mindful_rating: Optional[int] = None
    goal_ids: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    subtasks: List[Dict[str, Any]] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TaskListResponse(BaseModel):
    tasks: List[TaskResponse]
    total_pages: int
    current_page: int
    total_tasks: int


class BulkUpdateRequest(BaseModel):
    task_ids: List[UUID] = Field(default_factory=list)
    updates: TaskUpdate = Field(default_factory=TaskUpdate)


class BulkDeleteRequest(BaseModel):
    task_ids: List[UUID] = Field(default_factory=list)


class TaskStatsOverview(BaseModel):
    total: int
    completed: int
    pending: int
    in_progress: int
    overdue: int


class TaskStatsResponse(BaseModel):
    overview: TaskStatsOverview
    by_category: List[Dict[str, Any]]
    by_priority: List[Dict[str, Any]]
