from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date as date_type, datetime
from uuid import UUID

from domain.enums import Priority
from domain.schemas.meal_schemas import Pagination


class GoalCreate(BaseModel):
    name: str = Field(..., min_length=1)
    color: str = Field(default="#10B981", pattern=r"^#[0-9A-Fa-f]{6}$")
    description: Optional[str] = None
    category: Optional[str] = None
    target_hours: float = Field(default=1, ge=0, le=24)
    priority: Priority = Priority.MEDIUM


class GoalUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    color: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    description: Optional[str] = None
    category: Optional[str] = None
    target_hours: Optional[float] = Field(None, ge=0, le=24)
    priority: Optional[Priority] = None
    is_active: Optional[bool] = None


class GoalResponse(BaseModel):
    goal_id: UUID
    user_id: UUID
    name: str
    color: str
    description: Optional[str] = None
    category: Optional[str] = None
    target_hours: float
    priority: Priority
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class GoalBreakdownItem(BaseModel):
    goal_id: str
    goal_name: str
    goal_color: str
    minutes: int
    percentage: int


class DailyMetricsResponse(BaseModel):
    date: date_type
    tasks_goal_aligned: int
    block_minutes: float
    habit_minutes: float
    task_minutes: float
    total_goal_aligned_minutes: float
    score24: float
    score_percentage: float
    goal_breakdown: List[GoalBreakdownItem]
    mindful_tasks: int
    mindful_minutes: float
    average_mindful_rating: float
    current_streak: int
    longest_streak: int


class StreakResponse(BaseModel):
    current_streak: int = 0
    longest_streak: int = 0
    target_hours: float = 8
    date: Optional[date_type] = None


class WeeklyDay(BaseModel):
    date: date_type
    score24: float
    score_percentage: float
    total_minutes: float


class GoalAlignedDayResponse(BaseModel):
    day_id: UUID
    date: date_type
    score24: float
    score_percentage: float
    total_goal_aligned_minutes: float
    tasks_goal_aligned: int
    current_streak: int
    longest_streak: int
    target_hours: float

    model_config = {"from_attributes": True}


class HistoryResponse(BaseModel):
    days: List[GoalAlignedDayResponse]
    pagination: Pagination


class TimeBlockCreate(BaseModel):
    date: Optional[date_type] = None
    title: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration: Optional[int] = Field(
        None, ge=0, le=1440, description="Minutes; derived from start/end when omitted"
    )
    goal_id: Optional[UUID] = None
    task_id: Optional[UUID] = None


class TimeBlockResponse(BaseModel):
    block_id: UUID
    user_id: UUID
    date: date_type
    title: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration: int
    goal_id: Optional[UUID] = None
    task_id: Optional[UUID] = None

    model_config = {"from_attributes": True}
