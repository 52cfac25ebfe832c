from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import date as date_type, datetime
from uuid import UUID

from domain.enums import HabitQuality


class HabitCreate(BaseModel):
    habit: str = Field(..., min_length=1)
    value_min: int = Field(default=0, ge=0, description="Minutes per session")
    notes: Optional[str] = None
    start_date: Optional[datetime] = None
    # Required; validated in the service so the API answers 400
    end_date: Optional[datetime] = None
    quality: HabitQuality = HabitQuality.GOOD
    goal_id: Optional[UUID] = None


class HabitUpdate(BaseModel):
    habit: Optional[str] = Field(None, min_length=1)
    value_min: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    quality: Optional[HabitQuality] = None
    goal_id: Optional[UUID] = None
    is_active: Optional[bool] = None


class HabitResponse(BaseModel):
    habit_id: UUID
    user_id: UUID
    habit: str
    value_min: int
    notes: Optional[str] = None
    start_date: datetime
    end_date: datetime
    quality: HabitQuality
    goal_id: Optional[UUID] = None
    is_active: bool
    checkins: List[Dict[str, Any]] = Field(default_factory=list)
    created_at: datetime

    model_config = {"from_attributes": True}


class EmbeddedCheckinCreate(BaseModel):
    date: Optional[datetime] = None
    completed: bool = True
    duration: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None
    quality: Optional[HabitQuality] = None


class HabitCheckinCreate(BaseModel):
    habit_id: UUID
    date: Optional[date_type] = None
    value_min: int = Field(default=0, ge=0)
    completed: bool = True
    notes: Optional[str] = None
    quality: HabitQuality = HabitQuality.GOOD
    goal_id: Optional[UUID] = Field(
        None, description="Defaults to the habit's goal"
    )


class HabitCheckinUpdate(BaseModel):
    value_min: Optional[int] = Field(None, ge=0)
    completed: Optional[bool] = None
    notes: Optional[str] = None
    quality: Optional[HabitQuality] = None
    goal_id: Optional[UUID] = None


class HabitCheckinResponse(BaseModel):
    checkin_id: UUID
    user_id: UUID
    habit_id: UUID
    goal_id: Optional[UUID] = None
    date: date_type
    value_min: int
    completed: bool
    notes: Optional[str] = None
    quality: HabitQuality
    created_at: datetime

    model_config = {"from_attributes": True}
