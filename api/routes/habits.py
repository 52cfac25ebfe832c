"""Habit and habit check-in routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from api.dependencies import get_db, get_current_user
from api.responses import success_response
from domain.models import AppUser
from domain.schemas.habit_schemas import (
    HabitCreate,
    HabitUpdate,
    HabitResponse,
    EmbeddedCheckinCreate,
    HabitCheckinCreate,
    HabitCheckinUpdate,
    HabitCheckinResponse,
)
from services.habit_service import HabitService

router = APIRouter(prefix="/habits", tags=["Habits"])
logger = logging.getLogger("lyfe.api.habits")


@router.get("", response_model=List[HabitResponse])
def list_habits(
    include_inactive: bool = Query(False),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Habits whose start..end window covers now, or all with include_inactive"""
    return HabitService.list_habits(db, user.user_id, include_inactive)


@router.post("", response_model=HabitResponse, status_code=status.HTTP_201_CREATED)
def create_habit(
    payload: HabitCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return HabitService.create_habit(db, user.user_id, payload)


# Check-in routes come before /{habit_id} so "checkins" is not read as an id


@router.get("/checkins/{day}", response_model=List[HabitCheckinResponse])
def checkins_for_day(
    day: date,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return HabitService.list_checkins_by_date(db, user.user_id, day)


@router.post(
    "/checkins", response_model=HabitCheckinResponse, status_code=status.HTTP_201_CREATED
)
def create_checkin(
    payload: HabitCheckinCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return HabitService.create_checkin(db, user.user_id, payload)


@router.put("/checkins/{checkin_id}", response_model=HabitCheckinResponse)
def update_checkin(
    checkin_id: UUID,
    payload: HabitCheckinUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return HabitService.update_checkin(db, user.user_id, checkin_id, payload)


@router.delete("/checkins/{checkin_id}")
def delete_checkin(
    checkin_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    HabitService.delete_checkin(db, user.user_id, checkin_id)
    return success_response(message="Check-in deleted")


@router.put("/{habit_id}", response_model=HabitResponse)
def update_habit(
    habit_id: UUID,
    payload: HabitUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return HabitService.update_habit(db, user.user_id, habit_id, payload)


@router.delete("/{habit_id}")
def delete_habit(
    habit_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    HabitService.delete_habit(db, user.user_id, habit_id)
    return success_response(message="Habit deleted")


@router.post("/{habit_id}/checkin", response_model=HabitResponse)
def add_embedded_checkin(
    habit_id: UUID,
    payload: EmbeddedCheckinCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return HabitService.add_embedded_checkin(db, user.user_id, habit_id, payload)


@router.get("/{habit_id}/checkins", response_model=List[Dict[str, Any]])
def list_embedded_checkins(
    habit_id: UUID,
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return HabitService.list_embedded_checkins(db, user.user_id, habit_id, start_date, end_date)
