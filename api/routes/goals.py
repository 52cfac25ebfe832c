"""Lifestyle goal and goal-aligned day routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from datetime import date
from typing import List, Optional

from api.dependencies import get_db, get_current_user
from api.responses import paginated_response, success_response
from domain.models import AppUser
from domain.schemas.goal_schemas import (
    GoalCreate,
    GoalUpdate,
    GoalResponse,
    DailyMetricsResponse,
    StreakResponse,
    WeeklyDay,
    HistoryResponse,
)
from services.goal_service import GoalService

router = APIRouter(prefix="/goals", tags=["Goals"])
logger = logging.getLogger("lyfe.api.goals")


@router.get("", response_model=List[GoalResponse])
def list_goals(user: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return GoalService.list_goals(db, user.user_id)


@router.post("", response_model=GoalResponse, status_code=status.HTTP_201_CREATED)
def create_goal(
    payload: GoalCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return GoalService.create_goal(db, user.user_id, payload)


@router.get("/today", response_model=DailyMetricsResponse)
def today_metrics(
    day: Optional[date] = Query(None, alias="date", description="Local day, today when omitted"),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Goal-aligned minutes for the local day; also refreshes the stored streak"""
    return GoalService.calculate_daily_metrics(db, user.user_id, day)


@router.get("/streak", response_model=StreakResponse)
def goal_streak(user: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return GoalService.get_streak(db, user.user_id)


@router.get("/weekly", response_model=List[WeeklyDay])
def weekly_scores(
    day: Optional[date] = Query(None, alias="date"),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return GoalService.get_weekly(db, user.user_id, day)


@router.get("/history", response_model=HistoryResponse)
def goal_history(
    page: int = Query(1, ge=1),
    limit: int = Query(30, ge=1, le=365),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    days, total = GoalService.get_history(db, user.user_id, page, limit)
    return paginated_response(days, total, page, limit, key="days")


@router.put("/{goal_id}", response_model=GoalResponse)
def update_goal(
    goal_id: UUID,
    payload: GoalUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return GoalService.update_goal(db, user.user_id, goal_id, payload)


@router.delete("/{goal_id}")
def delete_goal(
    goal_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    GoalService.delete_goal(db, user.user_id, goal_id)
    return success_response(message="Goal deleted")
