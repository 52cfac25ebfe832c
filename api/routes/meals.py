"""Meal logging routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from datetime import datetime
from typing import Optional

from api.dependencies import get_db, get_current_user
from api.responses import paginated_response, success_response
from domain.models import AppUser
from domain.schemas.meal_schemas import (
    MealCreate,
    MealUpdate,
    MealResponse,
    MealCreateResponse,
    MealListResponse,
    MealStatsResponse,
)
from services.meal_service import MealService

router = APIRouter(prefix="/meals", tags=["Meals"])
logger = logging.getLogger("lyfe.api.meals")


@router.post("", response_model=MealCreateResponse, status_code=status.HTTP_201_CREATED)
def create_meal(
    payload: MealCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Log a meal and return it with its nutrition analysis.

    Every item needs a catalog ``food_id`` and ``grams`` > 0; unknown foods
    answer 400 with the missing ids in ``details``.
    """
    meal, analysis = MealService.create_meal(db, user.user_id, payload)
    return {"meal": meal, "analysis": analysis}


@router.get("", response_model=MealListResponse)
def list_meals(
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    sort_by: str = Query("ts"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    meals, total = MealService.list_meals(
        db, user.user_id, start_date, end_date, page, limit, sort_by, sort_order
    )
    return paginated_response(meals, total, page, limit, key="meals")


@router.get("/stats/overview", response_model=MealStatsResponse)
def meal_stats(
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MealService.get_stats(db, user.user_id, start_date, end_date)


@router.get("/{meal_id}", response_model=MealResponse)
def get_meal(
    meal_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MealService.get_meal(db, user.user_id, meal_id)


@router.put("/{meal_id}", response_model=MealResponse)
def update_meal(
    meal_id: UUID,
    payload: MealUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MealService.update_meal(db, user.user_id, meal_id, payload)


@router.delete("/{meal_id}")
def delete_meal(
    meal_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    MealService.delete_meal(db, user.user_id, meal_id)
    return success_response(message="Meal deleted")
