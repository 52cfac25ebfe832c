"""
Meal Repository - Data access layer for logged meals
"""

from typing import List, Optional, Tuple
from uuid import UUID
from datetime import datetime
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Meal

SORTABLE_FIELDS = {"ts", "created_at", "updated_at"}


class MealRepository(BaseRepository[Meal]):
    """Repository for meal data access"""

    id_field = "meal_id"

    def __init__(self, db: Session):
        super().__init__(db, Meal)

    def _range_query(
        self,
        user_id: UUID,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ):
        query = self.db.query(Meal).filter(Meal.user_id == user_id)
        if start_date:
            query = query.filter(Meal.ts >= start_date)
        if end_date:
            query = query.filter(Meal.ts <= end_date)
        return query

    def list_paginated(
        self,
        user_id: UUID,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        page: int = 1,
        limit: int = 50,
        sort_by: str = "ts",
        sort_order: str = "desc",
    ) -> Tuple[List[Meal], int]:
        """Meals in range, sorted and paginated; returns (meals, total)"""
        query = self._range_query(user_id, start_date, end_date)
        total = query.count()

        column = getattr(Meal, sort_by if sort_by in SORTABLE_FIELDS else "ts")
        query = query.order_by(column.asc() if sort_order == "asc" else column.desc())

        meals = query.offset((page - 1) * limit).limit(limit).all()
        return meals, total

    def list_in_range(
        self,
        user_id: UUID,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[Meal]:
        return self._range_query(user_id, start_date, end_date).all()
