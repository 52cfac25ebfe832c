"""
Mindfulness Repository - Data access layer for daily check-ins
"""

from typing import List, Optional
from uuid import UUID
from datetime import date
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import MindfulnessCheckin


class MindfulnessRepository(BaseRepository[MindfulnessCheckin]):
    """Repository for mindfulness check-in data access"""

    id_field = "checkin_id"

    def __init__(self, db: Session):
        super().__init__(db, MindfulnessCheckin)

    def get_by_date(self, user_id: UUID, day: date) -> Optional[MindfulnessCheckin]:
        return (
            self.db.query(MindfulnessCheckin)
            .filter(
                MindfulnessCheckin.user_id == user_id,
                MindfulnessCheckin.date == day,
            )
            .first()
        )

    def list_range(
        self,
        user_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
        newest_first: bool = True,
    ) -> List[MindfulnessCheckin]:
        query = self.db.query(MindfulnessCheckin).filter(
            MindfulnessCheckin.user_id == user_id
        )
        if start_date:
            query = query.filter(MindfulnessCheckin.date >= start_date)
        if end_date:
            query = query.filter(MindfulnessCheckin.date <= end_date)
        order = (
            MindfulnessCheckin.date.desc()
            if newest_first
            else MindfulnessCheckin.date.asc()
        )
        query = query.order_by(order)
        if limit:
            query = query.limit(limit)
        return query.all()
