"""
Finance Repository - Data access layer for expenses and income
"""

from typing import List, Optional
from uuid import UUID
from datetime import datetime
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Expense, Income


class _DatedRepository(BaseRepository):
    """Shared date-range listing for the dated finance tables"""

    def list_range(
        self,
        user_id: UUID,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List:
        query = self.db.query(self.model).filter(self.model.user_id == user_id)
        if start_date:
            query = query.filter(self.model.date >= start_date)
        if end_date:
            query = query.filter(self.model.date <= end_date)
        query = query.order_by(self.model.date.desc())
        if limit:
            query = query.limit(limit)
        return query.all()


class ExpenseRepository(_DatedRepository):
    id_field = "expense_id"

    def __init__(self, db: Session):
        super().__init__(db, Expense)


class IncomeRepository(_DatedRepository):
    id_field = "income_id"

    def __init__(self, db: Session):
        super().__init__(db, Income)
