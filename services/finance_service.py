from typing import List, Dict, Any, Optional
from datetime import datetime
from decimal import Decimal
from sqlalchemy.orm import Session
import logging
import uuid

from app.exceptions import NotFoundError
from domain.models import Expense, Income
from domain.schemas.finance_schemas import (
    ExpenseCreate,
    ExpenseUpdate,
    IncomeCreate,
    IncomeUpdate,
)
from repositories import ExpenseRepository, IncomeRepository
from services.local_day import to_naive_utc

logger = logging.getLogger("lyfe.finance")

LIST_LIMIT = 100
RECENT_LIMIT = 5


def _normalize(changes: Dict[str, Any]) -> Dict[str, Any]:
    if changes.get("date") is not None:
        changes["date"] = to_naive_utc(changes["date"])
    elif "date" in changes:
        # a null date keeps the stored one
        del changes["date"]
    if changes.get("tags") is not None:
        changes["tags"] = list(changes["tags"])
    return changes


class FinanceService:
    # ------------------ expenses ------------------
    @staticmethod
    def list_expenses(db: Session, user_id: uuid.UUID) -> List[Expense]:
        return ExpenseRepository(db).list_range(user_id, limit=LIST_LIMIT)

    @staticmethod
    def create_expense(db: Session, user_id: uuid.UUID, data: ExpenseCreate) -> Expense:
        expense = Expense(
            user_id=user_id,
            amount=data.amount,
            category=data.category,
            description=data.description,
            date=to_naive_utc(data.date) or datetime.utcnow(),
            payment_method=data.payment_method,
            tags=list(data.tags),
        )
        expense = ExpenseRepository(db).create(expense)
        logger.info(f"Expense {expense.expense_id} ({expense.amount}) recorded for user {user_id}")
        return expense

    @staticmethod
    def update_expense(
        db: Session, user_id: uuid.UUID, expense_id: uuid.UUID, data: ExpenseUpdate
    ) -> Expense:
        repo = ExpenseRepository(db)
        expense = repo.get_for_user(expense_id, user_id)
        if not expense:
            raise NotFoundError(f"Expense not found: {expense_id}")
        return repo.apply_changes(expense, _normalize(data.model_dump(exclude_unset=True)))

    @staticmethod
    def delete_expense(db: Session, user_id: uuid.UUID, expense_id: uuid.UUID) -> None:
        if not ExpenseRepository(db).delete_for_user(expense_id, user_id):
            raise NotFoundError(f"Expense not found: {expense_id}")

    # ------------------ income ------------------
    @staticmethod
    def list_income(db: Session, user_id: uuid.UUID) -> List[Income]:
        return IncomeRepository(db).list_range(user_id, limit=LIST_LIMIT)

    @staticmethod
    def create_income(db: Session, user_id: uuid.UUID, data: IncomeCreate) -> Income:
        income = Income(
            user_id=user_id,
            amount=data.amount,
            source=data.source,
            description=data.description,
            date=to_naive_utc(data.date) or datetime.utcnow(),
            recurring=data.recurring,
        )
        income = IncomeRepository(db).create(income)
        logger.info(f"Income {income.income_id} ({income.amount}) recorded for user {user_id}")
        return income

    @staticmethod
    def update_income(
        db: Session, user_id: uuid.UUID, income_id: uuid.UUID, data: IncomeUpdate
    ) -> Income:
        repo = IncomeRepository(db)
        income = repo.get_for_user(income_id, user_id)
        if not income:
            raise NotFoundError(f"Income not found: {income_id}")
        return repo.apply_changes(income, _normalize(data.model_dump(exclude_unset=True)))

    @staticmethod
    def delete_income(db: Session, user_id: uuid.UUID, income_id: uuid.UUID) -> None:
        if not IncomeRepository(db).delete_for_user(income_id, user_id):
            raise NotFoundError(f"Income not found: {income_id}")

    @staticmethod
    def get_summary(
        db: Session,
        user_id: uuid.UUID,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """Totals for the optional date range.

        Returns:
            total_expenses, total_income, net_amount, expenses_by_category and
            the five most recent expenses and income records
        """
        start_date, end_date = to_naive_utc(start_date), to_naive_utc(end_date)
        expenses = ExpenseRepository(db).list_range(user_id, start_date, end_date)
        income = IncomeRepository(db).list_range(user_id, start_date, end_date)

        total_expenses = sum((Decimal(e.amount) for e in expenses), Decimal("0"))
        total_income = sum((Decimal(i.amount) for i in income), Decimal("0"))
        by_category: Dict[str, Decimal] = {}
        for expense in expenses:
            by_category[expense.category] = by_category.get(expense.category, Decimal("0")) + Decimal(
                expense.amount
            )

        return {
            "total_expenses": total_expenses,
            "total_income": total_income,
            "net_amount": total_income - total_expenses,
            "expenses_by_category": by_category,
            "recent_expenses": expenses[:RECENT_LIMIT],
            "recent_income": income[:RECENT_LIMIT],
        }
