"""Expense and income routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from datetime import datetime
from typing import List, Optional

from api.dependencies import get_db, get_current_user
from api.responses import success_response
from domain.models import AppUser
from domain.schemas.finance_schemas import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
    IncomeCreate,
    IncomeUpdate,
    IncomeResponse,
    FinanceSummaryResponse,
)
from services.finance_service import FinanceService

router = APIRouter(prefix="/finance", tags=["Finance"])
logger = logging.getLogger("lyfe.api.finance")


# ------------------ expenses ------------------
@router.get("/expenses", response_model=List[ExpenseResponse])
def list_expenses(user: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    """Latest 100 expenses, newest first"""
    return FinanceService.list_expenses(db, user.user_id)


@router.post("/expenses", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
def create_expense(
    payload: ExpenseCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return FinanceService.create_expense(db, user.user_id, payload)


@router.put("/expenses/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: UUID,
    payload: ExpenseUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return FinanceService.update_expense(db, user.user_id, expense_id, payload)


@router.delete("/expenses/{expense_id}")
def delete_expense(
    expense_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    FinanceService.delete_expense(db, user.user_id, expense_id)
    return success_response(message="Expense deleted")


# ------------------ income ------------------
@router.get("/income", response_model=List[IncomeResponse])
def list_income(user: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return FinanceService.list_income(db, user.user_id)


@router.post("/income", response_model=IncomeResponse, status_code=status.HTTP_201_CREATED)
def create_income(
    payload: IncomeCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return FinanceService.create_income(db, user.user_id, payload)


@router.put("/income/{income_id}", response_model=IncomeResponse)
def update_income(
    income_id: UUID,
    payload: IncomeUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return FinanceService.update_income(db, user.user_id, income_id, payload)


@router.delete("/income/{income_id}")
def delete_income(
    income_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    FinanceService.delete_income(db, user.user_id, income_id)
    return success_response(message="Income deleted")


@router.get("/summary", response_model=FinanceSummaryResponse)
def finance_summary(
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return FinanceService.get_summary(db, user.user_id, start_date, end_date)
