from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import datetime
from uuid import UUID
from decimal import Decimal


class ExpenseCreate(BaseModel):
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    category: str = Field(..., min_length=1)
    description: Optional[str] = None
    date: Optional[datetime] = None
    payment_method: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class ExpenseUpdate(BaseModel):
    amount: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    category: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    date: Optional[datetime] = None
    payment_method: Optional[str] = None
    tags: Optional[List[str]] = None


class ExpenseResponse(BaseModel):
    expense_id: UUID
    user_id: UUID
    amount: Decimal
    category: str
    description: Optional[str] = None
    date: datetime
    payment_method: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class IncomeCreate(BaseModel):
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    source: str = Field(..., min_length=1)
    description: Optional[str] = None
    date: Optional[datetime] = None
    recurring: bool = False


class IncomeUpdate(BaseModel):
    amount: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    source: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    date: Optional[datetime] = None
    recurring: Optional[bool] = None


class IncomeResponse(BaseModel):
    income_id: UUID
    user_id: UUID
    amount: Decimal
    source: str
    description: Optional[str] = None
    date: datetime
    recurring: bool

    model_config = {"from_attributes": True}


class FinanceSummaryResponse(BaseModel):
    total_expenses: Decimal
    total_income: Decimal
    net_amount: Decimal
    expenses_by_category: Dict[str, Decimal]
    recent_expenses: List[ExpenseResponse]
    recent_income: List[IncomeResponse]
