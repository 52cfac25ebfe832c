from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID
from decimal import Decimal

from domain.enums import PantryCategory


class PantryItemCreate(BaseModel):
    category: PantryCategory
    subcategory: Optional[str] = None
    item_name: str = Field(..., min_length=1)
    quantity: Decimal = Field(default=Decimal("1"), ge=0)
    unit: str = "piece"
    low_threshold: Decimal = Field(default=Decimal("1"), ge=0)
    notes: Optional[str] = None


class PantryItemUpdate(BaseModel):
    category: Optional[PantryCategory] = None
    subcategory: Optional[str] = None
    item_name: Optional[str] = Field(None, min_length=1)
    quantity: Optional[Decimal] = Field(None, ge=0)
    unit: Optional[str] = None
    low_threshold: Optional[Decimal] = Field(None, ge=0)
    notes: Optional[str] = None


class PantryBulkUpdateItem(PantryItemUpdate):
    item_id: UUID


class PantryBulkUpdateRequest(BaseModel):
    items: List[PantryBulkUpdateItem] = Field(..., min_length=1)


class PantryAddMultipleRequest(BaseModel):
    items: List[PantryItemCreate] = Field(..., min_length=1)


class PantryItemResponse(BaseModel):
    item_id: UUID
    user_id: UUID
    category: PantryCategory
    subcategory: Optional[str] = None
    item_name: str
    quantity: Decimal
    unit: str
    last_ordered: Optional[datetime] = None
    is_low: bool
    low_threshold: Decimal
    notes: Optional[str] = None
    updated_at: datetime

    model_config = {"from_attributes": True}


class PantryCategorySummary(BaseModel):
    category: PantryCategory
    total_items: int
    low_stock: int
    items: List[PantryItemResponse]
