"""Pantry stock routes"""

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_db, get_current_user
from api.responses import success_response
from domain.enums import PantryCategory
from domain.models import AppUser
from domain.schemas.pantry_schemas import (
    PantryItemCreate,
    PantryItemUpdate,
    PantryItemResponse,
    PantryBulkUpdateRequest,
    PantryAddMultipleRequest,
    PantryCategorySummary,
)
from services.pantry_service import PantryService

router = APIRouter(prefix="/pantry", tags=["Pantry"])
logger = logging.getLogger("lyfe.api.pantry")


@router.get("", response_model=List[PantryItemResponse])
def get_pantry(
    category: Optional[PantryCategory] = Query(None),
    subcategory: Optional[str] = Query(None),
    is_low: Optional[bool] = Query(None),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Pantry items, optionally narrowed by category, subcategory or low stock"""
    items = PantryService.get_pantry(db, user.user_id, category, subcategory, is_low)
    return [PantryItemResponse.model_validate(i) for i in items]


@router.get("/summary", response_model=List[PantryCategorySummary])
def pantry_summary(user: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return PantryService.get_summary(db, user.user_id)


@router.get("/low-stock", response_model=List[PantryItemResponse])
def low_stock(user: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return PantryService.get_low_stock(db, user.user_id)


@router.post("", response_model=PantryItemResponse, status_code=status.HTTP_201_CREATED)
def add_pantry_item(
    payload: PantryItemCreate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    item = PantryService.add_item(db, user.user_id, payload)
    return PantryItemResponse.model_validate(item)


@router.patch("/bulk-update", response_model=List[PantryItemResponse])
def bulk_update(
    payload: PantryBulkUpdateRequest,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Update several items at once.

    Either every listed item is updated or none is: an unknown item id
    answers 404 and leaves the pantry unchanged.

    Example:
    {"items": [{"item_id": "...", "quantity": 2}, {"item_id": "...", "quantity": 0}]}
    """
    return PantryService.bulk_update(db, user.user_id, payload.items)


@router.post(
    "/add-multiple",
    response_model=List[PantryItemResponse],
    status_code=status.HTTP_201_CREATED,
)
def add_multiple(
    payload: PantryAddMultipleRequest,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return PantryService.add_multiple(db, user.user_id, payload.items)


@router.put("/{item_id}", response_model=PantryItemResponse)
def update_pantry_item(
    item_id: UUID,
    payload: PantryItemUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Edit an item; ``is_low`` is recomputed from quantity and threshold"""
    return PantryService.update_item(db, user.user_id, item_id, payload)


@router.patch("/{item_id}/ordered-today", response_model=PantryItemResponse)
def mark_ordered_today(
    item_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return PantryService.mark_ordered_today(db, user.user_id, item_id)


@router.delete("/{item_id}")
def delete_pantry_item(
    item_id: UUID,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    PantryService.delete_item(db, user.user_id, item_id)
    return success_response(data={"removed": str(item_id)}, message="Pantry item deleted")
