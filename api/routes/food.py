"""Food catalog routes (MongoDB backed)"""

from fastapi import APIRouter, Depends, Query
import logging
from typing import List, Optional

from api.dependencies import get_current_user
from domain.schemas.food_schemas import (
    FoodItemResponse,
    FoodSearchResponse,
    FoodCategory,
    FoodSuggestionsResponse,
)
from services.food_service import FoodService

router = APIRouter(
    prefix="/food", tags=["Food"], dependencies=[Depends(get_current_user)]
)
logger = logging.getLogger("lyfe.api.food")


@router.get("/search", response_model=FoodSearchResponse)
def search_foods(
    q: Optional[str] = Query(None, description="Food name; accents and case are ignored"),
    limit: int = Query(20, ge=1, le=100),
    include_provenance: bool = Query(False),
):
    """Text search on names, falling back to a regex over names and aliases.

    Examples:
    - GET /food/search?q=paneer
    - GET /food/search?q=roti&include_provenance=true
    """
    return FoodService.search(q, limit=limit, include_provenance=include_provenance)


@router.get("/categories", response_model=List[FoodCategory])
def food_categories():
    """Item counts per source, largest first"""
    return FoodService.get_categories()


@router.get("/popular", response_model=List[FoodItemResponse])
def popular_foods(limit: int = Query(10, ge=1, le=100)):
    return FoodService.get_popular(limit)


@router.get("/suggestions", response_model=FoodSuggestionsResponse)
def food_suggestions(
    current_foods: str = Query("", description="Comma-separated food ids"),
    limit: int = Query(5, ge=1, le=50),
):
    """Foods that fill what the current plate lacks (protein and/or veg)"""
    return FoodService.get_suggestions(current_foods.split(","), limit)


@router.get("/{food_id}", response_model=FoodItemResponse)
def get_food(food_id: str):
    return FoodService.get_food(food_id)
