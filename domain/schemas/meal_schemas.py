from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime
from uuid import UUID


class MealContext(BaseModel):
    """Circumstances of a meal that adjust scoring"""

    post_workout: bool = False
    fermented: bool = False
    omega3_tag: bool = False
    body_mass_kg: float = Field(default=70, gt=0, le=400)
    plant_diversity: int = Field(default=0, ge=0)
    added_sugar: Optional[float] = Field(
        None, ge=0, description="Grams of added sugar if known"
    )


class MealItemIn(BaseModel):
    # Presence and grams > 0 are checked by the service so the API answers 400
    food_id: Optional[str] = None
    grams: Optional[float] = None
    custom_name: Optional[str] = None


class MealItem(BaseModel):
    food_id: str
    custom_name: Optional[str] = None
    grams: float


class MealCreate(BaseModel):
    items: List[MealItemIn] = Field(default_factory=list)
    ts: Optional[datetime] = None
    notes: Optional[str] = None
    context: MealContext = Field(default_factory=MealContext)
    presence: Optional[int] = Field(None, ge=1, le=5)
    energy: Optional[int] = Field(None, ge=1, le=5)


class MealUpdate(BaseModel):
    items: Optional[List[MealItemIn]] = None
    ts: Optional[datetime] = None
    notes: Optional[str] = None
    context: Optional[Dict[str, Any]] = Field(
        None, description="Partial context; merged into the stored context"
    )
    presence: Optional[int] = Field(None, ge=1, le=5)
    energy: Optional[int] = Field(None, ge=1, le=5)


class MealResponse(BaseModel):
    meal_id: UUID
    user_id: UUID
    ts: datetime
    items: List[MealItem]
    notes: Optional[str] = None
    context: Dict[str, Any] = Field(default_factory=dict)
    presence: Optional[int] = None
    energy: Optional[int] = None
    computed: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MealAnalysis(BaseModel):
    totals: Dict[str, float]
    badges: Dict[str, Any]
    mindful_meal_score: float
    rationale: List[str]
    tip: str
    effects: Dict[str, Dict[str, Any]]
    effects_summary: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


class MealCreateResponse(BaseModel):
    meal: MealResponse
    analysis: MealAnalysis


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class MealListResponse(BaseModel):
    meals: List[MealResponse]
    pagination: Pagination


class MealStatsResponse(BaseModel):
    total_meals: int = 0
    average_score: float = 0
    average_calories: float = 0
    average_protein: float = 0
    average_fiber: float = 0
    protein_meals: int = 0
    veg_meals: int = 0
    high_nova_meals: int = 0
