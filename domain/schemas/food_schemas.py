from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any


class PortionUnit(BaseModel):
    unit: str
    grams: float


class Provenance(BaseModel):
    source: Optional[str] = None
    measured: bool = False
    confidence: float = 0.5
    gi_origin: str = "unknown"
    nova_origin: str = "unknown"
    fodmap_origin: str = "unknown"


class FoodItemResponse(BaseModel):
    """Food catalog item; nutrients are per 100 g"""

    id: str
    name: str
    aliases: List[str] = Field(default_factory=list)
    source: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    portion_units: List[PortionUnit] = Field(default_factory=list)
    nutrients: Dict[str, float] = Field(default_factory=dict)
    gi: Optional[float] = None
    nova_class: Optional[int] = None
    fodmap: Optional[str] = None
    provenance: Optional[Provenance] = None


class FoodSearchResponse(BaseModel):
    foods: List[FoodItemResponse]
    search_type: str
    query: str


class FoodCategory(BaseModel):
    source: Optional[str]
    count: int


class FoodSuggestionsResponse(BaseModel):
    suggestions: List[FoodItemResponse]
    needs: List[str] = Field(default_factory=list)
