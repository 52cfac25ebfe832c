from typing import List, Dict, Any, Optional
import logging
import re
import unicodedata

from app.exceptions import NotFoundError, ServiceValidationError
from repositories import FoodRepository
from services.meal_scoring import VEG_TAGS

logger = logging.getLogger("lyfe.food")

DEFAULT_ORIGIN = "unknown"


def fold_name(name: str) -> str:
    """Lower-case, strip accents and collapse whitespace.

    >>> fold_name("  Paneer   Tikká ")
    'paneer tikka'
    """
    decomposed = unicodedata.normalize("NFKD", name or "")
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return re.sub(r"\s+", " ", stripped).strip().lower()


def default_provenance(food: Dict[str, Any]) -> Dict[str, Any]:
    """Stored provenance with every missing field filled in"""
    stored = food.get("provenance") or {}
    return {
        "source": stored.get("source") or food.get("source"),
        "measured": bool(stored.get("measured", False)),
        "confidence": stored.get("confidence") or 0.5,
        "gi_origin": stored.get("gi_origin") or DEFAULT_ORIGIN,
        "nova_origin": stored.get("nova_origin") or DEFAULT_ORIGIN,
        "fodmap_origin": stored.get("fodmap_origin") or DEFAULT_ORIGIN,
    }


def to_food_response(food: Dict[str, Any], include_provenance: bool = True) -> Dict[str, Any]:
    """Catalog document -> FoodItemResponse-shaped dict"""
    return {
        "id": str(food.get("_id")),
        "name": food.get("name"),
        "aliases": food.get("aliases") or [],
        "source": food.get("source"),
        "tags": food.get("tags") or [],
        "portion_units": food.get("portion_units") or [],
        "nutrients": food.get("nutrients") or {},
        "gi": food.get("gi"),
        "nova_class": food.get("nova_class"),
        "fodmap": food.get("fodmap"),
        "provenance": default_provenance(food) if include_provenance else None,
    }


class FoodService:
    @staticmethod
    def search(
        query: Optional[str], limit: int = 20, include_provenance: bool = False
    ) -> Dict[str, Any]:
        """Text search with a regex fallback.

        Returns:
            {"foods": [...], "search_type": "text" | "fuzzy", "query": folded query}

        Raises:
            ServiceValidationError: empty query
        """
        if not query or not query.strip():
            raise ServiceValidationError("Search query is required")

        folded = fold_name(query)
        repo = FoodRepository()

        foods = repo.text_search(folded, limit=limit)
        search_type = "text"
        if not foods:
            foods = repo.fuzzy_search(folded, limit=limit)
            search_type = "fuzzy"

        logger.debug(f"Food search '{folded}' -> {len(foods)} ({search_type})")
        return {
            "foods": [to_food_response(f, include_provenance) for f in foods],
            "search_type": search_type,
            "query": folded,
        }

    @staticmethod
    def get_food(food_id: str) -> Dict[str, Any]:
        food = FoodRepository().get_by_id(food_id)
        if not food:
            raise NotFoundError(f"Food item not found: {food_id}")
        return to_food_response(food)

    @staticmethod
    def get_categories() -> List[Dict[str, Any]]:
        return FoodRepository().categories()

    @staticmethod
    def get_popular(limit: int = 10) -> List[Dict[str, Any]]:
        return [to_food_response(f) for f in FoodRepository().popular(limit=limit)]

    @staticmethod
    def compute_needs(foods: List[Dict[str, Any]]) -> List[str]:
        """What the current selection lacks: "protein" and/or "veg"."""
        protein = sum(float((f.get("nutrients") or {}).get("protein") or 0) for f in foods)
        fiber = sum(float((f.get("nutrients") or {}).get("fiber") or 0) for f in foods)
        has_veg = any(VEG_TAGS.intersection(f.get("tags") or []) for f in foods)

        needs = []
        if protein < 20:
            needs.append("protein")
        if not has_veg and fiber < 5:
            needs.append("veg")
        return needs

    @staticmethod
    def get_suggestions(current_food_ids: List[str], limit: int = 5) -> Dict[str, Any]:
        """Complementary foods for the foods already on the plate"""
        repo = FoodRepository()
        current_ids = [fid.strip() for fid in current_food_ids if fid and fid.strip()]

        needs: List[str] = []
        suggestions: List[Dict[str, Any]] = []
        if current_ids:
            current = list(repo.get_many(current_ids).values())
            needs = FoodService.compute_needs(current)

            conditions: List[Dict[str, Any]] = []
            if "protein" in needs:
                conditions += [
                    {"nutrients.protein": {"$gte": 15}},
                    {"tags": {"$in": ["protein"]}},
                ]
            if "veg" in needs:
                conditions += [
                    {"tags": {"$in": ["veg", "leafy"]}},
                    {"nutrients.fiber": {"$gte": 3}},
                ]
            if conditions:
                suggestions = repo.find_matching(conditions, exclude_ids=current_ids, limit=limit)

        if not suggestions:
            suggestions = repo.find_matching(
                [{"tags": {"$in": ["veg", "protein"]}}, {"nutrients.fiber": {"$gte": 3}}],
                exclude_ids=current_ids,
                limit=limit,
            )

        return {
            "suggestions": [to_food_response(f) for f in suggestions],
            "needs": needs,
        }
