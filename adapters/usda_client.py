"""USDA FoodData Central client used by the food seed pipeline.
"""

from typing import Any, Dict, List, Optional
import logging
import httpx

from app.config import settings
from app.exceptions import ExternalServiceError

logger = logging.getLogger("lyfe.usda")

# FDC nutrient numbers -> catalog nutrient key, with a unit multiplier
NUTRIENT_NUMBERS = {
    "208": ("kcal", 1),
    "203": ("protein", 1),
    "204": ("fat", 1),
    "205": ("carbs", 1),
    "291": ("fiber", 1),
    "269": ("sugar", 1),
    "539": ("added_sugar", 1),
    "401": ("vitamin_c", 1),
    "309": ("zinc", 1),
    "317": ("selenium", 1),
    "303": ("iron", 1),
    "304": ("magnesium", 1),
    "501": ("tryptophan", 1000),  # g -> mg
}
OMEGA3_NUMBERS = {"851", "629", "621"}  # ALA, EPA, DHA (g)


class USDAClient:
    """Thin wrapper around the FDC /foods/search endpoint"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key or settings.usda_api_key
        self.base_url = (base_url or settings.usda_base_url).rstrip("/")
        self.timeout = timeout or settings.http_timeout_sec
        self.transport = transport

    def search(self, query: str, page_size: int = 25) -> List[Dict[str, Any]]:
        """Search FDC and return raw food records."""
        if not self.api_key:
            raise ExternalServiceError("USDA API key is not configured")

        params = {
            "api_key": self.api_key,
            "query": query,
            "pageSize": page_size,
            "dataType": "Foundation,SR Legacy",
        }
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            try:
                resp = client.get(f"{self.base_url}/foods/search", params=params)
                resp.raise_for_status()
                payload = resp.json()
            except httpx.HTTPError as exc:
                logger.warning(f"USDA search failed for '{query}': {exc}")
                raise ExternalServiceError(
                    f"USDA search failed: {exc}", details={"query": query}
                ) from exc
            except ValueError as exc:
                logger.warning(f"USDA sent a non-JSON body for '{query}'")
                raise ExternalServiceError(
                    "USDA returned an invalid response", details={"query": query}
                ) from exc
        foods = payload.get("foods") or []
        logger.info(f"USDA returned {len(foods)} foods for '{query}'")
        return foods

    @staticmethod
    def to_food_record(food: Dict[str, Any]) -> Dict[str, Any]:
        """Map an FDC search hit to a raw catalog record (per 100 g)."""
        nutrients: Dict[str, float] = {}
        omega3 = 0.0
        for n in food.get("foodNutrients") or []:
            number = str(n.get("nutrientNumber") or "")
            value = n.get("value")
            if value is None:
                continue
            if number in NUTRIENT_NUMBERS:
                key, factor = NUTRIENT_NUMBERS[number]
                nutrients[key] = round(float(value) * factor, 3)
            elif number in OMEGA3_NUMBERS:
                omega3 += float(value)
        if omega3:
            nutrients["omega3"] = round(omega3, 3)

        category = (food.get("foodCategory") or "").lower()
        tags = []
        if "vegetable" in category:
            tags.append("vegetable")
        if "fruit" in category:
            tags.append("fruit")
        if "cereal" in category or "grain" in category:
            tags.append("grain")
        if any(word in category for word in ("poultry", "beef", "pork", "fish", "legume")):
            tags.append("protein")

        return {
            "name": (food.get("description") or "").strip(),
            "source": "usda",
            "source_id": str(food.get("fdcId") or ""),
            "tags": tags,
            "nutrients": nutrients,
            "measured": True,
        }
