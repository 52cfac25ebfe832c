"""Open Food Facts client used by the food seed pipeline.
"""

from typing import Any, Dict, List, Optional
import logging
import httpx

from app.config import settings
from app.exceptions import ExternalServiceError

logger = logging.getLogger("lyfe.off")

# OFF nutriment field -> (catalog key, multiplier to catalog unit)
NUTRIMENTS = {
    "energy-kcal_100g": ("kcal", 1),
    "proteins_100g": ("protein", 1),
    "fat_100g": ("fat", 1),
    "carbohydrates_100g": ("carbs", 1),
    "fiber_100g": ("fiber", 1),
    "sugars_100g": ("sugar", 1),
    "added-sugars_100g": ("added_sugar", 1),
    "vitamin-c_100g": ("vitamin_c", 1000),  # g -> mg
    "zinc_100g": ("zinc", 1000),
    "iron_100g": ("iron", 1000),
    "magnesium_100g": ("magnesium", 1000),
    "selenium_100g": ("selenium", 1_000_000),  # g -> ug
    "omega-3-fat_100g": ("omega3", 1),
}


class OpenFoodFactsClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = (base_url or settings.off_base_url).rstrip("/")
        self.timeout = timeout or settings.http_timeout_sec
        self.transport = transport

    def search(self, query: str, page_size: int = 25) -> List[Dict[str, Any]]:
        """Search products by free text."""
        params = {
            "search_terms": query,
            "search_simple": 1,
            "action": "process",
            "json": 1,
            "page_size": page_size,
        }
        headers = {"User-Agent": f"{settings.app_name}/{settings.app_version}"}
        with httpx.Client(
            timeout=self.timeout, transport=self.transport, follow_redirects=True
        ) as client:
            try:
                resp = client.get(
                    f"{self.base_url}/cgi/search.pl", params=params, headers=headers
                )
                resp.raise_for_status()
                payload = resp.json()
            except httpx.HTTPError as exc:
                logger.warning(f"Open Food Facts search failed for '{query}': {exc}")
                raise ExternalServiceError(
                    f"Open Food Facts search failed: {exc}", details={"query": query}
                ) from exc
            except ValueError as exc:
                logger.warning(f"Open Food Facts sent a non-JSON body for '{query}'")
                raise ExternalServiceError(
                    "Open Food Facts returned an invalid response", details={"query": query}
                ) from exc
        products = payload.get("products") or []
        logger.info(f"Open Food Facts returned {len(products)} products for '{query}'")
        return products

    @staticmethod
    def to_food_record(product: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Map an OFF product to a raw catalog record; None when unnamed."""
        name = (product.get("product_name") or "").strip()
        if not name:
            return None

        raw = product.get("nutriments") or {}
        nutrients: Dict[str, float] = {}
        for field, (key, factor) in NUTRIMENTS.items():
            value = raw.get(field)
            if isinstance(value, (int, float)):
                nutrients[key] = round(float(value) * factor, 3)

        categories = " ".join(product.get("categories_tags") or []).lower()
        tags = []
        if "vegetable" in categories:
            tags.append("vegetable")
        if "fruit" in categories:
            tags.append("fruit")
        if "cereal" in categories or "grain" in categories:
            tags.append("grain")

        nova = product.get("nova_group")
        record = {
            "name": name,
            "source": "off",
            "source_id": str(product.get("code") or ""),
            "tags": tags,
            "nutrients": nutrients,
            "measured": True,
        }
        if isinstance(nova, int) and 1 <= nova <= 4:
            record["nova_class"] = nova
        return record
