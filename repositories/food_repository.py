"""
Food Repository - Data access layer for the food catalog (MongoDB integration)
"""

from typing import List, Optional, Dict, Any
from adapters import mongo_adapter


class FoodRepository:
    """
    Repository for food catalog access from MongoDB.
    Wraps mongo_adapter functions for consistency with repository pattern.
    """

    def get_by_id(self, food_id: str) -> Optional[Dict[str, Any]]:
        return mongo_adapter.get_food(str(food_id))

    def get_many(self, food_ids: List[str]) -> Dict[str, Dict[str, Any]]:
        """Foods keyed by their id string; unknown ids are simply absent"""
        foods = mongo_adapter.get_foods_by_ids([str(fid) for fid in food_ids])
        return {str(food["_id"]): food for food in foods}

    def text_search(self, query: str, limit: int = 20) -> List[Dict[str, Any]]:
        return mongo_adapter.text_search(query, limit=limit)

    def fuzzy_search(self, folded_query: str, limit: int = 20) -> List[Dict[str, Any]]:
        return mongo_adapter.fuzzy_search(folded_query, limit=limit)

    def categories(self) -> List[Dict[str, Any]]:
        return mongo_adapter.count_by_source()

    def popular(self, limit: int = 20) -> List[Dict[str, Any]]:
        """High-protein, high-fibre or veg/protein-tagged foods, protein first"""
        query = {
            "$or": [
                {"nutrients.protein": {"$gte": 15}},
                {"nutrients.fiber": {"$gte": 5}},
                {"tags": {"$in": ["veg", "protein"]}},
            ]
        }
        return mongo_adapter.find_foods(query, sort_by="nutrients.protein", limit=limit)

    def find_matching(
        self,
        conditions: List[Dict[str, Any]],
        exclude_ids: Optional[List[str]] = None,
        limit: int = 10,
    ) -> List[Dict[str, Any]]:
        """Foods matching any of ``conditions``, excluding ``exclude_ids``"""
        query = {"$or": conditions} if conditions else {}
        return mongo_adapter.find_foods(
            query, exclude_ids=exclude_ids, sort_by="nutrients.protein", limit=limit
        )

    def replace_all(self, docs: List[Dict[str, Any]]) -> int:
        return mongo_adapter.replace_all_foods(docs)
