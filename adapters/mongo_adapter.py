"""MongoDB adapter for the food catalog.
"""

from typing import Optional, Dict, List, Any
import logging
import re
from pymongo import MongoClient, ASCENDING, DESCENDING, TEXT
from pymongo.errors import OperationFailure

from app.config import settings

logger = logging.getLogger("lyfe.mongo")

FOODS = "food_items"

_client = None
_db = None


# ------------------ Connection ------------------
def _get_db():
    """Lazy init DB connection."""
    global _client, _db
    if _db is not None:
        return _db
    _client = MongoClient(settings.mongo_uri, serverSelectionTimeoutMS=5000)
    _db = _client[settings.mongo_db_name]
    return _db


def connect(uri: str, db_name: str = "lyfe"):
    global _client, _db
    try:
        _client = MongoClient(uri, serverSelectionTimeoutMS=5000)
        _db = _client[db_name]
        _client.admin.command("ping")
        logger.info("Connected to MongoDB %s (database: %s)", uri, db_name)
        ensure_indexes()
    except Exception as exc:
        _client = None
        _db = None
        logger.warning("Could not initialize MongoDB client: %s", exc)


def close():
    """Close MongoDB connection."""
    global _client, _db
    try:
        if _client is not None:
            _client.close()
            logger.info("MongoDB client closed")
    except Exception:
        logger.exception("Error closing MongoDB client")
    finally:
        _client = None
        _db = None


def is_connected() -> bool:
    if _client is None:
        return False
    try:
        _client.admin.command("ping")
        return True
    except Exception as exc:
        logger.warning(f"MongoDB ping failed: {exc}")
        return False


def ensure_indexes():
    """Create the text and lookup indexes the food search relies on."""
    col = _get_db()[FOODS]
    col.create_index([("name", TEXT), ("aliases", TEXT)], name="food_text")
    col.create_index([("name_fold", ASCENDING)], name="food_name_fold")
    col.create_index([("source", ASCENDING)], name="food_source")
    logger.debug("Food catalog indexes ensured")


# ------------------ Food lookups ------------------
def get_food(food_id: str) -> Optional[Dict[str, Any]]:
    """Fetch a single food item by ID.

    Args:
        food_id: catalog id string

    Returns:
        Food document or None if not found
    """
    if _db is not None:
        try:
            food = _db[FOODS].find_one({"_id": food_id})
            if food:
                logger.debug(f"Food found: {food_id}")
            else:
                logger.debug(f"Food not found: {food_id}")
            return food
        except Exception:
            logger.exception(f"Error fetching food {food_id}")
            return None

    logger.warning(f"MongoDB not available, returning None for {food_id}")
    return None


def get_foods_by_ids(food_ids: List[str]) -> List[Dict[str, Any]]:
    """Fetch multiple food items by IDs."""
    if _db is not None:
        try:
            foods = list(_db[FOODS].find({"_id": {"$in": list(food_ids)}}))
            logger.info(f"Fetched {len(foods)} foods by IDs")
            return foods
        except Exception:
            logger.exception("Error fetching foods by IDs")
            return []

    logger.warning("MongoDB not available, returning no foods")
    return []


def text_search(query: str, limit: int = 20) -> List[Dict[str, Any]]:
    """Full-text search on name and aliases, best matches first."""
    if _db is not None:
        try:
            cursor = (
                _db[FOODS]
                .find({"$text": {"$search": query}}, {"score": {"$meta": "textScore"}})
                .sort([("score", {"$meta": "textScore"})])
                .limit(limit)
            )
            return list(cursor)
        except OperationFailure as exc:
            # Missing text index; callers fall back to regex search
            logger.warning(f"Text search unavailable: {exc}")
            return []
        except Exception:
            logger.exception("Error running text search")
            return []
    return []


def fuzzy_search(folded_query: str, limit: int = 20) -> List[Dict[str, Any]]:
    """Case-insensitive substring match on the folded name and aliases."""
    if _db is not None:
        try:
            pattern = re.escape(folded_query)
            cursor = (
                _db[FOODS]
                .find(
                    {
                        "$or": [
                            {"name_fold": {"$regex": pattern, "$options": "i"}},
                            {"aliases": {"$regex": pattern, "$options": "i"}},
                        ]
                    }
                )
                .limit(limit)
            )
            return list(cursor)
        except Exception:
            logger.exception("Error running fuzzy search")
            return []
    return []


def count_by_source() -> List[Dict[str, Any]]:
    """[{"source": str, "count": int}] sorted by count descending."""
    if _db is not None:
        try:
            rows = _db[FOODS].aggregate(
                [
                    {"$group": {"_id": "$source", "count": {"$sum": 1}}},
                    {"$sort": {"count": -1}},
                ]
            )
            return [{"source": r["_id"], "count": r["count"]} for r in rows]
        except Exception:
            logger.exception("Error aggregating food categories")
            return []
    return []


def find_foods(
    query: Dict[str, Any],
    exclude_ids: Optional[List[str]] = None,
    sort_by: Optional[str] = None,
    limit: int = 20,
) -> List[Dict[str, Any]]:
    """Generic filtered find used by popular and suggestion lookups."""
    if _db is not None:
        try:
            filter_query = dict(query)
            if exclude_ids:
                filter_query["_id"] = {"$nin": list(exclude_ids)}
            cursor = _db[FOODS].find(filter_query)
            if sort_by:
                cursor = cursor.sort(sort_by, DESCENDING)
            return list(cursor.limit(limit))
        except Exception:
            logger.exception("Error finding foods")
            return []
    return []


def replace_all_foods(docs: List[Dict[str, Any]]) -> int:
    """Delete the catalog and insert docs. Errors propagate to the caller."""
    col = _get_db()[FOODS]
    deleted = col.delete_many({}).deleted_count
    inserted = 0
    if docs:
        inserted = len(col.insert_many(docs).inserted_ids)
    logger.info(f"Food catalog replaced: {deleted} deleted, {inserted} inserted")
    ensure_indexes()
    return inserted
