"""
Standardized API response helpers.
Provides consistent response formatting across all endpoints.
"""

from typing import Optional, Any, List
from datetime import datetime
import math


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def success_response(data: Any = None, message: Optional[str] = None) -> dict:
    """Create a standardized success response"""
    return {
        "success": True,
        "message": message,
        "data": data,
        "timestamp": datetime.utcnow(),
    }


def error_response(code: str, message: str, details: Optional[Any] = None) -> dict:
    """Create a standardized error response"""
    error = {"code": code, "message": message}
    if details:
        error["details"] = details
    return {"success": False, "error": error, "timestamp": datetime.utcnow()}


def paginated_response(
    items: List[Any], total: int, page: int, limit: int, key: str = "items"
) -> dict:
    """Create a standardized paginated response under ``key``"""
    return {
        key: items,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": total_pages(total, limit),
        },
    }
