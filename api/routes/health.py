"""Health check routes"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from datetime import datetime
import logging
import time

from adapters import mongo_adapter
from app.config import settings
from domain.models import check_connection

router = APIRouter(prefix="/health", tags=["Health"])
logger = logging.getLogger("lyfe.api.health")

_started = time.monotonic()

# Placeholder secret shipped in config; treated as unset
_DEFAULT_JWT_SECRET = "change-me"


def _basic_status() -> dict:
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow(),
        "uptime": round(time.monotonic() - _started, 3),
        "environment": settings.environment.value,
        "port": settings.port,
    }


@router.get("")
def health_check():
    """Liveness probe; never touches the databases"""
    return _basic_status()


@router.get("/detailed")
def detailed_health_check():
    """
    Check SQL and MongoDB connectivity and required secrets.

    Answers 200 when everything is in place, otherwise 503 with the same
    body so probes can see which check failed.
    """
    checks = {
        "database": {"status": "healthy" if check_connection() else "unhealthy"},
        "mongodb": {"status": "healthy" if mongo_adapter.is_connected() else "unhealthy"},
        "environment": {
            "JWT_SECRET": bool(settings.jwt_secret) and settings.jwt_secret != _DEFAULT_JWT_SECRET,
            "OPENAI_API_KEY": bool(settings.openai_api_key),
        },
    }
    healthy = (
        checks["database"]["status"] == "healthy"
        and checks["mongodb"]["status"] == "healthy"
        and all(checks["environment"].values())
    )

    body = _basic_status()
    body["status"] = "healthy" if healthy else "unhealthy"
    body["checks"] = checks
    if not healthy:
        logger.warning(f"Detailed health check failed: {checks}")
    return JSONResponse(status_code=200 if healthy else 503, content=jsonable_encoder(body))
