"""
Lyfe FastAPI Application
Entry point: logging, database start-up, middleware and route registration
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio

from api.routes import (
    auth,
    meals,
    food,
    mindfulness,
    habits,
    tasks,
    goals,
    time_blocks,
    finance,
    journal,
    ai_chat,
    pantry,
    documents,
    relationships,
    communication,
    health,
)
from domain.models import init_database
from adapters import mongo_adapter
from app.config import settings
from api.middleware import (
    RequestLoggingMiddleware,
    validation_exception_handler,
    http_exception_handler,
    service_exception_handler,
    general_exception_handler,
)
from app.exceptions import ServiceError

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)
_logger = logging.getLogger("lyfe.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Create SQL tables (retrying while the database comes up) and connect to
    the MongoDB food catalog. MongoDB is optional: food and meal routes
    answer 503 until it is reachable.
    """
    _logger.info(f"Starting Lyfe in {settings.environment.value} mode")

    for attempt in range(1, settings.db_init_attempts + 1):
        try:
            # create_all is blocking
            await anyio.to_thread.run_sync(init_database)
            _logger.info("Database initialization succeeded")
            break
        except Exception as exc:
            _logger.warning(
                "Database init attempt %d/%d failed: %s",
                attempt,
                settings.db_init_attempts,
                exc,
            )
            if attempt < settings.db_init_attempts:
                await anyio.sleep(settings.db_init_delay_sec)
            else:
                _logger.error("Database initialization failed after %d attempts", attempt)
                raise

    await anyio.to_thread.run_sync(
        mongo_adapter.connect, settings.mongo_uri, settings.mongo_db_name
    )

    try:
        yield
    finally:
        _logger.info("Shutting down Lyfe")
        mongo_adapter.close()


app = FastAPI(
    title=settings.api_title,
    version=settings.app_version,
    description=settings.api_description,
    lifespan=lifespan,
    debug=settings.debug,
    openapi_url=(
        f"{settings.api_prefix}/openapi.json" if not settings.is_production() else None
    ),
    docs_url=f"{settings.api_prefix}/docs" if not settings.is_production() else None,
    redoc_url=f"{settings.api_prefix}/redoc" if not settings.is_production() else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)
app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(ServiceError, service_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

for module in (
    health,
    auth,
    meals,
    food,
    mindfulness,
    habits,
    tasks,
    goals,
    time_blocks,
    finance,
    journal,
    ai_chat,
    pantry,
    documents,
    relationships,
    communication,
):
    app.include_router(module.router, prefix=settings.api_prefix)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
