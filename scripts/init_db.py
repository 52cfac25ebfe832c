#!/usr/bin/env python3
"""
Standalone database initialization script.

Creates the SQL tables and the MongoDB food catalog indexes. Safe to run
repeatedly.
"""

import sys
import logging
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import settings  # noqa: E402
from adapters import mongo_adapter  # noqa: E402
from domain.models import init_database, check_connection  # noqa: E402

logging.basicConfig(level=logging.INFO, format=settings.log_format)
logger = logging.getLogger("lyfe.init_db")


def main() -> int:
    logger.info(f"Initializing SQL database at {settings.database_url}")
    try:
        init_database()
    except Exception:
        logger.exception("SQL schema creation failed")
        return 1
    if not check_connection():
        return 1

    mongo_adapter.connect(settings.mongo_uri, settings.mongo_db_name)
    if mongo_adapter.is_connected():
        logger.info("MongoDB indexes ensured")
        mongo_adapter.close()
    else:
        logger.warning("MongoDB not reachable; food catalog indexes not created")
    return 0


if __name__ == "__main__":
    sys.exit(main())
