#!/usr/bin/env python3
"""
Build the MongoDB food catalog from IFCT, USDA and Open Food Facts.

Stages: ingest -> normalize/merge -> derive -> QA -> load -> report.
The process exits with status 1 when QA finds any error.

Usage:
    python scripts/seed_food_items.py                       # full run
    python scripts/seed_food_items.py --dry-run             # QA and reports only
    python scripts/seed_food_items.py --query dal --query rice
"""

import sys
import logging
import argparse
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import settings  # noqa: E402
from adapters import mongo_adapter  # noqa: E402
from adapters.usda_client import USDAClient  # noqa: E402
from adapters.openfoodfacts_client import OpenFoodFactsClient  # noqa: E402
from services import seed_pipeline  # noqa: E402

logging.basicConfig(level=logging.INFO, format=settings.log_format)
logger = logging.getLogger("lyfe.seed.cli")

PROJECT_ROOT = Path(__file__).parent.parent


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Seed the Lyfe food catalog")
    parser.add_argument(
        "--csv",
        type=Path,
        default=PROJECT_ROOT / "data" / "ifct.csv",
        help="IFCT CSV with nutrients per 100 g",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=PROJECT_ROOT / "reports",
        help="Where seed_qa_report.md and seed_qa_failures.csv are written",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Skip writing to MongoDB"
    )
    parser.add_argument(
        "--query",
        action="append",
        dest="queries",
        help="Remote search term (repeatable); defaults to a built-in list",
    )
    return parser.parse_args(argv)


def collect_records(args):
    records = []
    if args.csv.exists():
        records += seed_pipeline.ingest_ifct(args.csv)
    else:
        logger.warning(f"IFCT CSV not found at {args.csv}; skipping")

    queries = args.queries or list(seed_pipeline.DEFAULT_QUERIES)
    if settings.usda_api_key:
        records += seed_pipeline.ingest_remote(USDAClient(), queries, "USDA")
    else:
        logger.info("USDA_API_KEY not set; skipping USDA ingest")
    if not settings.off_disable:
        records += seed_pipeline.ingest_remote(OpenFoodFactsClient(), queries, "OFF")
    else:
        logger.info("OFF_DISABLE set; skipping Open Food Facts ingest")
    return records


def main(argv=None) -> int:
    args = parse_args(argv)

    records = collect_records(args)
    if not records:
        logger.error("No food records ingested")
        return 1

    docs, report = seed_pipeline.build_catalog(records)
    md_path, csv_path = seed_pipeline.write_reports(report, args.output_dir)
    logger.info(f"QA report: {md_path}; failures: {csv_path}")

    if args.dry_run:
        logger.info(f"Dry run: {len(docs)} foods not loaded")
    else:
        mongo_adapter.connect(settings.mongo_uri, settings.mongo_db_name)
        if not mongo_adapter.is_connected():
            logger.error("MongoDB is not reachable; catalog not loaded")
            return 1
        try:
            inserted = mongo_adapter.replace_all_foods(docs)
            logger.info(f"Loaded {inserted} foods into MongoDB")
        finally:
            mongo_adapter.close()

    if not report.ok:
        logger.error(f"Seed QA failed with {len(report.errors)} error(s)")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
