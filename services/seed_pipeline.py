"""
Food catalog seed pipeline: ingest -> normalize/merge -> derive -> QA -> load -> report.

Sources are the bundled IFCT CSV, USDA FoodData Central (when an API key is
configured) and Open Food Facts (unless disabled). Every stage is a plain
function over lists of dicts so it can be exercised without MongoDB; the
``scripts/seed_food_items.py`` CLI wires them together.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
import logging
import re

import pandas as pd

from app.config import settings
from app.exceptions import ExternalServiceError
from domain.enums import FODMAP_ORDER, FodmapLevel, FoodSource
from services.food_service import fold_name
from services.meal_scoring import NUTRIENT_KEYS

logger = logging.getLogger("lyfe.seed")

DEFAULT_PORTION_GRAMS = 100

# name keywords -> traditional serving units
TRADITIONAL_UNITS: Sequence[Tuple[Tuple[str, ...], Tuple[Tuple[str, float], ...]]] = (
    (("roti", "chapati", "phulka"), (("roti", 45), ("piece", 45))),
    (("idli",), (("idli", 120), ("piece", 120))),
    (("dal", "curry", "sabzi"), (("katori", 80), ("cup", 200))),
    (("rice", "pulao", "biryani"), (("katori", 80), ("cup", 200))),
    (("ghee", "oil", "butter"), (("spoon", 15), ("teaspoon", 5))),
    (("milk", "curd", "lassi"), (("cup", 200), ("glass", 250))),
    (("nuts", "dry fruits", "seeds"), (("handful", 30), ("spoon", 15))),
)

FODMAP_KEYWORDS = (
    (("onion", "garlic"), FodmapLevel.HIGH),
    (("apple", "mango"), FodmapLevel.MEDIUM),
    (("banana", "orange"), FodmapLevel.LOW),
)

SOURCE_CONFIDENCE = {
    FoodSource.IFCT.value: 0.9,
    FoodSource.USDA.value: 0.85,
    FoodSource.OFF.value: 0.7,
}

DEFAULT_QUERIES = ("lentils", "spinach", "chickpeas", "yogurt", "oats", "paneer")


# ------------------ Ingest ------------------
def infer_portion_units(name: str, default_grams: float = DEFAULT_PORTION_GRAMS) -> List[Dict[str, Any]]:
    """Gram portion plus traditional units recognised from the food name"""
    folded = fold_name(name)
    units = [{"unit": "grams", "grams": float(default_grams)}]
    seen = {"grams"}
    for keywords, unit_defs in TRADITIONAL_UNITS:
        if any(keyword in folded for keyword in keywords):
            for unit, grams in unit_defs:
                if unit not in seen:
                    units.append({"unit": unit, "grams": float(grams)})
                    seen.add(unit)
    return units


def _split_tags(value: Any) -> List[str]:
    if not isinstance(value, str) or not value.strip():
        return []
    return [tag.strip().lower() for tag in value.split("|") if tag.strip()]


def ingest_ifct(csv_path: Path) -> List[Dict[str, Any]]:
    """Read the IFCT CSV (one row per food, nutrients per 100 g)"""
    df = pd.read_csv(csv_path)
    records = []
    for row in df.to_dict(orient="records"):
        name = str(row.get("name") or "").strip()
        if not name or name.lower() == "nan":
            continue
        nutrients = {}
        for key in NUTRIENT_KEYS:
            value = row.get(key)
            if value is not None and not pd.isna(value):
                nutrients[key] = float(value)
        portion = row.get("portion_grams_default")
        if portion is None or pd.isna(portion):
            portion = DEFAULT_PORTION_GRAMS
        gi = row.get("gi")
        record = {
            "name": name,
            "source": FoodSource.IFCT.value,
            "tags": _split_tags(row.get("tags")),
            "portion_grams_default": float(portion),
            "nutrients": nutrients,
            "measured": True,
        }
        if gi is not None and not pd.isna(gi):
            record["gi"] = float(gi)
        records.append(record)
    logger.info(f"Ingested {len(records)} IFCT rows from {csv_path}")
    return records


def ingest_remote(client, queries: Iterable[str], label: str) -> List[Dict[str, Any]]:
    """Search a remote source for each query; failures skip that query"""
    records = []
    for query in queries:
        try:
            hits = client.search(query)
        except ExternalServiceError as exc:
            logger.warning(f"{label} ingest skipped '{query}': {exc}")
            continue
        for hit in hits:
            record = client.to_food_record(hit)
            if record and record.get("name"):
                records.append(record)
    logger.info(f"Ingested {len(records)} {label} records")
    return records


# ------------------ Normalize / merge ------------------
def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text).strip("-")


def _new_doc(record: Dict[str, Any], name_fold: str) -> Dict[str, Any]:
    source = record.get("source") or FoodSource.CUSTOM.value
    portion = record.get("portion_grams_default") or DEFAULT_PORTION_GRAMS
    return {
        "_id": f"{source}-{_slug(name_fold)}",
        "name": record["name"].strip(),
        "name_fold": name_fold,
        "aliases": [],
        "source": source,
        "tags": list(dict.fromkeys(record.get("tags") or [])),
        "portion_grams_default": float(portion),
        "portion_units": infer_portion_units(record["name"], portion),
        "nutrients": {k: v for k, v in (record.get("nutrients") or {}).items() if v is not None},
        "gi": record.get("gi"),
        "nova_class": record.get("nova_class"),
        "fodmap": record.get("fodmap"),
        "provenance": {
            "source": source,
            "measured": bool(record.get("measured", False)),
            "confidence": SOURCE_CONFIDENCE.get(source, 0.5),
            "gi_origin": "measured" if record.get("gi") is not None else "unknown",
            "nova_origin": "measured" if record.get("nova_class") is not None else "unknown",
            "fodmap_origin": "unknown",
        },
    }


def merge_records(records: Iterable[Dict[str, Any]]) -> Tuple[List[Dict[str, Any]], List[str]]:
    """Collapse records sharing a folded name.

    The first record wins; later duplicates contribute their name as an
    alias, their tags, and any nutrients the first record lacks.

    Returns:
        (documents, duplicate warnings)
    """
    merged: Dict[str, Dict[str, Any]] = {}
    warnings: List[str] = []
    for record in records:
        name = (record.get("name") or "").strip()
        if not name:
            continue
        name_fold = fold_name(name)
        existing = merged.get(name_fold)
        if existing is None:
            merged[name_fold] = _new_doc(record, name_fold)
            continue

        warnings.append(
            f"Duplicate name_fold: {name_fold} from {existing['source']} and {record.get('source')}"
        )
        if name != existing["name"] and name not in existing["aliases"]:
            existing["aliases"].append(name)
        for tag in record.get("tags") or []:
            if tag not in existing["tags"]:
                existing["tags"].append(tag)
        for key, value in (record.get("nutrients") or {}).items():
            if value is not None and existing["nutrients"].get(key) in (None, 0, 0.0):
                existing["nutrients"][key] = value
        if existing.get("gi") is None and record.get("gi") is not None:
            existing["gi"] = record["gi"]
            existing["provenance"]["gi_origin"] = "measured"
        if existing.get("nova_class") is None and record.get("nova_class") is not None:
            existing["nova_class"] = record["nova_class"]
            existing["provenance"]["nova_origin"] = "measured"

    docs = list(merged.values())
    logger.info(f"Normalized {len(docs)} foods ({len(warnings)} duplicates merged)")
    return docs, warnings


# ------------------ Derive ------------------
def derive_gi(doc: Dict[str, Any]) -> Optional[float]:
    tags = set(doc.get("tags") or [])
    carbs = float((doc.get("nutrients") or {}).get("carbs") or 0)
    if "grain" in tags or "wholegrain" in tags:
        if carbs > 5:
            return 45 if "wholegrain" in tags else 65
        return None
    if "fruit" in tags:
        return 50
    if carbs > 5:
        return 55
    return None


def derive_nova(doc: Dict[str, Any]) -> int:
    tags = set(doc.get("tags") or [])
    if "ultra-processed" in tags:
        return 4
    if "processed" in tags:
        return 3
    if "cooked" in tags:
        return 2
    return 1


def derive_fodmap(doc: Dict[str, Any]) -> str:
    words = set(fold_name(doc.get("name") or "").split()) | set(doc.get("tags") or [])
    for keywords, level in FODMAP_KEYWORDS:
        if words.intersection(keywords):
            return level.value
    return FodmapLevel.UNKNOWN.value


def derive(docs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Fill GI, NOVA class and FODMAP where the sources left them empty"""
    for doc in docs:
        provenance = doc["provenance"]
        if doc.get("gi") is None:
            gi = derive_gi(doc)
            if gi is not None:
                doc["gi"] = gi
                provenance["gi_origin"] = "derived"
        if doc.get("nova_class") is None:
            doc["nova_class"] = derive_nova(doc)
            provenance["nova_origin"] = "derived"
        if not doc.get("fodmap"):
            doc["fodmap"] = derive_fodmap(doc)
            if doc["fodmap"] != FodmapLevel.UNKNOWN.value:
                provenance["fodmap_origin"] = "derived"
    return docs


# ------------------ QA ------------------
@dataclass
class QAReport:
    total_items: int = 0
    errors: List[Dict[str, Any]] = field(default_factory=list)
    warnings: List[Dict[str, Any]] = field(default_factory=list)
    metrics: Dict[str, int] = field(
        default_factory=lambda: {
            "atwater_violations": 0,
            "portion_violations": 0,
            "gi_violations": 0,
            "enum_violations": 0,
            "duplicates": 0,
        }
    )

    def error(self, food: str, check: str, message: str, value: Any = None, metric: Optional[str] = None):
        self.errors.append({"level": "error", "food": food, "check": check, "message": message, "value": value})
        if metric:
            self.metrics[metric] += 1

    def warn(self, food: str, check: str, message: str, value: Any = None):
        self.warnings.append({"level": "warning", "food": food, "check": check, "message": message, "value": value})

    @property
    def ok(self) -> bool:
        return not self.errors


def _portion_in_band(doc: Dict[str, Any], key: str) -> List[float]:
    """Gram values that the band for ``key`` applies to"""
    values = [
        float(u["grams"]) for u in doc.get("portion_units") or [] if u.get("unit") == key
    ]
    if key in fold_name(doc.get("name") or ""):
        values.append(float(doc.get("portion_grams_default") or DEFAULT_PORTION_GRAMS))
    return values


def run_qa(
    docs: List[Dict[str, Any]],
    atwater_tolerance: Optional[float] = None,
    portion_bands: Optional[Dict[str, Sequence[float]]] = None,
    duplicate_warnings: Sequence[str] = (),
) -> QAReport:
    tolerance = settings.seed_qa_atwater_tolerance if atwater_tolerance is None else atwater_tolerance
    bands = settings.seed_qa_portion_bands if portion_bands is None else portion_bands

    report = QAReport(total_items=len(docs))
    for message in duplicate_warnings:
        report.warn("", "duplicate", message)
        report.metrics["duplicates"] += 1

    for doc in docs:
        name = doc.get("name", "")
        n = doc.get("nutrients") or {}
        protein = float(n.get("protein") or 0)
        carbs = float(n.get("carbs") or 0)
        fat = float(n.get("fat") or 0)
        kcal = float(n.get("kcal") or 0)

        diff = abs(kcal - (4 * protein + 4 * carbs + 9 * fat))
        if diff > tolerance:
            report.error(
                name, "atwater",
                f"kcal differs from 4p+4c+9f by {diff:.1f} (> {tolerance})",
                round(diff, 1), metric="atwater_violations",
            )

        if float(n.get("vitamin_c") or 0) > 300:
            report.warn(name, "units", f"vitamin C unusually high: {n['vitamin_c']}mg", n["vitamin_c"])
        if float(n.get("zinc") or 0) > 30:
            report.warn(name, "units", f"zinc unusually high: {n['zinc']}mg", n["zinc"])

        for key, (low, high) in bands.items():
            for grams in _portion_in_band(doc, key):
                if grams < low or grams > high:
                    report.error(
                        name, "portion",
                        f"{key} portion {grams:g}g outside expected range {low:g}-{high:g}g",
                        grams, metric="portion_violations",
                    )

        gi = doc.get("gi")
        if gi is not None:
            if gi < 0 or gi > 110:
                report.error(name, "gi", f"GI {gi} outside valid range 0-110", gi, metric="gi_violations")
            if doc["provenance"].get("gi_origin") == "derived" and carbs < 5:
                report.warn(name, "gi", f"derived GI {gi} on a low-carb food ({carbs}g carbs)", carbs)

        fodmap = doc.get("fodmap")
        if fodmap not in FODMAP_ORDER:
            report.error(name, "enum", f"invalid FODMAP value: {fodmap}", fodmap, metric="enum_violations")
        nova = doc.get("nova_class")
        if not isinstance(nova, int) or not 1 <= nova <= 4:
            report.error(name, "enum", f"invalid NOVA class: {nova}", nova, metric="enum_violations")

    logger.info(f"QA completed: {len(report.errors)} errors, {len(report.warnings)} warnings")
    return report


# ------------------ Report ------------------
def render_markdown(report: QAReport, generated_at: Optional[datetime] = None) -> str:
    generated_at = generated_at or datetime.utcnow()
    lines = [
        "# Seed QA Report",
        "",
        f"Generated: {generated_at.isoformat()}Z",
        "",
        "## Summary",
        "",
        f"- **Total Items**: {report.total_items}",
        f"- **Errors**: {len(report.errors)}",
        f"- **Warnings**: {len(report.warnings)}",
        "",
        "## Metrics",
        "",
    ]
    lines += [f"- {key.replace('_', ' ').title()}: {value}" for key, value in report.metrics.items()]
    for title, rows in (("Errors", report.errors), ("Warnings", report.warnings)):
        if rows:
            lines += ["", f"## {title} (Top 20)", ""]
            lines += [
                f"{i}. {row['food'] + ': ' if row['food'] else ''}{row['message']}"
                for i, row in enumerate(rows[:20], start=1)
            ]
    return "\n".join(lines) + "\n"


def write_reports(report: QAReport, output_dir: Path) -> Tuple[Path, Path]:
    """Write seed_qa_report.md and seed_qa_failures.csv into ``output_dir``"""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    md_path = output_dir / "seed_qa_report.md"
    md_path.write_text(render_markdown(report), encoding="utf-8")

    csv_path = output_dir / "seed_qa_failures.csv"
    pd.DataFrame(
        report.errors + report.warnings,
        columns=["level", "food", "check", "message", "value"],
    ).to_csv(csv_path, index=False)

    logger.info(f"Reports written to {output_dir}")
    return md_path, csv_path


def build_catalog(
    records: Iterable[Dict[str, Any]],
    atwater_tolerance: Optional[float] = None,
    portion_bands: Optional[Dict[str, Sequence[float]]] = None,
) -> Tuple[List[Dict[str, Any]], QAReport]:
    """Normalize, derive and QA ingested records"""
    docs, duplicate_warnings = merge_records(records)
    docs = derive(docs)
    report = run_qa(docs, atwater_tolerance, portion_bands, duplicate_warnings)
    return docs, report
