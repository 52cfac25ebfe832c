"""
Meal nutrition scoring: nutrient aggregation, badge inference and the
0-5 mindful meal score.

All functions are pure. A meal line is a mapping {"food": <catalog food
document>, "grams": <portion in grams>}; food nutrients are per 100 g.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from domain.enums import FODMAP_ORDER, FodmapLevel
from services.meal_effects import compute_meal_effects

NUTRIENT_KEYS = (
    "kcal",
    "protein",
    "fat",
    "carbs",
    "fiber",
    "sugar",
    "added_sugar",
    "vitamin_c",
    "zinc",
    "selenium",
    "iron",
    "omega3",
    "magnesium",
    "tryptophan",
)

VEG_TAGS = frozenset({"veg", "leafy", "vegetable"})


def aggregate_nutrients(lines: Iterable[Mapping[str, Any]]) -> Dict[str, float]:
    """Sum per-100g nutrients scaled by grams, rounded to 2 decimals."""
    totals = {key: 0.0 for key in NUTRIENT_KEYS}
    for line in lines:
        nutrients = (line.get("food") or {}).get("nutrients") or {}
        factor = float(line.get("grams") or 0) / 100
        for key in NUTRIENT_KEYS:
            value = nutrients.get(key)
            if value:
                totals[key] += float(value) * factor
    return {key: round(value, 2) for key, value in totals.items()}


def _carb_weighted_gi(lines: List[Mapping[str, Any]]) -> Optional[int]:
    weighted = 0.0
    weight = 0.0
    for line in lines:
        food = line.get("food") or {}
        gi = food.get("gi")
        if gi is None:
            continue
        carbs = float((food.get("nutrients") or {}).get("carbs") or 0)
        w = carbs * float(line.get("grams") or 0) / 100
        weighted += float(gi) * w
        weight += w
    if weight <= 0:
        return None
    return round(weighted / weight)


def _worst_fodmap(lines: List[Mapping[str, Any]]) -> str:
    worst = FodmapLevel.UNKNOWN.value
    for line in lines:
        level = (line.get("food") or {}).get("fodmap") or FodmapLevel.UNKNOWN.value
        if FODMAP_ORDER.get(level, 0) > FODMAP_ORDER[worst]:
            worst = level
    return worst


def infer_badges(
    lines: Iterable[Mapping[str, Any]], totals: Mapping[str, float]
) -> Dict[str, Any]:
    """Derive the protein/veg flags and the gi, fodmap and nova badges of a meal."""
    lines = list(lines)
    kcal = totals.get("kcal") or 0
    protein = totals.get("protein") or 0

    has_protein = protein >= 20 or (kcal > 0 and protein / kcal * 100 >= 0.12)

    has_veg_tag = any(
        VEG_TAGS.intersection((line.get("food") or {}).get("tags") or [])
        for line in lines
    )
    has_veg = has_veg_tag or (totals.get("fiber") or 0) >= 5

    nova = max(
        (int((line.get("food") or {}).get("nova_class") or 1) for line in lines),
        default=1,
    )

    return {
        "protein": bool(has_protein),
        "veg": bool(has_veg),
        "gi": _carb_weighted_gi(lines),
        "fodmap": _worst_fodmap(lines),
        "nova": nova,
    }


def _tip(badges: Mapping[str, Any], totals: Mapping[str, float]) -> str:
    if not badges.get("protein"):
        return "Add a protein source such as dal, paneer, eggs or tofu."
    if not badges.get("veg"):
        return "Add vegetables or a salad for fiber and micronutrients."
    if (badges.get("nova") or 1) >= 4:
        return "Swap an ultra-processed item for a whole-food alternative."
    if (totals.get("sugar") or 0) >= 15:
        return "Cut back on sweet items or sugary drinks."
    if badges.get("gi") and badges["gi"] >= 70:
        return "Pair high-GI carbs with fiber or protein, or choose whole grains."
    return "Well balanced meal. Keep it up!"


def mindful_meal_score(
    totals: Mapping[str, float],
    badges: Mapping[str, Any],
    context: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Score a meal from 0 to 5 with a rationale and an improvement tip.

    Returns:
        {"score": float (1 decimal), "rationale": [str], "tip": str}
    """
    context = context or {}
    score = 0.0
    rationale: List[str] = []

    if badges.get("protein"):
        score += 2
        rationale.append("Good protein content")
    if badges.get("veg"):
        score += 1
        rationale.append("Contains vegetables/fiber")
    if (badges.get("nova") or 1) >= 4:
        score -= 1
        rationale.append("Ultra-processed foods")
    if (totals.get("sugar") or 0) >= 15:
        score -= 1
        rationale.append("High sugar content")
    if badges.get("gi") and badges["gi"] >= 70:
        score -= 1
        rationale.append("High glycemic index")

    kcal = totals.get("kcal") or 0
    if kcal > 0:
        carb_pct = (totals.get("carbs") or 0) * 4 / kcal * 100
        if carb_pct <= 45 or (totals.get("fiber") or 0) >= 7:
            score += 1
            rationale.append("Balanced carbs/fiber")

    if context.get("post_workout") and badges.get("protein"):
        score += 0.5
        rationale.append("Good post-workout protein")
    if context.get("fermented") and badges.get("veg"):
        score += 0.5
        rationale.append("Fermented vegetables")

    score = max(0.0, min(5.0, score))
    return {
        "score": round(score, 1),
        "rationale": rationale,
        "tip": _tip(badges, totals),
    }


def analyze_meal(
    lines: List[Mapping[str, Any]], context: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """Run the full analysis pipeline for a meal.

    Returns the `computed` block stored on a Meal:
    {"totals", "badges", "mindful_meal_score", "rationale", "tip", "effects"}
    """
    context = dict(context or {})
    totals = aggregate_nutrients(lines)
    badges = infer_badges(lines, totals)
    scored = mindful_meal_score(totals, badges, context)
    return {
        "totals": totals,
        "badges": badges,
        "mindful_meal_score": scored["score"],
        "rationale": scored["rationale"],
        "tip": scored["tip"],
        "effects": compute_meal_effects(totals, badges, context),
    }
