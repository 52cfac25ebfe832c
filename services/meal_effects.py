"""
Meal effect scoring.

Seven 0-10 effect scores derived from a meal's nutrient totals, badges and
context. fat_forming and inflammation are "lower is better"; every other
effect is "higher is better".
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

Tier = Tuple[float, float, str]

LOWER_IS_BETTER = frozenset({"fat_forming", "inflammation"})

EFFECT_ICONS = {
    "fat_forming": "🍔",
    "strength": "💪",
    "immunity": "🌿",
    "inflammation": "🔥",
    "energizing": "⚡️",
    "gut_friendly": "🌀",
    "mood_lifting": "😊",
}


def _clamp(score: float, low: float = 0, high: float = 10) -> float:
    return max(low, min(high, score))


def _num(mapping: Dict[str, Any], key: str) -> float:
    value = mapping.get(key)
    return float(value) if value else 0.0


def _first_tier(value: float, tiers: Sequence[Tier]) -> Optional[Tuple[float, str]]:
    """Return (points, reason) of the first tier whose threshold value reaches."""
    for threshold, points, reason in tiers:
        if value >= threshold:
            return points, reason
    return None


def _added_sugar(context: Dict[str, Any]) -> float:
    """Added sugar is reported on the meal context only, never derived from foods."""
    return float(context.get("added_sugar") or 0)


def _higher_is_better_level(score: float, labels: Sequence[str]) -> str:
    if score >= 8:
        return labels[0]
    if score >= 6:
        return labels[1]
    if score >= 4:
        return labels[2]
    if score >= 2:
        return labels[3]
    return labels[4]


def fat_forming_level(score: float) -> str:
    if score <= 2:
        return "Very Low"
    if score <= 4:
        return "Low"
    if score <= 6:
        return "Moderate"
    if score <= 8:
        return "High"
    return "Very High"


def inflammation_level(score: float) -> str:
    if score <= 3:
        return "Low"
    if score <= 6:
        return "Medium"
    return "High"


STRENGTH_LEVELS = ("Excellent", "Very Good", "Good", "Fair", "Poor")
ENERGY_LEVELS = ("Very Energizing", "Energizing", "Neutral", "Sluggish", "Very Sluggish")
GUT_LEVELS = (
    "Very Gut-Friendly",
    "Gut-Friendly",
    "Neutral",
    "May Cause Discomfort",
    "Likely Uncomfortable",
)
MOOD_LEVELS = (
    "Very Mood-Lifting",
    "Mood-Lifting",
    "Neutral",
    "May Affect Mood",
    "Likely Negative",
)


def _effect(score: float, reasons: List[str], level: str) -> Dict[str, Any]:
    return {"score": score, "level": level, "reasons": reasons}


def compute_fat_forming(totals, badges, context) -> Dict[str, Any]:
    score = 0.0
    reasons: List[str] = []

    for value, tiers in (
        (
            _num(totals, "fat"),
            (
                (50, 3, "Very high fat (>=50g) favours fat storage"),
                (35, 2, "High fat (>=35g) may contribute to weight gain"),
                (25, 1, "Moderate fat (>=25g)"),
            ),
        ),
        (
            _num(totals, "sugar"),
            (
                (30, 3, "Very high sugar (>=30g) favours fat storage"),
                (20, 2, "High sugar (>=20g) may contribute to weight gain"),
                (15, 1, "Moderate sugar (>=15g)"),
            ),
        ),
        (
            _num(badges, "gi"),
            (
                (70, 2, "High glycemic index (>=70)"),
                (55, 1, "Moderate glycemic index (>=55)"),
            ),
        ),
        (
            _num(badges, "nova"),
            (
                (4, 2, "Ultra-processed foods (NOVA 4)"),
                (3, 1, "Processed foods (NOVA 3)"),
            ),
        ),
    ):
        hit = _first_tier(value, tiers)
        if hit:
            score += hit[0]
            reasons.append(hit[1])

    score = _clamp(score)
    return _effect(score, reasons, fat_forming_level(score))


def compute_strength(totals, badges, context) -> Dict[str, Any]:
    reasons: List[str] = []
    protein = _num(totals, "protein")

    hit = _first_tier(
        protein,
        (
            (40, 7, "Excellent protein (>=40g) for muscle building"),
            (30, 6, "Very good protein (>=30g) for strength"),
            (20, 5, "Good protein (>=20g) for maintenance"),
            (15, 3, "Moderate protein (>=15g)"),
            (10, 1, "Low protein (>=10g)"),
        ),
    )
    if hit:
        score = hit[0]
        reasons.append(hit[1])
    else:
        score = 0.0
        reasons.append("Very low protein (<10g)")

    if context.get("post_workout"):
        carbs = _num(totals, "carbs")
        body_mass = context.get("body_mass_kg") or 70
        required = max(50, body_mass * 0.8)
        if carbs >= required:
            score += 2
            reasons.append(f"Post-workout carbs ({carbs:g}g) replenish glycogen")
        else:
            reasons.append(
                f"Post-workout carbs ({carbs:g}g) below optimal ({required:g}g)"
            )

    iron = _num(totals, "iron")
    if iron >= 6:
        score += 1
        reasons.append("Good iron (>=6mg) supports oxygen transport")
    elif iron >= 3:
        reasons.append("Moderate iron (>=3mg)")
    else:
        reasons.append("Low iron (<3mg)")

    score = _clamp(score)
    return _effect(score, reasons, _higher_is_better_level(score, STRENGTH_LEVELS))


def compute_immunity(totals, badges, context) -> Dict[str, Any]:
    score = 0.0
    reasons: List[str] = []

    hit = _first_tier(
        _num(totals, "fiber"),
        (
            (8, 3, "High fiber (>=8g) feeds immune-supporting gut bacteria"),
            (5, 2, "Good fiber (>=5g)"),
            (3, 1, "Some fiber (>=3g)"),
        ),
    )
    if hit:
        score += hit[0]
        reasons.append(hit[1])
    else:
        reasons.append("Low fiber (<3g)")

    hit = _first_tier(
        _num(totals, "vitamin_c"),
        (
            (60, 2, "High vitamin C (>=60mg)"),
            (30, 1, "Some vitamin C (>=30mg)"),
        ),
    )
    if hit:
        score += hit[0]
        reasons.append(hit[1])
    else:
        reasons.append("Low vitamin C (<30mg)")

    zinc = _num(totals, "zinc")
    selenium = _num(totals, "selenium")
    if zinc >= 5 or selenium >= 30:
        score += 2
        if zinc >= 5:
            reasons.append(f"Good zinc ({zinc:g}mg) for immune cells")
        if selenium >= 30:
            reasons.append(f"Good selenium ({selenium:g}ug) for antioxidant defense")
    elif zinc >= 2 or selenium >= 15:
        score += 1
        reasons.append("Moderate zinc or selenium")
    else:
        reasons.append("Low zinc and selenium")

    if context.get("fermented"):
        score += 2
        reasons.append("Fermented foods support gut immunity")

    diversity = context.get("plant_diversity") or 0
    if diversity >= 5:
        score += 1
        reasons.append("Diverse plants (>=5) broaden micronutrient intake")
    elif diversity >= 3:
        reasons.append("Moderate plant diversity (>=3)")
    else:
        reasons.append("Low plant diversity (<3)")

    score = _clamp(score)
    return _effect(score, reasons, _higher_is_better_level(score, STRENGTH_LEVELS))


def compute_inflammation(totals, badges, context) -> Dict[str, Any]:
    score = 5.0
    reasons: List[str] = []

    fiber = _num(totals, "fiber")
    if fiber >= 8:
        score -= 2
        reasons.append("High fiber (>=8g) is anti-inflammatory")
    elif fiber >= 5:
        score -= 1
        reasons.append("Good fiber (>=5g) helps reduce inflammation")
    else:
        reasons.append("Low fiber (<5g) may add to inflammation")

    omega3 = _num(totals, "omega3")
    if omega3 >= 0.5 or context.get("omega3_tag"):
        score -= 1
        reasons.append("Omega-3 fats are anti-inflammatory")
    elif omega3 >= 0.2:
        reasons.append("Moderate omega-3 (>=0.2g)")
    else:
        reasons.append("Low omega-3 (<0.2g)")

    nova = _num(badges, "nova")
    if nova >= 4:
        score += 2
        reasons.append("Ultra-processed foods (NOVA 4) promote inflammation")
    elif nova >= 3:
        score += 1
        reasons.append("Processed foods (NOVA 3)")

    added_sugar = _added_sugar(context)
    if added_sugar >= 15:
        score += 1
        reasons.append("Added sugar (>=15g) promotes inflammation")
    elif added_sugar >= 10:
        reasons.append("Moderate added sugar (>=10g)")

    if _num(badges, "gi") >= 70:
        score += 1
        reasons.append("High glycemic index (>=70)")

    score = _clamp(score)
    return _effect(score, reasons, inflammation_level(score))


def compute_energizing(totals, badges, context) -> Dict[str, Any]:
    score = 5.0
    reasons: List[str] = []
    gi = badges.get("gi")

    if _num(totals, "carbs") >= 30 and gi:
        if gi < 55:
            score += 2
            reasons.append("Low-GI carbs give steady energy")
        elif gi < 70:
            score += 1
            reasons.append("Moderate-GI carbs")

    if _num(totals, "protein") >= 15:
        score += 1
        reasons.append("Protein (>=15g) slows energy release")

    if _num(totals, "fiber") >= 5:
        score += 1
        reasons.append("Fiber (>=5g) steadies blood sugar")

    if _num(totals, "fat") >= 40:
        score -= 1
        reasons.append("Heavy fat load (>=40g) can feel sluggish")

    if gi and gi >= 70:
        score -= 1
        reasons.append("High GI may cause an energy crash")

    if _num(totals, "sugar") >= 25:
        score -= 1
        reasons.append("High sugar (>=25g) may cause an energy crash")

    score = _clamp(score)
    return _effect(score, reasons, _higher_is_better_level(score, ENERGY_LEVELS))


def compute_gut_friendly(totals, badges, context) -> Dict[str, Any]:
    score = 5.0
    reasons: List[str] = []

    hit = _first_tier(
        _num(totals, "fiber"),
        (
            (8, 3, "High fiber (>=8g) feeds gut bacteria"),
            (5, 2, "Good fiber (>=5g)"),
            (3, 1, "Some fiber (>=3g)"),
        ),
    )
    if hit:
        score += hit[0]
        reasons.append(hit[1])

    if context.get("fermented"):
        score += 2
        reasons.append("Fermented foods add beneficial microbes")

    diversity = context.get("plant_diversity") or 0
    if diversity >= 5:
        score += 1
        reasons.append("High plant diversity (>=5)")
    elif diversity >= 3:
        score += 1
        reasons.append("Good plant diversity (>=3)")

    if _num(totals, "fat") >= 45:
        score -= 1
        reasons.append("Very high fat (>=45g) may slow digestion")

    if _num(badges, "nova") >= 4:
        score -= 1
        reasons.append("Ultra-processed foods may disturb the gut")

    if _num(totals, "sugar") >= 30:
        score -= 1
        reasons.append("Very high sugar (>=30g) may disturb the gut")

    score = _clamp(score)
    return _effect(score, reasons, _higher_is_better_level(score, GUT_LEVELS))


def compute_mood_lifting(totals, badges, context) -> Dict[str, Any]:
    score = 5.0
    reasons: List[str] = []

    hit = _first_tier(
        _num(totals, "omega3"),
        (
            (0.8, 2, "Rich in omega-3 (>=0.8g)"),
            (0.5, 1, "Some omega-3 (>=0.5g)"),
        ),
    )
    if hit:
        score += hit[0]
        reasons.append(hit[1])

    if _num(totals, "magnesium") >= 100:
        score += 1
        reasons.append("Magnesium (>=100mg) supports relaxation")

    if _num(totals, "tryptophan") >= 200:
        score += 1
        reasons.append("Tryptophan (>=200mg) supports serotonin")

    if context.get("fermented"):
        score += 1
        reasons.append("Fermented foods support the gut-brain axis")

    if _num(totals, "sugar") >= 25:
        score -= 1
        reasons.append("High sugar (>=25g) may cause mood swings")

    if _num(badges, "nova") >= 4:
        score -= 1
        reasons.append("Ultra-processed foods are linked to low mood")

    if _added_sugar(context) >= 20:
        score -= 1
        reasons.append("Added sugar (>=20g)")

    score = _clamp(score)
    return _effect(score, reasons, _higher_is_better_level(score, MOOD_LEVELS))


def compute_meal_effects(
    totals: Dict[str, Any],
    badges: Dict[str, Any],
    context: Optional[Dict[str, Any]] = None,
) -> Dict[str, Dict[str, Any]]:
    """Compute all seven effects for a meal.

    Args:
        totals: nutrient totals from aggregate_nutrients
        badges: badges from infer_badges
        context: meal context (post_workout, fermented, omega3_tag,
            body_mass_kg, plant_diversity, added_sugar)

    Returns:
        Dict keyed by effect name, each {"score", "level", "reasons"}
    """
    context = context or {}
    badges = badges or {}
    return {
        "fat_forming": compute_fat_forming(totals, badges, context),
        "strength": compute_strength(totals, badges, context),
        "immunity": compute_immunity(totals, badges, context),
        "inflammation": compute_inflammation(totals, badges, context),
        "energizing": compute_energizing(totals, badges, context),
        "gut_friendly": compute_gut_friendly(totals, badges, context),
        "mood_lifting": compute_mood_lifting(totals, badges, context),
    }


def effect_color(score: float, lower_is_better: bool = False) -> str:
    """Traffic-light color for an effect score."""
    if lower_is_better:
        if score <= 2:
            return "green"
        if score <= 4:
            return "blue"
        if score <= 6:
            return "yellow"
        if score <= 8:
            return "orange"
        return "red"
    if score >= 8:
        return "green"
    if score >= 6:
        return "blue"
    if score >= 4:
        return "yellow"
    if score >= 2:
        return "orange"
    return "red"


def effects_summary(effects: Dict[str, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """Each effect with its display icon and traffic-light color added."""
    return {
        name: {
            **effect,
            "icon": EFFECT_ICONS.get(name, ""),
            "color": effect_color(effect["score"], name in LOWER_IS_BETTER),
        }
        for name, effect in effects.items()
    }
