from typing import List, Dict, Any, Optional
from collections import Counter
from sqlalchemy.orm import Session
import json
import logging
import re
import uuid

from app.config import settings
from app.exceptions import ExternalServiceError, NotFoundError
from adapters import openai_adapter
from domain.models import JournalEntry
from domain.schemas.journal_schemas import JournalAnalysis
from repositories import JournalRepository
from services.journal_service import JournalService

logger = logging.getLogger("lyfe.journal.analysis")

BELIEF_CATEGORIES = {
    "personal_values",
    "life_philosophy",
    "relationships",
    "work_ethics",
    "spirituality",
    "health_wellness",
    "other",
}
MAX_TOPICS = 5
MAX_BELIEFS = 3
MAX_INSIGHTS = 3

POSITIVE_WORDS = re.compile(
    r"good|great|happy|love|joy|amazing|wonderful|excellent|fantastic", re.IGNORECASE
)
NEGATIVE_WORDS = re.compile(
    r"bad|terrible|awful|hate|sad|angry|frustrated|disappointed|worried|anxious",
    re.IGNORECASE,
)

# Emotion valence used to read a direction out of a run of analyses
POSITIVE_EMOTIONS = {
    "joy", "love", "excitement", "contentment", "gratitude", "hope", "pride",
    "relief", "peace", "confident", "motivated", "energetic", "calm", "curious",
}
NEGATIVE_EMOTIONS = {
    "sadness", "anger", "fear", "disgust", "anxiety", "frustration", "loneliness",
    "disappointment", "shame", "confusion", "overwhelmed", "vulnerable", "tired",
    "stressed",
}

SYSTEM_PROMPT = """You analyze journal entries to help the writer understand their emotional state, \
the topics on their mind and the beliefs or values behind what they wrote. Be accurate, empathetic \
and respectful of sensitive topics.

Reply with a single JSON object:
{
  "emotion": {"primary": "<emotion>", "intensity": 1-10, "secondary": ["<emotion>", ...], "confidence": 0.0-1.0},
  "topics": ["<topic>", ...],
  "beliefs": [{"belief": "<belief or value>", "category": "personal_values|life_philosophy|relationships|work_ethics|spirituality|health_wellness|other", "confidence": 0.0-1.0}],
  "summary": "<one or two sentences>",
  "insights": ["<insight>", ...]
}"""


def _clamp(value: Any, low: float, high: float, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return max(low, min(high, number))


def validate_analysis(raw: Dict[str, Any], source: str = "ai") -> Dict[str, Any]:
    """Coerce a model reply into the stored analysis shape.

    Topics are capped at 5, beliefs and insights at 3, unknown belief
    categories become "other" and intensity is clamped to 1-10.
    """
    emotion = raw.get("emotion") or {}
    secondary = emotion.get("secondary") or []
    if isinstance(secondary, str):
        secondary = [secondary]

    topics = []
    for topic in raw.get("topics") or []:
        name = topic.get("name") if isinstance(topic, dict) else topic
        if name:
            topics.append(str(name))

    beliefs = []
    for belief in (raw.get("beliefs") or [])[:MAX_BELIEFS]:
        if not isinstance(belief, dict) or not belief.get("belief"):
            continue
        category = belief.get("category")
        beliefs.append(
            {
                "belief": str(belief["belief"]),
                "category": category if category in BELIEF_CATEGORIES else "other",
                "confidence": _clamp(belief.get("confidence"), 0, 1, 0.5),
            }
        )

    analysis = JournalAnalysis(
        emotion={
            "primary": str(emotion.get("primary") or "contentment"),
            "intensity": int(round(_clamp(emotion.get("intensity"), 1, 10, 5))),
            "secondary": [str(s) for s in secondary],
            "confidence": _clamp(emotion.get("confidence"), 0, 1, 0.8),
        },
        topics=topics[:MAX_TOPICS],
        beliefs=beliefs,
        summary=str(raw.get("summary") or "No summary available"),
        insights=[str(i) for i in (raw.get("insights") or [])][:MAX_INSIGHTS],
        source=source,
    )
    return analysis.model_dump()


def fallback_analysis(content: str) -> Dict[str, Any]:
    """Keyword heuristic used when no model is available"""
    word_count = len(content.split())
    positive = bool(POSITIVE_WORDS.search(content))
    negative = bool(NEGATIVE_WORDS.search(content))

    primary, intensity = "contentment", 5
    if positive and not negative:
        primary, intensity = "joy", 7
    elif negative and not positive:
        primary, intensity = "sadness", 6

    return validate_analysis(
        {
            "emotion": {"primary": primary, "intensity": intensity, "confidence": 0.3},
            "topics": ["general reflection"],
            "beliefs": [],
            "summary": (
                f"A {word_count}-word journal entry reflecting on personal thoughts "
                "and experiences."
            ),
            "insights": [
                "Consider reflecting on the main themes of this entry for deeper understanding."
            ],
        },
        source="fallback",
    )


def analyze_text(content: str, title: Optional[str] = None) -> Dict[str, Any]:
    """Analyse journal text with the model, falling back to the heuristic"""
    if not openai_adapter.is_configured():
        return fallback_analysis(content)

    prompt = f"Title: {title}\n\n{content}" if title else content
    try:
        message = openai_adapter.chat_completion(
            [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            model=settings.openai_analysis_model,
            temperature=0.3,
            json_mode=True,
        )
        raw = json.loads(message.content or "")
    except ExternalServiceError as e:
        logger.warning(f"Journal analysis unavailable, using fallback: {e}")
        return fallback_analysis(content)
    except ValueError as e:
        logger.warning(f"Journal analysis reply was not valid JSON: {e}")
        return fallback_analysis(content)

    if not isinstance(raw, dict):
        return fallback_analysis(content)
    return validate_analysis(raw)


def _valence(analysis: Dict[str, Any]) -> float:
    emotion = analysis.get("emotion") or {}
    primary = emotion.get("primary")
    intensity = emotion.get("intensity") or 5
    if primary in POSITIVE_EMOTIONS:
        return intensity
    if primary in NEGATIVE_EMOTIONS:
        return -intensity
    return 0


def summarize_trends(analyses: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Trend over analyses ordered oldest to newest"""
    if len(analyses) < 2:
        return {
            "emotion_trend": "stable",
            "dominant_emotions": [
                a["emotion"]["primary"] for a in analyses if a.get("emotion")
            ],
            "average_intensity": float(analyses[0]["emotion"]["intensity"]) if analyses else 0,
            "recurring_topics": [],
            "entries_analyzed": len(analyses),
            "insights": ["Analyze a few more entries to see how your mood is moving."],
        }

    emotions = Counter(a["emotion"]["primary"] for a in analyses)
    topics = Counter(t for a in analyses for t in a.get("topics") or [])
    intensities = [a["emotion"]["intensity"] for a in analyses]

    valences = [_valence(a) for a in analyses]
    half = len(valences) // 2
    earlier = sum(valences[:half]) / half
    later = sum(valences[half:]) / (len(valences) - half)
    swings = sum(
        1 for prev, cur in zip(valences, valences[1:]) if prev * cur < 0
    )
    if swings >= max(2, len(valences) // 2):
        trend = "volatile"
    elif later - earlier >= 2:
        trend = "improving"
    elif earlier - later >= 2:
        trend = "declining"
    else:
        trend = "stable"

    dominant = [name for name, _ in emotions.most_common(3)]
    recurring = [name for name, count in topics.most_common(MAX_TOPICS) if count > 1]
    insights = [f"Your most frequent emotion lately is {dominant[0]}."]
    if recurring:
        insights.append(f"You keep coming back to {', '.join(recurring[:3])}.")
    return {
        "emotion_trend": trend,
        "dominant_emotions": dominant,
        "average_intensity": round(sum(intensities) / len(intensities), 1),
        "recurring_topics": recurring,
        "entries_analyzed": len(analyses),
        "insights": insights,
    }


class JournalAnalysisService:
    @staticmethod
    def analyze_entry(db: Session, user_id: uuid.UUID, entry_id: uuid.UUID) -> JournalEntry:
        entry = JournalService.get_entry(db, user_id, entry_id)
        analysis = analyze_text(entry.content, entry.title)
        entry = JournalRepository(db).apply_changes(entry, {"analysis": analysis})
        logger.info(
            f"Journal entry {entry_id} analysed ({analysis['source']}): "
            f"{analysis['emotion']['primary']}"
        )
        return entry

    @staticmethod
    def get_trends(db: Session, user_id: uuid.UUID, limit: int = 10) -> Dict[str, Any]:
        repo = JournalRepository(db)
        journal = repo.get_by_user(user_id)
        if not journal:
            raise NotFoundError("Journal not found")
        entries = repo.recent_analyzed(journal.journal_id, limit)
        return summarize_trends([e.analysis for e in reversed(entries)])
