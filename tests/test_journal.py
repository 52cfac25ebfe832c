"""
Tests for the journal: entries, streaks, stats and AI analysis.

The OpenAI adapter is replaced with monkeypatch; without a key the
keyword fallback analysis is used.
"""

import json
import uuid
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from test_fixtures import client, auth_user, db_session, db_user
from adapters import openai_adapter
from app.exceptions import ExternalServiceError, NotFoundError
from domain.enums import JournalEntryType, JournalPrivacy, Mood
from domain.schemas.journal_schemas import (
    JournalEntryCreate,
    JournalEntryUpdate,
    JournalSettingsUpdate,
)
from services import journal_analysis_service as analysis
from services.journal_analysis_service import JournalAnalysisService
from services.journal_service import JournalService


def write(db, user_id, title="Morning pages", content="Slept well, feeling good.", **extra):
    return JournalService.add_entry(
        db, user_id, JournalEntryCreate(title=title, content=content, **extra)
    )


def analysed(primary, intensity=6, topics=()):
    return {"emotion": {"primary": primary, "intensity": intensity}, "topics": list(topics)}


# =============================================================================
# STREAK
# =============================================================================


def test_streak_rules():
    journal = SimpleNamespace(last_entry_date=None, current_streak=0, longest_streak=0)
    # 10:00 UTC is mid-afternoon on the same local day
    first = datetime(2025, 3, 10, 10, 0)

    JournalService._update_streak(journal, first)
    assert journal.current_streak == 1

    JournalService._update_streak(journal, first + timedelta(hours=2))
    assert journal.current_streak == 1

    JournalService._update_streak(journal, first + timedelta(days=1))
    assert journal.current_streak == 2
    assert journal.longest_streak == 2

    JournalService._update_streak(journal, first + timedelta(days=4))
    assert journal.current_streak == 1
    assert journal.longest_streak == 2
    assert journal.last_entry_date == first + timedelta(days=4)


def test_streak_uses_local_day_boundary():
    journal = SimpleNamespace(last_entry_date=None, current_streak=0, longest_streak=0)
    # 17:00 UTC on the 10th and 19:00 UTC on the 10th fall on local days 10 and 11
    JournalService._update_streak(journal, datetime(2025, 3, 10, 17, 0))
    JournalService._update_streak(journal, datetime(2025, 3, 10, 19, 0))
    assert journal.current_streak == 2


# =============================================================================
# ENTRIES
# =============================================================================


def test_first_entry_creates_journal(db_session, db_user):
    entry = write(db_session, db_user.user_id, tags=["sleep"])

    journal = JournalService.get_journal(db_session, db_user.user_id)

    assert journal.total_entries == 1
    assert journal.current_streak == 1
    assert journal.entries[0].entry_id == entry.entry_id
    # journals default to private
    assert entry.is_private is True


def test_default_privacy_setting_applies(db_session, db_user):
    JournalService.update_settings(
        db_session,
        db_user.user_id,
        JournalSettingsUpdate(default_privacy=JournalPrivacy.PUBLIC, reminder_time="21:30"),
    )

    assert write(db_session, db_user.user_id).is_private is False
    assert write(db_session, db_user.user_id, is_private=True).is_private is True


def test_update_and_delete_entry(db_session, db_user):
    entry = write(db_session, db_user.user_id)

    updated = JournalService.update_entry(
        db_session,
        db_user.user_id,
        entry.entry_id,
        JournalEntryUpdate(mood=Mood.GRATEFUL, tags=["family"]),
    )
    assert updated.mood == Mood.GRATEFUL
    assert updated.tags == ["family"]

    JournalService.delete_entry(db_session, db_user.user_id, entry.entry_id)
    assert JournalService.get_journal(db_session, db_user.user_id).total_entries == 0
    with pytest.raises(NotFoundError):
        JournalService.get_entry(db_session, db_user.user_id, entry.entry_id)


def test_entries_of_other_users_not_found(db_session, db_user):
    entry = write(db_session, db_user.user_id)
    with pytest.raises(NotFoundError):
        JournalService.get_entry(db_session, uuid.uuid4(), entry.entry_id)


def test_list_filters(db_session, db_user):
    uid = db_user.user_id
    write(db_session, uid, "Thanks", type=JournalEntryType.GRATITUDE, tags=["family"])
    write(db_session, uid, "Work", mood=Mood.STRESSED, tags=["deadline"])
    write(db_session, uid, "Dream", type=JournalEntryType.DREAM, tags=["night", "family"])

    gratitude = JournalService.list_entries(db_session, uid, entry_type="gratitude")
    assert [e.title for e in gratitude["entries"]] == ["Thanks"]

    stressed = JournalService.list_entries(db_session, uid, mood="stressed")
    assert [e.title for e in stressed["entries"]] == ["Work"]

    # any of the tags matches
    tagged = JournalService.list_entries(db_session, uid, tags=["family", "deadline"])
    assert tagged["pagination"]["total_entries"] == 3

    page = JournalService.list_entries(db_session, uid, page=1, limit=2)
    assert page["pagination"] == {
        "current_page": 1,
        "total_pages": 2,
        "total_entries": 3,
        "has_next": True,
        "has_prev": False,
    }


def test_stats(db_session, db_user):
    uid = db_user.user_id
    write(db_session, uid, mood=Mood.HAPPY)
    write(db_session, uid, mood=Mood.HAPPY, type=JournalEntryType.GRATITUDE)

    stats = JournalService.get_stats(db_session, uid)

    assert stats["total_entries"] == 2
    assert stats["entries_by_type"] == {"daily": 1, "gratitude": 1}
    assert stats["entries_by_mood"] == {"happy": 2}
    assert sum(stats["monthly_entries"]) == 2
    assert stats["monthly_entries"][datetime.utcnow().month - 1] == 2


def test_stats_without_journal(db_session, db_user):
    stats = JournalService.get_stats(db_session, db_user.user_id)
    assert stats["total_entries"] == 0
    assert stats["monthly_entries"] == [0] * 12


# =============================================================================
# ANALYSIS
# =============================================================================


def test_fallback_analysis_reads_keywords():
    happy = analysis.fallback_analysis("What a great and happy day")
    assert happy["emotion"]["primary"] == "joy"
    assert happy["emotion"]["intensity"] == 7
    assert happy["source"] == "fallback"
    assert happy["summary"].startswith("A 6-word journal entry")

    sad = analysis.fallback_analysis("I feel sad and worried")
    assert sad["emotion"]["primary"] == "sadness"

    mixed = analysis.fallback_analysis("good news but also bad news")
    assert mixed["emotion"]["primary"] == "contentment"


def test_validate_analysis_caps_and_cleans():
    raw = {
        "emotion": {"primary": "gratitude", "intensity": 15, "secondary": "hope"},
        "topics": ["family", {"name": "work"}, "health", "sleep", "food", "travel"],
        "beliefs": [
            {"belief": "Rest matters", "category": "health_wellness", "confidence": 2},
            {"belief": "Family first", "category": "made_up"},
            {"category": "other"},
            {"belief": "Fourth", "category": "other"},
            {"belief": "Fifth", "category": "other"},
        ],
        "insights": ["a", "b", "c", "d"],
    }

    result = analysis.validate_analysis(raw)

    assert result["emotion"]["intensity"] == 10
    assert result["emotion"]["secondary"] == ["hope"]
    assert result["topics"] == ["family", "work", "health", "sleep", "food"]
    assert [b["belief"] for b in result["beliefs"]] == ["Rest matters", "Family first"]
    assert result["beliefs"][0]["confidence"] == 1
    assert result["beliefs"][1]["category"] == "other"
    assert len(result["insights"]) == 3
    assert result["summary"] == "No summary available"
    assert result["source"] == "ai"


def test_analyze_text_uses_model_reply(monkeypatch):
    reply = {"emotion": {"primary": "calm", "intensity": 4}, "topics": ["meditation"], "summary": "Quiet."}
    monkeypatch.setattr(openai_adapter, "is_configured", lambda: True)
    monkeypatch.setattr(
        openai_adapter,
        "chat_completion",
        lambda messages, **kwargs: SimpleNamespace(content=json.dumps(reply)),
    )

    result = analysis.analyze_text("Sat for twenty minutes.", title="Evening")

    assert result["emotion"]["primary"] == "calm"
    assert result["topics"] == ["meditation"]
    assert result["source"] == "ai"


@pytest.mark.parametrize(
    "behaviour",
    [
        lambda messages, **kwargs: SimpleNamespace(content="not json"),
        lambda messages, **kwargs: SimpleNamespace(content="[1, 2]"),
    ],
)
def test_analyze_text_falls_back_on_bad_reply(monkeypatch, behaviour):
    monkeypatch.setattr(openai_adapter, "is_configured", lambda: True)
    monkeypatch.setattr(openai_adapter, "chat_completion", behaviour)

    assert analysis.analyze_text("Just a day.")["source"] == "fallback"


def test_analyze_text_falls_back_on_api_error(monkeypatch):
    def failing(messages, **kwargs):
        raise ExternalServiceError("rate limited")

    monkeypatch.setattr(openai_adapter, "is_configured", lambda: True)
    monkeypatch.setattr(openai_adapter, "chat_completion", failing)

    assert analysis.analyze_text("Just a day.")["source"] == "fallback"


def test_analyze_entry_stores_result(db_session, db_user):
    entry = write(db_session, db_user.user_id, content="An amazing, wonderful hike.")

    entry = JournalAnalysisService.analyze_entry(db_session, db_user.user_id, entry.entry_id)

    assert entry.analysis["emotion"]["primary"] == "joy"


# =============================================================================
# TRENDS
# =============================================================================


@pytest.mark.parametrize(
    "series,expected",
    [
        (["sadness", "sadness", "joy", "joy"], "improving"),
        (["joy", "joy", "sadness", "sadness"], "declining"),
        (["joy", "sadness", "joy", "sadness"], "volatile"),
        (["surprise", "surprise", "surprise"], "stable"),
    ],
)
def test_trend_direction(series, expected):
    result = analysis.summarize_trends([analysed(name) for name in series])
    assert result["emotion_trend"] == expected
    assert result["entries_analyzed"] == len(series)


def test_trend_recurring_topics_and_dominant_emotion():
    result = analysis.summarize_trends(
        [
            analysed("joy", 8, ["family", "work"]),
            analysed("joy", 6, ["family"]),
            analysed("calm", 4, ["sleep"]),
        ]
    )

    assert result["dominant_emotions"][0] == "joy"
    assert result["recurring_topics"] == ["family"]
    assert result["average_intensity"] == 6.0
    assert "family" in result["insights"][1]


def test_single_analysis_is_stable():
    result = analysis.summarize_trends([analysed("joy", 7)])
    assert result["emotion_trend"] == "stable"
    assert result["average_intensity"] == 7.0


def test_trends_need_a_journal(db_session, db_user):
    with pytest.raises(NotFoundError):
        JournalAnalysisService.get_trends(db_session, db_user.user_id)


# =============================================================================
# ROUTES
# =============================================================================


def test_create_entry_route_requires_content(auth_user):
    r = client.post("/api/journal/entries", json={"title": "Empty", "content": ""})
    assert r.status_code == 422


def test_entries_route_type_alias(monkeypatch, auth_user):
    seen = {}

    def fake_list(db, uid, entry_type, mood, tags, start_date, end_date, page, limit):
        seen.update(entry_type=entry_type, tags=tags)
        return {
            "entries": [],
            "pagination": {
                "current_page": 1,
                "total_pages": 0,
                "total_entries": 0,
                "has_next": False,
                "has_prev": False,
            },
        }

    monkeypatch.setattr(JournalService, "list_entries", fake_list)

    r = client.get("/api/journal/entries?type=gratitude&tags=family&tags=work")

    assert r.status_code == 200
    assert seen["entry_type"] == JournalEntryType.GRATITUDE
    assert seen["tags"] == ["family", "work"]
