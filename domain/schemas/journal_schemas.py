from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime
from uuid import UUID

from domain.enums import JournalEntryType, Mood, JournalPrivacy


class JournalEntryCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    type: JournalEntryType = JournalEntryType.DAILY
    mood: Mood = Mood.NEUTRAL
    tags: List[str] = Field(default_factory=list)
    is_private: Optional[bool] = Field(
        None, description="Defaults from the journal's default_privacy setting"
    )
    location: Optional[str] = None
    weather: Optional[str] = None


class JournalEntryUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    type: Optional[JournalEntryType] = None
    mood: Optional[Mood] = None
    tags: Optional[List[str]] = None
    is_private: Optional[bool] = None
    location: Optional[str] = None
    weather: Optional[str] = None


class JournalEntryResponse(BaseModel):
    entry_id: UUID
    title: str
    content: str
    type: JournalEntryType
    mood: Mood
    tags: List[str] = Field(default_factory=list)
    is_private: bool
    location: Optional[str] = None
    weather: Optional[str] = None
    analysis: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class JournalSettingsUpdate(BaseModel):
    default_privacy: Optional[JournalPrivacy] = None
    reminders_enabled: Optional[bool] = None
    reminder_time: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$")


class JournalResponse(BaseModel):
    journal_id: UUID
    user_id: UUID
    default_privacy: JournalPrivacy
    reminders_enabled: bool
    reminder_time: Optional[str] = None
    total_entries: int
    current_streak: int
    longest_streak: int
    last_entry_date: Optional[datetime] = None
    entries: List[JournalEntryResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class EntryPagination(BaseModel):
    current_page: int
    total_pages: int
    total_entries: int
    has_next: bool
    has_prev: bool


class JournalEntryListResponse(BaseModel):
    entries: List[JournalEntryResponse]
    pagination: EntryPagination


class JournalStatsResponse(BaseModel):
    total_entries: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    last_entry_date: Optional[datetime] = None
    entries_by_type: Dict[str, int] = Field(default_factory=dict)
    entries_by_mood: Dict[str, int] = Field(default_factory=dict)
    monthly_entries: List[int] = Field(default_factory=lambda: [0] * 12)


class EmotionAnalysis(BaseModel):
    primary: str
    intensity: int = Field(..., ge=1, le=10)
    secondary: List[str] = Field(default_factory=list)
    confidence: float = Field(default=0.8, ge=0, le=1)


class BeliefAnalysis(BaseModel):
    belief: str
    category: str
    confidence: float = Field(default=0.5, ge=0, le=1)


class JournalAnalysis(BaseModel):
    emotion: EmotionAnalysis
    topics: List[str] = Field(default_factory=list)
    beliefs: List[BeliefAnalysis] = Field(default_factory=list)
    summary: str
    insights: List[str] = Field(default_factory=list)
    source: str = Field(default="ai", description="'ai' or 'fallback'")


class JournalTrends(BaseModel):
    emotion_trend: str
    dominant_emotions: List[str] = Field(default_factory=list)
    average_intensity: float = 0
    recurring_topics: List[str] = Field(default_factory=list)
    entries_analyzed: int = 0
    insights: List[str] = Field(default_factory=list)
