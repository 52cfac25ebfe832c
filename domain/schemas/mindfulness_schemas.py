from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import date as date_type, datetime
from uuid import UUID

from domain.enums import MindfulnessAssessment


class DimensionRating(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    notes: Optional[str] = None


class MindfulnessCheckinCreate(BaseModel):
    """Check-in payload; posting twice on the same day updates the existing check-in"""

    date: Optional[date_type] = Field(None, description="Defaults to today (local day)")
    presence: DimensionRating
    emotion_awareness: DimensionRating
    intentionality: DimensionRating
    attention_quality: DimensionRating
    compassion: DimensionRating
    daily_notes: Optional[str] = None
    day_reflection: Optional[str] = None


class MindfulnessCheckinUpdate(BaseModel):
    presence: Optional[DimensionRating] = None
    emotion_awareness: Optional[DimensionRating] = None
    intentionality: Optional[DimensionRating] = None
    attention_quality: Optional[DimensionRating] = None
    compassion: Optional[DimensionRating] = None
    daily_notes: Optional[str] = None
    day_reflection: Optional[str] = None


class MindfulnessCheckinResponse(BaseModel):
    checkin_id: UUID
    user_id: UUID
    date: date_type
    presence: Dict
    emotion_awareness: Dict
    intentionality: Dict
    attention_quality: Dict
    compassion: Dict
    total_score: int
    overall_assessment: MindfulnessAssessment
    daily_notes: Optional[str] = None
    day_reflection: Optional[str] = None
    journal_entry_ids: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MindfulnessUpsertResponse(BaseModel):
    checkin: MindfulnessCheckinResponse
    was_update: bool


class ScorePoint(BaseModel):
    date: date_type
    score: int


class MindfulnessStatsResponse(BaseModel):
    total_checkins: int
    average_score: float
    score_trend: List[ScorePoint]
    dimension_averages: Dict[str, float]
    overall_assessment: MindfulnessAssessment
