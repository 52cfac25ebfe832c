"""
Mindfulness check-in model.
"""

from sqlalchemy import Column, Text, Date, ForeignKey, Integer, JSON, Uuid, UniqueConstraint
import uuid

from domain.models.database import Base, TimestampMixin, enum_column
from domain.enums import MindfulnessAssessment

DIMENSIONS = (
    "presence",
    "emotion_awareness",
    "intentionality",
    "attention_quality",
    "compassion",
)


class MindfulnessCheckin(TimestampMixin, Base):
    """One check-in per user per calendar day.

    Each dimension column holds {"rating": 1-5, "notes": str}.
    """

    __tablename__ = "mindfulness_checkin"

    checkin_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    date = Column(Date, nullable=False)
    presence = Column(JSON, nullable=False, default=dict)
    emotion_awareness = Column(JSON, nullable=False, default=dict)
    intentionality = Column(JSON, nullable=False, default=dict)
    attention_quality = Column(JSON, nullable=False, default=dict)
    compassion = Column(JSON, nullable=False, default=dict)
    total_score = Column(Integer, nullable=False, default=0)
    overall_assessment = enum_column(
        MindfulnessAssessment, nullable=False, default=MindfulnessAssessment.BEGINNER
    )
    daily_notes = Column(Text)
    day_reflection = Column(Text)
    journal_entry_ids = Column(JSON, nullable=False, default=list)

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_mindfulness_user_date"),
    )
