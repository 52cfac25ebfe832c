"""
Meal log model.
"""

from datetime import datetime
from sqlalchemy import Column, Text, DateTime, ForeignKey, Integer, JSON, Uuid, Index
import uuid

from domain.models.database import Base, TimestampMixin


class Meal(TimestampMixin, Base):
    """A logged meal with its computed nutrition analysis.

    items:    [{"food_id", "custom_name", "grams"}]
    context:  MealContext as a dict
    computed: {"totals", "badges", "mindful_meal_score", "rationale", "tip", "effects"}
    """

    __tablename__ = "meal"

    meal_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    ts = Column(DateTime, nullable=False, default=datetime.utcnow)
    items = Column(JSON, nullable=False, default=list)
    notes = Column(Text)
    context = Column(JSON, nullable=False, default=dict)
    presence = Column(Integer)
    energy = Column(Integer)
    computed = Column(JSON, nullable=False, default=dict)

    __table_args__ = (Index("ix_meal_user_ts", "user_id", "ts"),)
