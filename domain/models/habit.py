"""
Habit and habit check-in models.
"""

from datetime import datetime
from sqlalchemy import Column, Text, Date, DateTime, ForeignKey, Integer, Boolean, JSON, Uuid
import uuid

from domain.models.database import Base, TimestampMixin, enum_column
from domain.enums import HabitQuality


class Habit(TimestampMixin, Base):
    """A habit the user commits to between start_date and end_date.

    checkins holds lightweight embedded check-ins:
    [{"date", "completed", "duration", "notes", "quality"}]
    """

    __tablename__ = "habit"

    habit_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    habit = Column(Text, nullable=False)
    value_min = Column(Integer, nullable=False, default=0)
    notes = Column(Text)
    start_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    end_date = Column(DateTime, nullable=False)
    quality = enum_column(HabitQuality, nullable=False, default=HabitQuality.GOOD)
    goal_id = Column(Uuid, ForeignKey("lifestyle_goal.goal_id", ondelete="SET NULL"))
    is_active = Column(Boolean, nullable=False, default=True)
    checkins = Column(JSON, nullable=False, default=list)


class HabitCheckin(TimestampMixin, Base):
    """Standalone daily check-in against a habit; counts toward goal minutes."""

    __tablename__ = "habit_checkin"

    checkin_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    habit_id = Column(
        Uuid, ForeignKey("habit.habit_id", ondelete="CASCADE"), nullable=False
    )
    goal_id = Column(Uuid, ForeignKey("lifestyle_goal.goal_id", ondelete="SET NULL"))
    date = Column(Date, nullable=False)
    value_min = Column(Integer, nullable=False, default=0)
    completed = Column(Boolean, nullable=False, default=True)
    notes = Column(Text)
    quality = enum_column(HabitQuality, nullable=False, default=HabitQuality.GOOD)
