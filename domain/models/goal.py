"""
Lifestyle goal, time block and goal-aligned day models.
"""

from sqlalchemy import (
    Column,
    Text,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Boolean,
    JSON,
    Uuid,
    UniqueConstraint,
)
import uuid

from domain.models.database import Base, TimestampMixin, enum_column
from domain.enums import Priority


class LifestyleGoal(TimestampMixin, Base):
    """A long-running goal that tasks, habits and time blocks contribute to"""

    __tablename__ = "lifestyle_goal"

    goal_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    name = Column(Text, nullable=False)
    color = Column(Text, nullable=False, default="#10B981")
    description = Column(Text)
    category = Column(Text)
    target_hours = Column(Float, nullable=False, default=1)
    priority = enum_column(Priority, nullable=False, default=Priority.MEDIUM)
    is_active = Column(Boolean, nullable=False, default=True)


class TimeBlock(TimestampMixin, Base):
    """A scheduled block of time, optionally tagged with a goal and a task"""

    __tablename__ = "time_block"

    block_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    date = Column(Date, nullable=False)
    title = Column(Text)
    start_time = Column(DateTime)
    end_time = Column(DateTime)
    duration = Column(Integer, nullable=False, default=0)
    goal_id = Column(Uuid, ForeignKey("lifestyle_goal.goal_id", ondelete="SET NULL"))
    task_id = Column(Uuid, ForeignKey("task.task_id", ondelete="SET NULL"))


class GoalAlignedDay(TimestampMixin, Base):
    """Snapshot of one local day's goal-aligned minutes and streak"""

    __tablename__ = "goal_aligned_day"

    day_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    date = Column(Date, nullable=False)
    tasks_goal_aligned = Column(Integer, nullable=False, default=0)
    block_minutes = Column(Float, nullable=False, default=0)
    habit_minutes = Column(Float, nullable=False, default=0)
    task_minutes = Column(Float, nullable=False, default=0)
    total_goal_aligned_minutes = Column(Float, nullable=False, default=0)
    score24 = Column(Float, nullable=False, default=0)
    score_percentage = Column(Float, nullable=False, default=0)
    goal_breakdown = Column(JSON, nullable=False, default=list)
    mindful_tasks = Column(Integer, nullable=False, default=0)
    mindful_minutes = Column(Float, nullable=False, default=0)
    average_mindful_rating = Column(Float, nullable=False, default=1)
    current_streak = Column(Integer, nullable=False, default=0)
    longest_streak = Column(Integer, nullable=False, default=0)
    target_hours = Column(Float, nullable=False, default=8)

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_goal_day_user_date"),
    )
