"""
Task model.
"""

from sqlalchemy import Column, Text, DateTime, ForeignKey, Integer, JSON, Uuid, Index
import uuid

from domain.models.database import Base, TimestampMixin, enum_column
from domain.enums import TaskStatus, Priority, EnergyLevel


class Task(TimestampMixin, Base):
    """A to-do or a logged piece of work.

    goal_ids and tags are JSON string lists; subtasks is
    [{"title", "completed", "completed_at"}].
    """

    __tablename__ = "task"

    task_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    title = Column(Text, nullable=False)
    description = Column(Text)
    status = enum_column(TaskStatus, nullable=False, default=TaskStatus.PENDING)
    priority = enum_column(Priority, nullable=False, default=Priority.MEDIUM)
    category = Column(Text)
    energy_level = enum_column(EnergyLevel)
    due_date = Column(DateTime)
    completed_at = Column(DateTime)
    completion_notes = Column(Text)
    duration_minutes = Column(Integer)
    mindful_rating = Column(Integer)
    goal_ids = Column(JSON, nullable=False, default=list)
    tags = Column(JSON, nullable=False, default=list)
    subtasks = Column(JSON, nullable=False, default=list)

    __table_args__ = (
        Index("ix_task_user_status", "user_id", "status"),
        Index("ix_task_user_completed", "user_id", "completed_at"),
    )
