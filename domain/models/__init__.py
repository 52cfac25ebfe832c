"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    check_connection,
    get_db_session,
)
from domain.models.user import AppUser
from domain.models.meal import Meal
from domain.models.mindfulness import MindfulnessCheckin, DIMENSIONS
from domain.models.goal import LifestyleGoal, TimeBlock, GoalAlignedDay
from domain.models.habit import Habit, HabitCheckin
from domain.models.task import Task
from domain.models.finance import Expense, Income
from domain.models.journal import Journal, JournalEntry
from domain.models.pantry import PantryItem
from domain.models.records import (
    Document,
    Relationship,
    CommunicationLog,
    Contact,
    Message,
)
from domain.models.chat import ChatMessage

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "check_connection",
    "get_db_session",
    # Users
    "AppUser",
    # Nutrition
    "Meal",
    "PantryItem",
    # Wellbeing
    "MindfulnessCheckin",
    "DIMENSIONS",
    "Habit",
    "HabitCheckin",
    "Journal",
    "JournalEntry",
    # Productivity
    "Task",
    "LifestyleGoal",
    "TimeBlock",
    "GoalAlignedDay",
    # Finance
    "Expense",
    "Income",
    # Records
    "Document",
    "Relationship",
    "CommunicationLog",
    "Contact",
    "Message",
    # Assistant
    "ChatMessage",
]
