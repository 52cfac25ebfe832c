"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.user_repository import UserRepository
from repositories.meal_repository import MealRepository
from repositories.food_repository import FoodRepository
from repositories.mindfulness_repository import MindfulnessRepository
from repositories.habit_repository import HabitRepository, HabitCheckinRepository
from repositories.task_repository import TaskRepository
from repositories.goal_repository import (
    GoalRepository,
    TimeBlockRepository,
    GoalAlignedDayRepository,
)
from repositories.finance_repository import ExpenseRepository, IncomeRepository
from repositories.journal_repository import JournalRepository
from repositories.pantry_repository import PantryRepository
from repositories.record_repository import (
    DocumentRepository,
    RelationshipRepository,
    CommunicationLogRepository,
    ContactRepository,
    MessageRepository,
)
from repositories.chat_repository import ChatRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "MealRepository",
    "FoodRepository",
    "MindfulnessRepository",
    "HabitRepository",
    "HabitCheckinRepository",
    "TaskRepository",
    "GoalRepository",
    "TimeBlockRepository",
    "GoalAlignedDayRepository",
    "ExpenseRepository",
    "IncomeRepository",
    "JournalRepository",
    "PantryRepository",
    "DocumentRepository",
    "RelationshipRepository",
    "CommunicationLogRepository",
    "ContactRepository",
    "MessageRepository",
    "ChatRepository",
]
