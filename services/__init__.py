"""Services package - Business logic layer"""

from services.auth_service import AuthService
from services.meal_service import MealService
from services.food_service import FoodService
from services.mindfulness_service import MindfulnessService
from services.habit_service import HabitService
from services.task_service import TaskService
from services.goal_service import GoalService
from services.finance_service import FinanceService
from services.journal_service import JournalService
from services.journal_analysis_service import JournalAnalysisService
from services.chat_service import ChatService
from services.pantry_service import PantryService
from services.record_service import (
    DocumentService,
    RelationshipService,
    CommunicationService,
)

# Note: meal_scoring, meal_effects and seed_pipeline hold plain functions, not classes

__all__ = [
    "AuthService",
    "MealService",
    "FoodService",
    "MindfulnessService",
    "HabitService",
    "TaskService",
    "GoalService",
    "FinanceService",
    "JournalService",
    "JournalAnalysisService",
    "ChatService",
    "PantryService",
    "DocumentService",
    "RelationshipService",
    "CommunicationService",
]
