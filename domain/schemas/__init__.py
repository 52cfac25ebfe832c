"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.auth_schemas import (
    UserRegister,
    UserLogin,
    ProfileUpdate,
    UserResponse,
    TokenResponse,
)
from domain.schemas.meal_schemas import (
    MealContext,
    MealItemIn,
    MealCreate,
    MealUpdate,
    MealResponse,
    MealAnalysis,
    MealCreateResponse,
    MealListResponse,
    MealStatsResponse,
)
from domain.schemas.food_schemas import (
    FoodItemResponse,
    FoodSearchResponse,
    FoodCategory,
    FoodSuggestionsResponse,
)
from domain.schemas.mindfulness_schemas import (
    MindfulnessCheckinCreate,
    MindfulnessCheckinUpdate,
    MindfulnessCheckinResponse,
    MindfulnessUpsertResponse,
    MindfulnessStatsResponse,
)
from domain.schemas.habit_schemas import (
    HabitCreate,
    HabitUpdate,
    HabitResponse,
    EmbeddedCheckinCreate,
    HabitCheckinCreate,
    HabitCheckinUpdate,
    HabitCheckinResponse,
)
from domain.schemas.task_schemas import (
    TaskCreate,
    TaskUpdate,
    TaskResponse,
    TaskListResponse,
    TaskStatsResponse,
)
from domain.schemas.goal_schemas import (
    GoalCreate,
    GoalUpdate,
    GoalResponse,
    DailyMetricsResponse,
    StreakResponse,
    TimeBlockCreate,
    TimeBlockResponse,
)
from domain.schemas.finance_schemas import (
    ExpenseCreate,
    ExpenseResponse,
    IncomeCreate,
    IncomeResponse,
    FinanceSummaryResponse,
)
from domain.schemas.journal_schemas import (
    JournalEntryCreate,
    JournalEntryUpdate,
    JournalEntryResponse,
    JournalResponse,
    JournalStatsResponse,
    JournalAnalysis,
    JournalTrends,
)
from domain.schemas.pantry_schemas import (
    PantryItemCreate,
    PantryItemUpdate,
    PantryItemResponse,
)
from domain.schemas.chat_schemas import (
    ChatAction,
    ChatMessageRequest,
    ChatMessageResponse,
    ChatReply,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "ProfileUpdate",
    "UserResponse",
    "TokenResponse",
    "MealContext",
    "MealItemIn",
    "MealCreate",
    "MealUpdate",
    "MealResponse",
    "MealAnalysis",
    "MealCreateResponse",
    "MealListResponse",
    "MealStatsResponse",
    "FoodItemResponse",
    "FoodSearchResponse",
    "FoodCategory",
    "FoodSuggestionsResponse",
    "MindfulnessCheckinCreate",
    "MindfulnessCheckinUpdate",
    "MindfulnessCheckinResponse",
    "MindfulnessUpsertResponse",
    "MindfulnessStatsResponse",
    "HabitCreate",
    "HabitUpdate",
    "HabitResponse",
    "EmbeddedCheckinCreate",
    "HabitCheckinCreate",
    "HabitCheckinUpdate",
    "HabitCheckinResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "TaskListResponse",
    "TaskStatsResponse",
    "GoalCreate",
    "GoalUpdate",
    "GoalResponse",
    "DailyMetricsResponse",
    "StreakResponse",
    "TimeBlockCreate",
    "TimeBlockResponse",
    "ExpenseCreate",
    "ExpenseResponse",
    "IncomeCreate",
    "IncomeResponse",
    "FinanceSummaryResponse",
    "JournalEntryCreate",
    "JournalEntryUpdate",
    "JournalEntryResponse",
    "JournalResponse",
    "JournalStatsResponse",
    "JournalAnalysis",
    "JournalTrends",
    "PantryItemCreate",
    "PantryItemUpdate",
    "PantryItemResponse",
    "ChatAction",
    "ChatMessageRequest",
    "ChatMessageResponse",
    "ChatReply",
]
