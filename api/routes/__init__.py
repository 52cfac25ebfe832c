"""API routes package"""

from . import (
    auth,
    meals,
    food,
    mindfulness,
    habits,
    tasks,
    goals,
    time_blocks,
    finance,
    journal,
    ai_chat,
    pantry,
    documents,
    relationships,
    communication,
    health,
)

__all__ = [
    "auth",
    "meals",
    "food",
    "mindfulness",
    "habits",
    "tasks",
    "goals",
    "time_blocks",
    "finance",
    "journal",
    "ai_chat",
    "pantry",
    "documents",
    "relationships",
    "communication",
    "health",
]
