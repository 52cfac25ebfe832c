"""
Domain enums for the Lyfe application.
Contains all enumeration types used across the domain models and schemas.
"""

import enum


class FodmapLevel(str, enum.Enum):
    """FODMAP classification, ordered from unknown to worst"""

    UNKNOWN = "Unknown"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


FODMAP_ORDER = {
    FodmapLevel.UNKNOWN.value: 0,
    FodmapLevel.LOW.value: 1,
    FodmapLevel.MEDIUM.value: 2,
    FodmapLevel.HIGH.value: 3,
}


class FoodSource(str, enum.Enum):
    """Where a catalog food item came from"""

    IFCT = "ifct"
    USDA = "usda"
    OFF = "off"
    CUSTOM = "custom"


class MindfulnessAssessment(str, enum.Enum):
    """Overall assessment derived from a check-in total score"""

    BEGINNER = "beginner"
    DEVELOPING = "developing"
    MINDFUL = "mindful"
    FULLY_PRESENT = "fully_present"


class HabitQuality(str, enum.Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Priority(str, enum.Enum):
    """Priority shared by tasks, goals, documents and relationships"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class EnergyLevel(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class JournalEntryType(str, enum.Enum):
    DAILY = "daily"
    GRATITUDE = "gratitude"
    REFLECTION = "reflection"
    GOAL = "goal"
    DREAM = "dream"
    FREE_FORM = "free_form"


class Mood(str, enum.Enum):
    VERY_HAPPY = "very_happy"
    HAPPY = "happy"
    NEUTRAL = "neutral"
    SAD = "sad"
    VERY_SAD = "very_sad"
    EXCITED = "excited"
    ANXIOUS = "anxious"
    CALM = "calm"
    STRESSED = "stressed"
    GRATEFUL = "grateful"


class JournalPrivacy(str, enum.Enum):
    PRIVATE = "private"
    PUBLIC = "public"


class BeliefCategory(str, enum.Enum):
    """Belief categories accepted from journal analysis"""

    PERSONAL_VALUES = "personal_values"
    LIFE_PHILOSOPHY = "life_philosophy"
    RELATIONSHIPS = "relationships"
    WORK_ETHICS = "work_ethics"
    SPIRITUALITY = "spirituality"
    HEALTH_WELLNESS = "health_wellness"
    OTHER = "other"


class PantryCategory(str, enum.Enum):
    FRIDGE = "fridge"
    ESSENTIALS = "essentials"
    SNACKS_BREAKFAST = "snacks_breakfast"


class DocumentType(str, enum.Enum):
    MEDICAL_BILL = "medical-bill"
    PRESCRIPTION = "prescription"
    INSURANCE = "insurance"
    TAX_DOCUMENT = "tax-document"
    LEGAL = "legal"
    BIRTH_CERTIFICATE = "birth-certificate"
    PASSPORT = "passport"
    DRIVERS_LICENSE = "drivers-license"
    CONTRACT = "contract"
    RECEIPT = "receipt"
    WARRANTY = "warranty"
    MANUAL = "manual"
    OTHER = "other"


class DocumentCategory(str, enum.Enum):
    HEALTH = "health"
    FINANCE = "finance"
    LEGAL = "legal"
    PERSONAL = "personal"
    WORK = "work"
    EDUCATION = "education"
    TRAVEL = "travel"
    OTHER = "other"


class DocumentStatus(str, enum.Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"
    ARCHIVED = "archived"


class AccessLevel(str, enum.Enum):
    PRIVATE = "private"
    SHARED = "shared"
    PUBLIC = "public"


class RelationshipType(str, enum.Enum):
    FAMILY = "family"
    FRIEND = "friend"
    COLLEAGUE = "colleague"
    ROMANTIC = "romantic"
    PROFESSIONAL = "professional"
    ACQUAINTANCE = "acquaintance"
    OTHER = "other"


class RelationshipStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class CommunicationFrequency(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    RARELY = "rarely"


class CommunicationMethod(str, enum.Enum):
    PHONE = "phone"
    EMAIL = "email"
    TEXT = "text"
    VIDEO_CALL = "video-call"
    IN_PERSON = "in-person"
    SOCIAL_MEDIA = "social-media"
    OTHER = "other"


class CommunicationDirection(str, enum.Enum):
    INCOMING = "incoming"
    OUTGOING = "outgoing"
    BOTH = "both"


class ContactType(str, enum.Enum):
    MAID = "maid"
    COOK = "cook"
    DRIVER = "driver"
    GARDENER = "gardener"
    MAINTENANCE = "maintenance"
    DELIVERY = "delivery"
    SERVICE = "service"
    OTHER = "other"


class ContactCategory(str, enum.Enum):
    HOUSEHOLD = "household"
    PERSONAL = "personal"
    WORK = "work"
    HEALTH = "health"
    FINANCE = "finance"
    OTHER = "other"


class ContactStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    TERMINATED = "terminated"
    ON_HOLD = "on-hold"


class MessageType(str, enum.Enum):
    INSTRUCTION = "instruction"
    REQUEST = "request"
    FEEDBACK = "feedback"
    SCHEDULE = "schedule"
    PAYMENT = "payment"
    EMERGENCY = "emergency"
    OTHER = "other"


class DeliveryMethod(str, enum.Enum):
    IN_PERSON = "in-person"
    PHONE = "phone"
    TEXT = "text"
    EMAIL = "email"
    APP = "app"
    NOTE = "note"


class MessageStatus(str, enum.Enum):
    DRAFT = "draft"
    SENT = "sent"
    DELIVERED = "delivered"
    READ = "read"
    ACKNOWLEDGED = "acknowledged"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ChatRole(str, enum.Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatActionType(str, enum.Enum):
    """Tools the chat assistant may call"""

    CREATE_TASK = "create_task"
    CREATE_JOURNAL_ENTRY = "create_journal_entry"
    ADD_EXPENSE = "add_expense"
    SCHEDULE_TIME = "schedule_time"
    RECOMMEND_CONTENT = "recommend_content"
    SET_GOAL = "set_goal"
    PROVIDE_INSIGHT = "provide_insight"
