from typing import List, Dict, Any, Optional, Tuple
from datetime import datetime
from decimal import Decimal, InvalidOperation
from sqlalchemy.orm import Session
from pydantic import ValidationError
import json
import logging
import uuid

from app.exceptions import (
    ExternalServiceError,
    NotFoundError,
    ServiceValidationError,
    ConflictError,
)
from adapters import openai_adapter
from domain.enums import ChatRole, ChatActionType, JournalEntryType, Mood, Priority
from domain.models import AppUser, ChatMessage
from domain.schemas.finance_schemas import ExpenseCreate
from domain.schemas.goal_schemas import GoalCreate, TimeBlockCreate
from domain.schemas.journal_schemas import JournalEntryCreate
from domain.schemas.task_schemas import TaskCreate
from repositories import ChatRepository, GoalRepository
from services.finance_service import FinanceService
from services.goal_service import GoalService
from services.journal_service import JournalService
from services.task_service import TaskService

logger = logging.getLogger("lyfe.chat")

HISTORY_TURNS = 20

INSTRUCTIONS = """You are Lyfe, a warm and practical lifestyle assistant. You help the user \
manage their time, tasks, energy, money, meals and wellbeing.

- Work out what the user is trying to achieve and give specific, actionable advice.
- Use the tools to propose tasks, journal entries, expenses, time blocks and goals. \
The user confirms each proposal before it is saved.
- When you use a tool, still answer with meaningful content: say what you proposed and why.
- Ask a clarifying question when a request is ambiguous.
- Take the user's energy, mood and time of day into account.
- Celebrate progress."""


def _function(name: str, description: str, properties: Dict[str, Any], required: List[str]):
    return {
        "type": "function",
        "function": {
            "name": name,
            "description": description,
            "parameters": {"type": "object", "properties": properties, "required": required},
        },
    }


TOOLS = [
    _function(
        "create_task",
        "Log a task for the user",
        {
            "title": {"type": "string"},
            "description": {"type": "string"},
            "priority": {"type": "string", "enum": [p.value for p in Priority]},
            "category": {"type": "string", "description": "work, personal, health, ..."},
            "due_date": {"type": "string", "description": "ISO 8601 date-time"},
            "estimated_duration": {"type": "number", "description": "Minutes"},
        },
        ["title", "description"],
    ),
    _function(
        "create_journal_entry",
        "Write a journal entry for the user",
        {
            "title": {"type": "string"},
            "content": {"type": "string"},
            "type": {"type": "string", "enum": [t.value for t in JournalEntryType]},
            "mood": {"type": "string", "enum": [m.value for m in Mood]},
            "tags": {"type": "array", "items": {"type": "string"}},
        },
        ["content"],
    ),
    _function(
        "add_expense",
        "Track an expense",
        {
            "amount": {"type": "number"},
            "description": {"type": "string"},
            "category": {"type": "string"},
            "date": {"type": "string", "description": "ISO 8601 date, defaults to today"},
        },
        ["amount", "description"],
    ),
    _function(
        "schedule_time",
        "Block time for an activity",
        {
            "title": {"type": "string"},
            "description": {"type": "string"},
            "start_time": {"type": "string", "description": "ISO 8601 date-time"},
            "duration": {"type": "number", "description": "Minutes"},
            "type": {
                "type": "string",
                "enum": ["work", "personal", "health", "social", "learning"],
            },
        },
        ["title", "start_time", "duration"],
    ),
    _function(
        "recommend_content",
        "Recommend books, films, podcasts or courses. Put the actual "
        "recommendations in your reply.",
        {
            "type": {
                "type": "string",
                "enum": ["book", "movie", "tv_show", "podcast", "article", "course"],
            },
            "category": {"type": "string"},
            "mood": {"type": "string"},
            "difficulty": {"type": "string", "enum": ["beginner", "intermediate", "advanced"]},
            "time_investment": {"type": "string", "enum": ["quick", "moderate", "extensive"]},
        },
        ["type"],
    ),
    _function(
        "set_goal",
        "Set a new lifestyle goal",
        {
            "title": {"type": "string"},
            "description": {"type": "string"},
            "category": {"type": "string"},
            "target_date": {"type": "string", "description": "ISO 8601 date"},
            "milestones": {"type": "array", "items": {"type": "string"}},
        },
        ["title", "description"],
    ),
    _function(
        "provide_insight",
        "Share a personalised insight with recommendations",
        {
            "insight_type": {
                "type": "string",
                "enum": ["productivity", "wellness", "finance", "learning", "relationships"],
            },
            "context": {"type": "string"},
            "recommendations": {"type": "array", "items": {"type": "string"}},
        },
        ["insight_type", "recommendations"],
    ),
]

ACTION_DESCRIPTIONS = {
    ChatActionType.RECOMMEND_CONTENT: "I've looked at your preferences and found some recommendations for you.",
    ChatActionType.CREATE_TASK: "I've drafted a task for you based on your request.",
    ChatActionType.CREATE_JOURNAL_ENTRY: "I've drafted a journal entry for you.",
    ChatActionType.ADD_EXPENSE: "I've prepared that expense for tracking.",
    ChatActionType.SCHEDULE_TIME: "I've prepared a time block for you.",
    ChatActionType.SET_GOAL: "I've drafted a new goal for you.",
    ChatActionType.PROVIDE_INSIGHT: "I've put together some insights for you.",
}
DEFAULT_REPLY = "I've processed your request. Is there anything else I can help you with?"

EXECUTABLE_ACTIONS = {
    ChatActionType.CREATE_TASK,
    ChatActionType.CREATE_JOURNAL_ENTRY,
    ChatActionType.ADD_EXPENSE,
    ChatActionType.SET_GOAL,
    ChatActionType.SCHEDULE_TIME,
}


def build_system_prompt(
    user_profile: Optional[Dict[str, Any]] = None,
    user_context: Optional[Dict[str, Any]] = None,
) -> str:
    """Persona instructions followed by what we know about the user"""
    prompt = INSTRUCTIONS
    profile_lines = [
        f"- {key.replace('_', ' ').capitalize()}: {', '.join(map(str, value)) if isinstance(value, list) else value}"
        for key, value in (user_profile or {}).items()
        if value not in (None, "", [], {})
    ]
    if profile_lines:
        prompt += "\n\nUser profile:\n" + "\n".join(profile_lines)

    context_lines = [
        f"- {key.replace('_', ' ').capitalize()}: {value}"
        for key, value in (user_context or {}).items()
        if value not in (None, "", [], {})
    ]
    if context_lines:
        prompt += "\n\nCurrent context:\n" + "\n".join(context_lines)
    return prompt


def parse_tool_calls(tool_calls) -> List[Dict[str, Any]]:
    """Turn SDK tool calls into pending actions; unknown tools or bad JSON are skipped"""
    actions = []
    for call in tool_calls or []:
        try:
            action_type = ChatActionType(call.function.name)
            data = json.loads(call.function.arguments or "{}")
        except ValueError as e:
            logger.warning(f"Ignoring tool call {getattr(call, 'id', '?')}: {e}")
            continue
        actions.append(
            {
                "type": action_type.value,
                "data": data if isinstance(data, dict) else {},
                "status": "pending",
                "tool_call_id": call.id,
                "result": None,
            }
        )
    return actions


def generate_response(
    message: str,
    history: Optional[List[Dict[str, str]]] = None,
    user_profile: Optional[Dict[str, Any]] = None,
    user_context: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Ask the model for a reply; tool calls come back as pending actions.

    Returns:
        {"content": str, "actions": [...]}

    Raises:
        ExternalServiceError: no API key or the completion failed
    """
    if not openai_adapter.is_configured():
        raise ExternalServiceError("AI assistant is not configured (missing OPENAI_API_KEY)")

    messages = [{"role": "system", "content": build_system_prompt(user_profile, user_context)}]
    messages.extend(history or [])
    messages.append({"role": "user", "content": message})

    reply = openai_adapter.chat_completion(messages, tools=TOOLS)
    actions = parse_tool_calls(getattr(reply, "tool_calls", None))

    content = reply.content
    if not content:
        if actions:
            content = " ".join(
                ACTION_DESCRIPTIONS[ChatActionType(a["type"])] for a in actions
            )
        else:
            content = DEFAULT_REPLY
    return {"content": content, "actions": actions}


def _parse_datetime(value: Any) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        raise ServiceValidationError(f"Invalid date: {value}")


class ChatService:
    @staticmethod
    def _user_profile(db: Session, user: AppUser) -> Dict[str, Any]:
        profile = dict(user.profile or {})
        profile["name"] = user.name
        profile["active_goals"] = [g.name for g in GoalRepository(db).list_active(user.user_id)]
        return profile

    @staticmethod
    def send_message(
        db: Session, user: AppUser, message: str, context: Optional[Dict[str, Any]] = None
    ) -> Tuple[ChatMessage, List[Dict[str, Any]]]:
        repo = ChatRepository(db)
        history = [
            {"role": turn.role.value, "content": turn.content}
            for turn in repo.history(user.user_id, HISTORY_TURNS)
        ]
        result = generate_response(
            message, history, ChatService._user_profile(db, user), context
        )

        repo.create(ChatMessage(user_id=user.user_id, role=ChatRole.USER, content=message))
        reply = repo.create(
            ChatMessage(
                user_id=user.user_id,
                role=ChatRole.ASSISTANT,
                content=result["content"],
                actions=result["actions"],
            )
        )
        logger.info(
            f"Assistant replied to user {user.user_id} with {len(result['actions'])} action(s)"
        )
        return reply, result["actions"]

    @staticmethod
    def get_history(db: Session, user_id: uuid.UUID, limit: int = 50) -> List[ChatMessage]:
        return ChatRepository(db).history(user_id, limit)

    @staticmethod
    def clear_history(db: Session, user_id: uuid.UUID) -> int:
        return ChatRepository(db).clear(user_id)

    @staticmethod
    def execute_action(
        db: Session, user_id: uuid.UUID, message_id: uuid.UUID, tool_call_id: str
    ) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """Carry out a pending action from an assistant message.

        Returns:
            (updated action, result payload)

        Raises:
            NotFoundError: unknown message or tool call
            ConflictError: the action already ran
            ServiceValidationError: the action is informational only or its data is invalid
        """
        repo = ChatRepository(db)
        message = repo.get_for_user(message_id, user_id)
        if not message or message.role != ChatRole.ASSISTANT:
            raise NotFoundError(f"Assistant message not found: {message_id}")

        actions = [dict(a) for a in message.actions or []]
        index = next(
            (i for i, a in enumerate(actions) if a.get("tool_call_id") == tool_call_id), None
        )
        if index is None:
            raise NotFoundError(f"Action not found: {tool_call_id}")
        action = actions[index]
        if action.get("status") != "pending":
            raise ConflictError("Action has already been executed")

        action_type = ChatActionType(action["type"])
        if action_type not in EXECUTABLE_ACTIONS:
            raise ServiceValidationError(f"Action {action_type.value} cannot be executed")

        try:
            result = ChatService._run(db, user_id, action_type, action.get("data") or {})
        except ValidationError as e:
            raise ServiceValidationError(
                "Action data is invalid", details={"errors": e.errors(include_url=False)}
            )

        action["status"] = "completed"
        action["result"] = result
        actions[index] = action
        repo.apply_changes(message, {"actions": actions})
        logger.info(f"Executed {action_type.value} action {tool_call_id} for user {user_id}")
        return action, result

    @staticmethod
    def _run(
        db: Session, user_id: uuid.UUID, action_type: ChatActionType, data: Dict[str, Any]
    ) -> Dict[str, Any]:
        if action_type == ChatActionType.CREATE_TASK:
            priority = data.get("priority")
            task = TaskService.create_task(
                db,
                user_id,
                TaskCreate(
                    title=data.get("title") or "",
                    description=data.get("description"),
                    priority=priority if priority in {p.value for p in Priority} else Priority.MEDIUM,
                    category=data.get("category"),
                    due_date=_parse_datetime(data.get("due_date")),
                    duration_minutes=data.get("estimated_duration"),
                ),
            )
            return {"task_id": str(task.task_id), "title": task.title}

        if action_type == ChatActionType.CREATE_JOURNAL_ENTRY:
            content = data.get("content") or ""
            fields: Dict[str, Any] = {
                "title": data.get("title") or content[:50] or "Journal entry",
                "content": content,
                "tags": data.get("tags") or [],
            }
            if data.get("type") in {t.value for t in JournalEntryType}:
                fields["type"] = data["type"]
            if data.get("mood") in {m.value for m in Mood}:
                fields["mood"] = data["mood"]
            entry = JournalService.add_entry(db, user_id, JournalEntryCreate(**fields))
            return {"entry_id": str(entry.entry_id), "title": entry.title}

        if action_type == ChatActionType.ADD_EXPENSE:
            try:
                amount = Decimal(str(data.get("amount"))).quantize(Decimal("0.01"))
            except InvalidOperation:
                raise ServiceValidationError(f"Invalid amount: {data.get('amount')}")
            expense = FinanceService.create_expense(
                db,
                user_id,
                ExpenseCreate(
                    amount=amount,
                    category=data.get("category") or "other",
                    description=data.get("description"),
                    date=_parse_datetime(data.get("date")),
                ),
            )
            return {"expense_id": str(expense.expense_id), "amount": str(expense.amount)}

        if action_type == ChatActionType.SET_GOAL:
            goal = GoalService.create_goal(
                db,
                user_id,
                GoalCreate(
                    name=data.get("title") or "",
                    description=data.get("description"),
                    category=data.get("category"),
                ),
            )
            return {"goal_id": str(goal.goal_id), "name": goal.name}

        # schedule_time
        try:
            duration = int(data.get("duration") or 0)
        except (TypeError, ValueError):
            raise ServiceValidationError(f"Invalid duration: {data.get('duration')}")
        block = GoalService.create_block(
            db,
            user_id,
            TimeBlockCreate(
                title=data.get("title"),
                start_time=_parse_datetime(data.get("start_time")),
                duration=duration,
            ),
        )
        return {"block_id": str(block.block_id), "date": block.date.isoformat()}
