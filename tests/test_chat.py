"""
Tests for the AI chat assistant.

The OpenAI adapter is always replaced with monkeypatch. Tool calls come
back as pending actions that only take effect through execute_action.
"""

import json
import uuid
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from test_fixtures import client, auth_user, db_session, db_user
from adapters import openai_adapter
from app.exceptions import (
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    ServiceValidationError,
)
from domain.enums import TaskStatus
from services import chat_service
from services.chat_service import ChatService
from services.task_service import TaskService


def tool_call(name, arguments, call_id="call_1"):
    return SimpleNamespace(
        id=call_id,
        function=SimpleNamespace(
            name=name,
            arguments=arguments if isinstance(arguments, str) else json.dumps(arguments),
        ),
    )


@pytest.fixture
def model_reply(monkeypatch):
    """Configure the assistant and make the next completion return ``reply``"""
    state = {"calls": []}

    def set_reply(content=None, tool_calls=None):
        def fake_completion(messages, **kwargs):
            state["calls"].append({"messages": messages, **kwargs})
            return SimpleNamespace(content=content, tool_calls=tool_calls)

        monkeypatch.setattr(openai_adapter, "chat_completion", fake_completion)
        return state

    monkeypatch.setattr(openai_adapter, "is_configured", lambda: True)
    return set_reply


# =============================================================================
# PROMPT AND TOOL PARSING
# =============================================================================


def test_system_prompt_lists_profile_and_context():
    prompt = chat_service.build_system_prompt(
        {"name": "Priya", "active_goals": ["Deep work", "Fitness"], "diet": ""},
        {"current_page": "tasks", "selection": None},
    )

    assert prompt.startswith("You are Lyfe")
    assert "- Name: Priya" in prompt
    assert "- Active goals: Deep work, Fitness" in prompt
    assert "Diet" not in prompt
    assert "- Current page: tasks" in prompt
    assert "Selection" not in prompt


def test_parse_tool_calls_skips_unknown_and_broken():
    actions = chat_service.parse_tool_calls(
        [
            tool_call("create_task", {"title": "Stretch", "description": "10 min"}, "a"),
            tool_call("launch_rocket", {}, "b"),
            tool_call("add_expense", "{not json", "c"),
        ]
    )

    assert len(actions) == 1
    assert actions[0] == {
        "type": "create_task",
        "data": {"title": "Stretch", "description": "10 min"},
        "status": "pending",
        "tool_call_id": "a",
        "result": None,
    }


def test_generate_response_needs_api_key():
    with pytest.raises(ExternalServiceError):
        chat_service.generate_response("hello")


def test_generate_response_sends_history_and_tools(model_reply):
    state = model_reply(content="Sure, here is a plan.")

    result = chat_service.generate_response(
        "Plan my evening", history=[{"role": "user", "content": "hi"}]
    )

    assert result == {"content": "Sure, here is a plan.", "actions": []}
    sent = state["calls"][0]
    assert sent["messages"][0]["role"] == "system"
    assert sent["messages"][1] == {"role": "user", "content": "hi"}
    assert sent["messages"][-1] == {"role": "user", "content": "Plan my evening"}
    assert {t["function"]["name"] for t in sent["tools"]} == {
        "create_task",
        "create_journal_entry",
        "add_expense",
        "schedule_time",
        "recommend_content",
        "set_goal",
        "provide_insight",
    }


def test_empty_content_described_from_actions(model_reply):
    model_reply(tool_calls=[tool_call("add_expense", {"amount": 12, "description": "Chai"})])

    result = chat_service.generate_response("I spent 12 on chai")

    assert result["content"] == "I've prepared that expense for tracking."


def test_empty_content_without_actions(model_reply):
    model_reply(content="")
    assert chat_service.generate_response("ok")["content"] == chat_service.DEFAULT_REPLY


# =============================================================================
# SEND AND EXECUTE
# =============================================================================


def send(db, user, model_reply, name, arguments, call_id="call_1"):
    model_reply(content="Drafted.", tool_calls=[tool_call(name, arguments, call_id)])
    reply, actions = ChatService.send_message(db, user, "please do it")
    return reply


def test_send_message_stores_both_turns(db_session, db_user, model_reply):
    reply = send(
        db_session, db_user, model_reply, "create_task", {"title": "Stretch", "description": "x"}
    )

    history = ChatService.get_history(db_session, db_user.user_id)

    assert sorted(m.role.value for m in history) == ["assistant", "user"]
    assert reply.message_id in {m.message_id for m in history}
    assert reply.actions[0]["status"] == "pending"
    # nothing happens before confirmation
    assert TaskService.list_tasks(db_session, db_user.user_id)["total_tasks"] == 0


def test_execute_create_task(db_session, db_user, model_reply):
    reply = send(
        db_session,
        db_user,
        model_reply,
        "create_task",
        {"title": "Stretch", "description": "Hamstrings", "priority": "someday", "estimated_duration": 15},
    )

    action, result = ChatService.execute_action(
        db_session, db_user.user_id, reply.message_id, "call_1"
    )

    assert action["status"] == "completed"
    task = TaskService.get_task(db_session, db_user.user_id, uuid.UUID(result["task_id"]))
    assert task.status == TaskStatus.COMPLETED
    assert task.duration_minutes == 15
    # unknown priorities fall back to medium
    assert task.priority.value == "medium"

    stored = next(
        m
        for m in ChatService.get_history(db_session, db_user.user_id)
        if m.message_id == reply.message_id
    )
    assert stored.actions[0]["status"] == "completed"
    assert stored.actions[0]["result"] == result


def test_execute_twice_conflicts(db_session, db_user, model_reply):
    reply = send(db_session, db_user, model_reply, "set_goal", {"title": "Run 5k", "description": "x"})
    ChatService.execute_action(db_session, db_user.user_id, reply.message_id, "call_1")

    with pytest.raises(ConflictError):
        ChatService.execute_action(db_session, db_user.user_id, reply.message_id, "call_1")


@pytest.mark.parametrize("name", ["recommend_content", "provide_insight"])
def test_informational_actions_not_executable(db_session, db_user, model_reply, name):
    reply = send(db_session, db_user, model_reply, name, {"type": "book"})
    with pytest.raises(ServiceValidationError):
        ChatService.execute_action(db_session, db_user.user_id, reply.message_id, "call_1")


def test_invalid_action_data_is_400(db_session, db_user, model_reply):
    reply = send(db_session, db_user, model_reply, "create_task", {"description": "no title"})

    with pytest.raises(ServiceValidationError) as exc:
        ChatService.execute_action(db_session, db_user.user_id, reply.message_id, "call_1")
    assert exc.value.message == "Action data is invalid"


def test_unknown_message_or_tool_call(db_session, db_user, model_reply):
    reply = send(db_session, db_user, model_reply, "set_goal", {"title": "Read", "description": "x"})

    with pytest.raises(NotFoundError):
        ChatService.execute_action(db_session, db_user.user_id, uuid.uuid4(), "call_1")
    with pytest.raises(NotFoundError):
        ChatService.execute_action(db_session, db_user.user_id, reply.message_id, "call_9")


def test_execute_add_expense_rounds_amount(db_session, db_user, model_reply):
    reply = send(
        db_session, db_user, model_reply, "add_expense", {"amount": 12.5, "description": "Chai"}
    )

    _, result = ChatService.execute_action(db_session, db_user.user_id, reply.message_id, "call_1")

    assert Decimal(result["amount"]) == Decimal("12.50")


def test_execute_schedule_time_uses_local_day(db_session, db_user, model_reply):
    reply = send(
        db_session,
        db_user,
        model_reply,
        "schedule_time",
        {"title": "Reading", "start_time": "2025-03-10T20:00:00Z", "duration": 30},
    )

    _, result = ChatService.execute_action(db_session, db_user.user_id, reply.message_id, "call_1")

    assert result["date"] == date(2025, 3, 11).isoformat()


@pytest.mark.parametrize("duration", ["half an hour", ["30"]])
def test_execute_schedule_time_rejects_bad_duration(db_session, db_user, model_reply, duration):
    reply = send(
        db_session,
        db_user,
        model_reply,
        "schedule_time",
        {"title": "Reading", "start_time": "2025-03-10T20:00:00Z", "duration": duration},
    )

    with pytest.raises(ServiceValidationError) as exc:
        ChatService.execute_action(db_session, db_user.user_id, reply.message_id, "call_1")
    assert exc.value.message.startswith("Invalid duration")


def test_execute_journal_entry_defaults_title(db_session, db_user, model_reply):
    reply = send(
        db_session,
        db_user,
        model_reply,
        "create_journal_entry",
        {"content": "Grateful for a slow morning.", "mood": "grateful", "type": "not-a-type"},
    )

    _, result = ChatService.execute_action(db_session, db_user.user_id, reply.message_id, "call_1")

    assert result["title"] == "Grateful for a slow morning."


def test_clear_history(db_session, db_user, model_reply):
    send(db_session, db_user, model_reply, "set_goal", {"title": "Read", "description": "x"})
    assert ChatService.clear_history(db_session, db_user.user_id) == 2
    assert ChatService.get_history(db_session, db_user.user_id) == []


# =============================================================================
# ROUTES
# =============================================================================


def test_message_route_without_key_is_503(db_session, auth_user):
    r = client.post("/api/ai-chat/message", json={"message": "hello"})

    assert r.status_code == 503
    assert r.json()["error"]["code"] == "EXTERNAL_SERVICE_ERROR"


def test_execute_route_conflict(monkeypatch, auth_user):
    def already_done(db, uid, message_id, tool_call_id):
        raise ConflictError("Action has already been executed")

    monkeypatch.setattr(ChatService, "execute_action", already_done)

    r = client.post(
        "/api/ai-chat/actions/execute",
        json={"message_id": str(uuid.uuid4()), "tool_call_id": "call_1"},
    )

    assert r.status_code == 409
    assert r.json()["error"]["code"] == "CONFLICT"


def test_message_route_rejects_empty_message(auth_user):
    r = client.post("/api/ai-chat/message", json={"message": ""})
    assert r.status_code == 422
