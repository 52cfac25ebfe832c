"""AI assistant chat routes"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import logging
from typing import List

from api.dependencies import get_db, get_current_user
from api.responses import success_response
from domain.models import AppUser
from domain.schemas.chat_schemas import (
    ChatMessageRequest,
    ChatMessageResponse,
    ChatReply,
    ExecuteActionRequest,
    ExecuteActionResponse,
)
from services.chat_service import ChatService

router = APIRouter(prefix="/ai-chat", tags=["AI Chat"])
logger = logging.getLogger("lyfe.api.ai_chat")


@router.post("/message", response_model=ChatReply)
def send_message(
    payload: ChatMessageRequest,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Send a message to the assistant.

    Suggested actions (create a task, log an expense, ...) come back with
    ``status: "pending"``; nothing is written until the client confirms one
    through ``/actions/execute``. Answers 503 when no OpenAI key is set.
    """
    reply, actions = ChatService.send_message(db, user, payload.message, payload.context)
    return {"reply": reply, "actions": actions}


@router.get("/history", response_model=List[ChatMessageResponse])
def chat_history(
    limit: int = Query(50, ge=1, le=200),
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ChatService.get_history(db, user.user_id, limit)


@router.delete("/history")
def clear_history(user: AppUser = Depends(get_current_user), db: Session = Depends(get_db)):
    deleted = ChatService.clear_history(db, user.user_id)
    return success_response(data={"deleted": deleted}, message="Chat history cleared")


@router.post("/actions/execute", response_model=ExecuteActionResponse)
def execute_action(
    payload: ExecuteActionRequest,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    action, result = ChatService.execute_action(
        db, user.user_id, payload.message_id, payload.tool_call_id
    )
    return {"action": action, "result": result}
