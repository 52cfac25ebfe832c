from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime
from uuid import UUID

from domain.enums import ChatRole, ChatActionType


class ChatAction(BaseModel):
    type: ChatActionType
    data: Dict[str, Any] = Field(default_factory=dict)
    status: str = "pending"
    tool_call_id: Optional[str] = None
    result: Optional[Dict[str, Any]] = None


class ChatMessageRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=4000)
    context: Dict[str, Any] = Field(
        default_factory=dict, description="Client context (current page, selections)"
    )


class ChatMessageResponse(BaseModel):
    message_id: UUID
    role: ChatRole
    content: str
    actions: List[ChatAction] = Field(default_factory=list)
    created_at: datetime

    model_config = {"from_attributes": True}


class ChatReply(BaseModel):
    reply: ChatMessageResponse
    actions: List[ChatAction] = Field(default_factory=list)


class ExecuteActionRequest(BaseModel):
    message_id: UUID
    tool_call_id: str


class ExecuteActionResponse(BaseModel):
    action: ChatAction
    result: Dict[str, Any]
