"""
AI chat conversation model.
"""

from datetime import datetime
from sqlalchemy import Column, Text, DateTime, ForeignKey, JSON, Uuid, Index
import uuid

from domain.models.database import Base, enum_column
from domain.enums import ChatRole


class ChatMessage(Base):
    """One turn of the assistant conversation; assistant turns may carry actions"""

    __tablename__ = "chat_message"

    message_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    role = enum_column(ChatRole, nullable=False)
    content = Column(Text, nullable=False, default="")
    actions = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (Index("ix_chat_user_created", "user_id", "created_at"),)
