"""
Chat Repository - stored assistant conversation turns
"""

from typing import List
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import ChatMessage


class ChatRepository(BaseRepository[ChatMessage]):
    id_field = "message_id"

    def __init__(self, db: Session):
        super().__init__(db, ChatMessage)

    def history(self, user_id: UUID, limit: int = 50) -> List[ChatMessage]:
        """Latest ``limit`` turns in chronological order"""
        rows = (
            self.db.query(ChatMessage)
            .filter(ChatMessage.user_id == user_id)
            .order_by(ChatMessage.created_at.desc())
            .limit(limit)
            .all()
        )
        return list(reversed(rows))

    def clear(self, user_id: UUID) -> int:
        count = (
            self.db.query(ChatMessage)
            .filter(ChatMessage.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return count
