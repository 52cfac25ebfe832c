"""
User account model.
"""

from sqlalchemy import Column, Text, Boolean, JSON, Uuid
import uuid

from domain.models.database import Base, TimestampMixin


class AppUser(TimestampMixin, Base):
    """User account model"""

    __tablename__ = "app_user"

    user_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # Stored lower-cased; uniqueness is therefore case-insensitive
    email = Column(Text, unique=True, nullable=False, index=True)
    name = Column(Text, nullable=False)
    password_hash = Column(Text, nullable=False)
    timezone = Column(Text, default="Asia/Kolkata")
    onboarding_completed = Column(Boolean, nullable=False, default=False)
    profile = Column(JSON, nullable=False, default=dict)
