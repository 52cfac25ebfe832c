"""
Finance models (expenses and income).
"""

from datetime import datetime
from sqlalchemy import Column, Text, DateTime, ForeignKey, Numeric, Boolean, JSON, Uuid, CheckConstraint
import uuid

from domain.models.database import Base, TimestampMixin


class Expense(TimestampMixin, Base):
    __tablename__ = "expense"

    expense_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(Text, nullable=False)
    description = Column(Text)
    date = Column(DateTime, nullable=False, default=datetime.utcnow)
    payment_method = Column(Text)
    tags = Column(JSON, nullable=False, default=list)

    __table_args__ = (CheckConstraint("amount > 0", name="ck_expense_amount_pos"),)


class Income(TimestampMixin, Base):
    __tablename__ = "income"

    income_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    amount = Column(Numeric(12, 2), nullable=False)
    source = Column(Text, nullable=False)
    description = Column(Text)
    date = Column(DateTime, nullable=False, default=datetime.utcnow)
    recurring = Column(Boolean, nullable=False, default=False)

    __table_args__ = (CheckConstraint("amount > 0", name="ck_income_amount_pos"),)
