"""
Pantry inventory model.
"""

from sqlalchemy import Column, Text, DateTime, ForeignKey, Numeric, Boolean, Uuid, CheckConstraint
import uuid

from domain.models.database import Base, TimestampMixin, enum_column
from domain.enums import PantryCategory


class PantryItem(TimestampMixin, Base):
    """Household inventory item (fridge, essentials, snacks/breakfast)"""

    __tablename__ = "pantry_item"

    item_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    category = enum_column(PantryCategory, nullable=False)
    subcategory = Column(Text)
    item_name = Column(Text, nullable=False)
    quantity = Column(Numeric, nullable=False, default=1)
    unit = Column(Text, nullable=False, default="piece")
    last_ordered = Column(DateTime)
    is_low = Column(Boolean, nullable=False, default=False)
    low_threshold = Column(Numeric, nullable=False, default=1)
    notes = Column(Text)

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_pantry_quantity_nonneg"),
    )

    def check_low_stock(self) -> bool:
        """Recompute is_low from quantity and threshold"""
        quantity = self.quantity if self.quantity is not None else 1
        threshold = self.low_threshold if self.low_threshold is not None else 1
        self.is_low = quantity <= threshold
        return self.is_low
