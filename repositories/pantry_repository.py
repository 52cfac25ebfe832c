"""
Pantry Repository - Data access layer for pantry operations
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy import and_

from repositories.base import BaseRepository
from domain.models import PantryItem


class PantryRepository(BaseRepository[PantryItem]):
    """Repository for pantry item data access"""

    id_field = "item_id"

    def __init__(self, db: Session):
        super().__init__(db, PantryItem)

    def get_by_user_id(
        self,
        user_id: UUID,
        category: Optional[str] = None,
        subcategory: Optional[str] = None,
        is_low: Optional[bool] = None,
    ) -> List[PantryItem]:
        """Get a user's pantry items, optionally filtered"""
        query = self.db.query(PantryItem).filter(PantryItem.user_id == user_id)
        if category:
            query = query.filter(PantryItem.category == category)
        if subcategory:
            query = query.filter(PantryItem.subcategory == subcategory)
        if is_low is not None:
            query = query.filter(PantryItem.is_low.is_(is_low))
        return query.order_by(PantryItem.category, PantryItem.item_name).all()

    def get_low_stock(self, user_id: UUID) -> List[PantryItem]:
        return (
            self.db.query(PantryItem)
            .filter(and_(PantryItem.user_id == user_id, PantryItem.is_low.is_(True)))
            .order_by(PantryItem.category, PantryItem.item_name)
            .all()
        )

    def save(self, item: PantryItem, commit: bool = True) -> PantryItem:
        """Persist an item, recomputing its low-stock flag first"""
        item.check_low_stock()
        self.db.add(item)
        if commit:
            self.db.commit()
            self.db.refresh(item)
        return item
