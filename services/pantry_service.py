from typing import List, Dict, Any, Optional
from datetime import datetime
from sqlalchemy.orm import Session
import logging
import uuid

from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import PantryCategory
from domain.models import PantryItem
from domain.schemas.pantry_schemas import (
    PantryItemCreate,
    PantryItemUpdate,
    PantryBulkUpdateItem,
)
from repositories import PantryRepository

logger = logging.getLogger("lyfe.pantry")


class PantryService:
    @staticmethod
    def _get_item(db: Session, user_id: uuid.UUID, item_id: uuid.UUID) -> PantryItem:
        item = PantryRepository(db).get_for_user(item_id, user_id)
        if not item:
            raise NotFoundError(f"Pantry item not found: {item_id}")
        return item

    @staticmethod
    def get_pantry(
        db: Session,
        user_id: uuid.UUID,
        category: Optional[PantryCategory] = None,
        subcategory: Optional[str] = None,
        is_low: Optional[bool] = None,
    ) -> List[PantryItem]:
        return PantryRepository(db).get_by_user_id(user_id, category, subcategory, is_low)

    @staticmethod
    def get_summary(db: Session, user_id: uuid.UUID) -> List[Dict[str, Any]]:
        """Items grouped by category with total and low-stock counts"""
        groups: Dict[PantryCategory, List[PantryItem]] = {}
        for item in PantryRepository(db).get_by_user_id(user_id):
            groups.setdefault(item.category, []).append(item)
        return [
            {
                "category": category,
                "total_items": len(items),
                "low_stock": sum(1 for i in items if i.is_low),
                "items": items,
            }
            for category, items in groups.items()
        ]

    @staticmethod
    def get_low_stock(db: Session, user_id: uuid.UUID) -> List[PantryItem]:
        return PantryRepository(db).get_low_stock(user_id)

    @staticmethod
    def add_item(db: Session, user_id: uuid.UUID, data: PantryItemCreate) -> PantryItem:
        if not data.item_name.strip():
            raise ServiceValidationError("item_name is required")
        item = PantryItem(user_id=user_id, **data.model_dump())
        item = PantryRepository(db).save(item)
        logger.info(f"Pantry item {item.item_id} ({item.item_name}) added for user {user_id}")
        return item

    @staticmethod
    def update_item(
        db: Session, user_id: uuid.UUID, item_id: uuid.UUID, data: PantryItemUpdate
    ) -> PantryItem:
        item = PantryService._get_item(db, user_id, item_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None or field in ("subcategory", "notes"):
                setattr(item, field, value)
        return PantryRepository(db).save(item)

    @staticmethod
    def mark_ordered_today(db: Session, user_id: uuid.UUID, item_id: uuid.UUID) -> PantryItem:
        item = PantryService._get_item(db, user_id, item_id)
        item.last_ordered = datetime.utcnow()
        return PantryRepository(db).save(item)

    @staticmethod
    def delete_item(db: Session, user_id: uuid.UUID, item_id: uuid.UUID) -> None:
        if not PantryRepository(db).delete_for_user(item_id, user_id):
            raise NotFoundError(f"Pantry item not found: {item_id}")

    @staticmethod
    def bulk_update(
        db: Session, user_id: uuid.UUID, updates: List[PantryBulkUpdateItem]
    ) -> List[PantryItem]:
        """Apply several item updates in one transaction.

        Every item is looked up before anything is written, so one unknown
        id leaves the pantry untouched.

        Raises:
            NotFoundError: an item id does not belong to the user
        """
        repo = PantryRepository(db)
        pairs = [(PantryService._get_item(db, user_id, u.item_id), u) for u in updates]
        try:
            for item, update in pairs:
                changes = update.model_dump(exclude_unset=True, exclude={"item_id"})
                for field, value in changes.items():
                    if value is not None or field in ("subcategory", "notes"):
                        setattr(item, field, value)
                repo.save(item, commit=False)
            db.commit()
        except Exception:
            db.rollback()
            raise
        for item, _ in pairs:
            db.refresh(item)
        logger.info(f"Bulk updated {len(pairs)} pantry items for user {user_id}")
        return [item for item, _ in pairs]

    @staticmethod
    def add_multiple(
        db: Session, user_id: uuid.UUID, items: List[PantryItemCreate]
    ) -> List[PantryItem]:
        repo = PantryRepository(db)
        created = []
        try:
            for data in items:
                created.append(repo.save(PantryItem(user_id=user_id, **data.model_dump()), commit=False))
            db.commit()
        except Exception:
            db.rollback()
            raise
        for item in created:
            db.refresh(item)
        logger.info(f"Added {len(created)} pantry items for user {user_id}")
        return created
