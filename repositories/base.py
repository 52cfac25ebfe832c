"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Generic, TypeVar, Optional, List, Type, Any, Dict
from uuid import UUID
from sqlalchemy.orm import Session
from abc import ABC

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common CRUD operations.
    All repositories should inherit from this class.

    Every user-owned table carries a ``user_id`` column; the ``*_for_user``
    helpers scope reads and deletes to the owner so a caller can never see
    another user's rows.
    """

    #: name of the primary-key column (meal_id, task_id, ...)
    id_field: str = ""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    @property
    def _id_column(self):
        if not self.id_field:
            raise NotImplementedError(
                f"{self.__class__.__name__} must set id_field to its primary key column"
            )
        return getattr(self.model, self.id_field)

    def get_by_id(self, entity_id: UUID) -> Optional[ModelType]:
        """Get entity by primary key"""
        return self.db.query(self.model).filter(self._id_column == entity_id).first()

    def get_for_user(self, entity_id: UUID, user_id: UUID) -> Optional[ModelType]:
        """Get entity by primary key, only if it belongs to the user"""
        return (
            self.db.query(self.model)
            .filter(self._id_column == entity_id, self.model.user_id == user_id)
            .first()
        )

    def list_for_user(self, user_id: UUID, skip: int = 0, limit: int = 100) -> List[ModelType]:
        """All of a user's entities with pagination"""
        return (
            self.db.query(self.model)
            .filter(self.model.user_id == user_id)
            .offset(skip)
            .limit(limit)
            .all()
        )

    def create(self, entity: ModelType) -> ModelType:
        """Create new entity"""
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def update(self, entity: ModelType) -> ModelType:
        """Update existing entity"""
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def apply_changes(self, entity: ModelType, changes: Dict[str, Any]) -> ModelType:
        """Set every key of ``changes`` on the entity and commit"""
        for field, value in changes.items():
            setattr(entity, field, value)
        return self.update(entity)

    def delete_entity(self, entity: ModelType) -> None:
        self.db.delete(entity)
        self.db.commit()

    def delete_for_user(self, entity_id: UUID, user_id: UUID) -> bool:
        """Delete a user's entity by ID; False when it does not exist"""
        entity = self.get_for_user(entity_id, user_id)
        if entity:
            self.delete_entity(entity)
            return True
        return False
