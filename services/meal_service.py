from typing import List, Dict, Any, Optional, Tuple
from datetime import datetime
from sqlalchemy.orm import Session
import logging
import uuid

from app.exceptions import NotFoundError, ServiceValidationError
from domain.models import Meal
from domain.schemas.meal_schemas import MealCreate, MealUpdate, MealItemIn, MealContext
from repositories import MealRepository, FoodRepository
from services.meal_scoring import analyze_meal
from services.meal_effects import effects_summary

logger = logging.getLogger("lyfe.meals")


class MealService:
    @staticmethod
    def validate_items(items: Optional[List[MealItemIn]]) -> List[MealItemIn]:
        """Every item needs a food id and a positive gram weight.

        Raises:
            ServiceValidationError: empty list or an invalid item
        """
        if not items:
            raise ServiceValidationError("Meal must contain at least one item")
        for index, item in enumerate(items):
            if not item.food_id:
                raise ServiceValidationError(
                    "Each item must have a food_id", details={"item": index}
                )
            if item.grams is None or item.grams <= 0:
                raise ServiceValidationError(
                    "Each item must have grams greater than 0", details={"item": index}
                )
        return items

    @staticmethod
    def resolve_items(
        items: List[MealItemIn],
    ) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
        """Look up catalog foods for the items.

        Returns:
            (stored items, analysis lines)

        Raises:
            ServiceValidationError: one or more food ids are unknown
        """
        food_ids = [str(item.food_id) for item in items]
        foods = FoodRepository().get_many(food_ids)
        missing = sorted({fid for fid in food_ids if fid not in foods})
        if missing:
            raise ServiceValidationError(
                "Some food items were not found", details={"missing_food_ids": missing}
            )

        stored, lines = [], []
        for item in items:
            food = foods[str(item.food_id)]
            stored.append(
                {
                    "food_id": str(item.food_id),
                    "custom_name": item.custom_name or food.get("name"),
                    "grams": float(item.grams),
                }
            )
            lines.append({"food": food, "grams": float(item.grams)})
        return stored, lines

    @staticmethod
    def build_analysis(computed: Dict[str, Any]) -> Dict[str, Any]:
        return {**computed, "effects_summary": effects_summary(computed.get("effects") or {})}

    @staticmethod
    def create_meal(db: Session, user_id: uuid.UUID, data: MealCreate) -> Tuple[Meal, Dict[str, Any]]:
        items = MealService.validate_items(data.items)
        stored, lines = MealService.resolve_items(items)
        context = data.context.model_dump()
        computed = analyze_meal(lines, context)

        meal = Meal(
            user_id=user_id,
            ts=data.ts or datetime.utcnow(),
            items=stored,
            notes=data.notes,
            context=context,
            presence=data.presence,
            energy=data.energy,
            computed=computed,
        )
        meal = MealRepository(db).create(meal)
        logger.info(
            f"Meal {meal.meal_id} logged for user {user_id} "
            f"(score {computed['mindful_meal_score']})"
        )
        return meal, MealService.build_analysis(computed)

    @staticmethod
    def get_meal(db: Session, user_id: uuid.UUID, meal_id: uuid.UUID) -> Meal:
        meal = MealRepository(db).get_for_user(meal_id, user_id)
        if not meal:
            raise NotFoundError(f"Meal not found: {meal_id}")
        return meal

    @staticmethod
    def list_meals(
        db: Session,
        user_id: uuid.UUID,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        page: int = 1,
        limit: int = 50,
        sort_by: str = "ts",
        sort_order: str = "desc",
    ) -> Tuple[List[Meal], int]:
        """A page of meals; returns (meals, total)"""
        return MealRepository(db).list_paginated(
            user_id, start_date, end_date, page, limit, sort_by, sort_order
        )

    @staticmethod
    def update_meal(
        db: Session, user_id: uuid.UUID, meal_id: uuid.UUID, data: MealUpdate
    ) -> Meal:
        """Re-analyse when items change; otherwise patch notes/context/ratings"""
        repo = MealRepository(db)
        meal = MealService.get_meal(db, user_id, meal_id)
        changes = data.model_dump(exclude_unset=True)

        context = dict(meal.context or {})
        if changes.get("context"):
            # Validate the merged context so bad values answer 400 rather than 500
            try:
                context = MealContext(**{**context, **changes["context"]}).model_dump()
            except ValueError as e:
                raise ServiceValidationError(f"Invalid meal context: {e}")

        updates: Dict[str, Any] = {"context": context}
        if data.items is not None:
            items = MealService.validate_items(data.items)
            stored, lines = MealService.resolve_items(items)
            updates["items"] = stored
            updates["computed"] = analyze_meal(lines, context)

        for field in ("notes", "presence", "energy", "ts"):
            if field in changes:
                updates[field] = changes[field]

        meal = repo.apply_changes(meal, updates)
        logger.info(f"Meal {meal_id} updated")
        return meal

    @staticmethod
    def delete_meal(db: Session, user_id: uuid.UUID, meal_id: uuid.UUID) -> None:
        if not MealRepository(db).delete_for_user(meal_id, user_id):
            raise NotFoundError(f"Meal not found: {meal_id}")
        logger.info(f"Meal {meal_id} deleted")

    @staticmethod
    def get_stats(
        db: Session,
        user_id: uuid.UUID,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        meals = MealRepository(db).list_in_range(user_id, start_date, end_date)
        total = len(meals)
        if not total:
            return {
                "total_meals": 0,
                "average_score": 0,
                "average_calories": 0,
                "average_protein": 0,
                "average_fiber": 0,
                "protein_meals": 0,
                "veg_meals": 0,
                "high_nova_meals": 0,
            }

        def avg(values):
            return round(sum(values) / total, 1)

        computed = [m.computed or {} for m in meals]
        totals = [c.get("totals") or {} for c in computed]
        badges = [c.get("badges") or {} for c in computed]
        return {
            "total_meals": total,
            "average_score": avg([c.get("mindful_meal_score") or 0 for c in computed]),
            "average_calories": avg([t.get("kcal") or 0 for t in totals]),
            "average_protein": avg([t.get("protein") or 0 for t in totals]),
            "average_fiber": avg([t.get("fiber") or 0 for t in totals]),
            "protein_meals": sum(1 for b in badges if b.get("protein")),
            "veg_meals": sum(1 for b in badges if b.get("veg")),
            "high_nova_meals": sum(1 for b in badges if (b.get("nova") or 1) >= 4),
        }
