"""
Tests for the household pantry.

This test suite covers pantry inventory operations:
- Adding items to the fridge, essentials and snacks/breakfast shelves
- Editing items with low-stock recomputation
- Marking items as ordered today
- All-or-nothing bulk updates
- Category summary and low-stock views
"""

import uuid
from decimal import Decimal

import pytest

from test_fixtures import client, auth_user, db_session, db_user, make_pantry_item
from app.exceptions import NotFoundError
from domain.enums import PantryCategory
from domain.schemas.pantry_schemas import (
    PantryBulkUpdateItem,
    PantryItemCreate,
    PantryItemUpdate,
)
from services.pantry_service import PantryService


# =============================================================================
# PANTRY MANAGEMENT FLOW
# =============================================================================

EXAMPLE_PANTRY_FLOW = """
Pantry Management Flow
======================

1. ADD ITEM
   POST /api/pantry
   {"category": "essentials", "item_name": "Toor dal", "quantity": 2, "unit": "kg",
    "low_threshold": 1}

   Response: 201 Created, "is_low": false

2. USE IT UP
   PUT /api/pantry/{item_id}
   {"quantity": 0.5}

   Response: 200 OK, "is_low": true (0.5 <= 1)

3. REORDER
   PATCH /api/pantry/{item_id}/ordered-today
   GET   /api/pantry/low-stock

4. BULK UPDATE AFTER A GROCERY RUN
   PATCH /api/pantry/bulk-update
   {"items": [{"item_id": "...", "quantity": 3}, {"item_id": "...", "quantity": 6}]}

   An unknown item id answers 404 and nothing is changed.
"""


def stock(db, user_id, name="Toor dal", quantity="2", threshold="1", category=PantryCategory.ESSENTIALS, **extra):
    return PantryService.add_item(
        db,
        user_id,
        PantryItemCreate(
            category=category,
            item_name=name,
            quantity=Decimal(quantity),
            unit="kg",
            low_threshold=Decimal(threshold),
            **extra,
        ),
    )


# =============================================================================
# PANTRY CRUD TESTS
# =============================================================================


def test_add_item_computes_low_flag(db_session, db_user):
    """
    Verifies:
    - Items above the threshold are not low
    - Items at the threshold are low
    """
    plenty = stock(db_session, db_user.user_id, quantity="2", threshold="1")
    at_threshold = stock(db_session, db_user.user_id, "Ghee", quantity="1", threshold="1")

    assert plenty.is_low is False
    assert at_threshold.is_low is True


def test_update_recomputes_low_flag(db_session, db_user):
    item = stock(db_session, db_user.user_id)

    item = PantryService.update_item(
        db_session, db_user.user_id, item.item_id, PantryItemUpdate(quantity=Decimal("0.5"))
    )
    assert item.is_low is True

    item = PantryService.update_item(
        db_session, db_user.user_id, item.item_id, PantryItemUpdate(low_threshold=Decimal("0.25"))
    )
    assert item.is_low is False


def test_update_can_clear_notes(db_session, db_user):
    item = stock(db_session, db_user.user_id, notes="Buy organic")

    item = PantryService.update_item(
        db_session, db_user.user_id, item.item_id, PantryItemUpdate(notes=None)
    )

    assert item.notes is None
    # quantity was not sent, so it is unchanged
    assert item.quantity == Decimal("2")


def test_mark_ordered_today(db_session, db_user):
    item = stock(db_session, db_user.user_id)
    assert item.last_ordered is None

    item = PantryService.mark_ordered_today(db_session, db_user.user_id, item.item_id)

    assert item.last_ordered is not None


def test_items_scoped_to_owner(db_session, db_user):
    item = stock(db_session, db_user.user_id)
    stranger = uuid.uuid4()

    with pytest.raises(NotFoundError):
        PantryService.update_item(db_session, stranger, item.item_id, PantryItemUpdate(unit="g"))
    with pytest.raises(NotFoundError):
        PantryService.delete_item(db_session, stranger, item.item_id)

    PantryService.delete_item(db_session, db_user.user_id, item.item_id)
    assert PantryService.get_pantry(db_session, db_user.user_id) == []


# =============================================================================
# FILTERS, SUMMARY AND LOW STOCK
# =============================================================================


def test_filters_and_low_stock(db_session, db_user):
    uid = db_user.user_id
    stock(db_session, uid, "Milk", quantity="0.5", category=PantryCategory.FRIDGE, subcategory="dairy")
    stock(db_session, uid, "Curd", quantity="3", category=PantryCategory.FRIDGE, subcategory="dairy")
    stock(db_session, uid, "Poha", quantity="0", category=PantryCategory.SNACKS_BREAKFAST)

    fridge = PantryService.get_pantry(db_session, uid, category=PantryCategory.FRIDGE)
    assert [i.item_name for i in fridge] == ["Curd", "Milk"]

    low_dairy = PantryService.get_pantry(db_session, uid, subcategory="dairy", is_low=True)
    assert [i.item_name for i in low_dairy] == ["Milk"]

    assert {i.item_name for i in PantryService.get_low_stock(db_session, uid)} == {"Milk", "Poha"}


def test_summary_groups_by_category(db_session, db_user):
    uid = db_user.user_id
    stock(db_session, uid, "Milk", quantity="0.5", category=PantryCategory.FRIDGE)
    stock(db_session, uid, "Paneer", quantity="2", category=PantryCategory.FRIDGE)
    stock(db_session, uid, "Rice", quantity="5")

    summary = {group["category"]: group for group in PantryService.get_summary(db_session, uid)}

    assert summary[PantryCategory.FRIDGE]["total_items"] == 2
    assert summary[PantryCategory.FRIDGE]["low_stock"] == 1
    assert summary[PantryCategory.ESSENTIALS]["low_stock"] == 0
    assert PantryCategory.SNACKS_BREAKFAST not in summary


# =============================================================================
# BULK OPERATIONS
# =============================================================================


def test_bulk_update_applies_all(db_session, db_user):
    uid = db_user.user_id
    dal = stock(db_session, uid, "Toor dal", quantity="0.2")
    oil = stock(db_session, uid, "Mustard oil", quantity="0.1")

    updated = PantryService.bulk_update(
        db_session,
        uid,
        [
            PantryBulkUpdateItem(item_id=dal.item_id, quantity=Decimal("3")),
            PantryBulkUpdateItem(item_id=oil.item_id, quantity=Decimal("2")),
        ],
    )

    assert [i.quantity for i in updated] == [Decimal("3"), Decimal("2")]
    assert all(i.is_low is False for i in updated)


def test_bulk_update_unknown_id_changes_nothing(db_session, db_user):
    """
    Verifies:
    - One unknown id raises NotFoundError
    - Items listed before it keep their old quantity
    """
    uid = db_user.user_id
    dal = stock(db_session, uid, "Toor dal", quantity="0.2")

    with pytest.raises(NotFoundError):
        PantryService.bulk_update(
            db_session,
            uid,
            [
                PantryBulkUpdateItem(item_id=dal.item_id, quantity=Decimal("3")),
                PantryBulkUpdateItem(item_id=uuid.uuid4(), quantity=Decimal("1")),
            ],
        )

    db_session.expire_all()
    assert PantryService.get_pantry(db_session, uid)[0].quantity == Decimal("0.2")


def test_add_multiple(db_session, db_user):
    created = PantryService.add_multiple(
        db_session,
        db_user.user_id,
        [
            PantryItemCreate(category=PantryCategory.FRIDGE, item_name="Eggs", quantity=Decimal("12"), unit="piece"),
            PantryItemCreate(category=PantryCategory.SNACKS_BREAKFAST, item_name="Oats", quantity=Decimal("0")),
        ],
    )

    assert [i.item_name for i in created] == ["Eggs", "Oats"]
    assert created[1].is_low is True


# =============================================================================
# ROUTES
# =============================================================================


def test_add_item_route(monkeypatch, auth_user):
    item = make_pantry_item(user_id=auth_user.user_id)
    monkeypatch.setattr(PantryService, "add_item", lambda db, uid, data: item)

    r = client.post(
        "/api/pantry",
        json={"category": "essentials", "item_name": "Basmati rice", "quantity": 2, "unit": "kg"},
    )

    assert r.status_code == 201
    body = r.json()
    assert body["item_name"] == "Basmati rice"
    assert body["is_low"] is False


def test_add_item_route_rejects_negative_quantity(auth_user):
    r = client.post(
        "/api/pantry",
        json={"category": "fridge", "item_name": "Milk", "quantity": -1},
    )
    assert r.status_code == 422
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


def test_add_item_route_rejects_unknown_category(auth_user):
    r = client.post("/api/pantry", json={"category": "garage", "item_name": "Milk"})
    assert r.status_code == 422


def test_low_stock_route(monkeypatch, auth_user):
    low = make_pantry_item(user_id=auth_user.user_id, quantity=Decimal("0.5"))
    monkeypatch.setattr(PantryService, "get_low_stock", lambda db, uid: [low])

    r = client.get("/api/pantry/low-stock")

    assert r.status_code == 200
    assert r.json()[0]["is_low"] is True


def test_bulk_update_route_404(monkeypatch, auth_user):
    def missing(db, uid, items):
        raise NotFoundError(f"Pantry item not found: {items[0].item_id}")

    monkeypatch.setattr(PantryService, "bulk_update", missing)

    r = client.patch(
        "/api/pantry/bulk-update",
        json={"items": [{"item_id": str(uuid.uuid4()), "quantity": 1}]},
    )

    assert r.status_code == 404
    assert r.json()["success"] is False


def test_delete_route(monkeypatch, auth_user):
    monkeypatch.setattr(PantryService, "delete_item", lambda db, uid, item_id: None)
    item_id = uuid.uuid4()

    r = client.delete(f"/api/pantry/{item_id}")

    assert r.status_code == 200
    assert r.json()["data"] == {"removed": str(item_id)}
