"""
Tests for the food catalog (search, suggestions, provenance).

MongoDB is never contacted: the mongo_adapter functions the repository
calls are replaced with monkeypatch.
"""

import pytest

from test_fixtures import client, auth_user, make_food
from adapters import mongo_adapter
from app.exceptions import NotFoundError, ServiceValidationError
from services.food_service import FoodService, fold_name, default_provenance


PANEER = make_food()
SPINACH = make_food(
    "ifct-spinach",
    "Spinach",
    tags=["veg", "leafy"],
    nutrients={"kcal": 23, "protein": 2.9, "fiber": 2.2},
    provenance={},
)
ROTI = make_food(
    "ifct-roti",
    "Roti (whole wheat)",
    tags=["grain", "wholegrain"],
    nutrients={"kcal": 320, "protein": 11.8, "carbs": 64, "fiber": 11.2},
)


# =============================================================================
# NAME FOLDING AND PROVENANCE
# =============================================================================


def test_fold_name_strips_accents_and_spaces():
    assert fold_name("  Paneer   Tikká ") == "paneer tikka"
    assert fold_name("DAL") == "dal"
    assert fold_name("") == ""


def test_default_provenance_fills_missing_fields():
    prov = default_provenance({"source": "usda", "provenance": {}})
    assert prov == {
        "source": "usda",
        "measured": False,
        "confidence": 0.5,
        "gi_origin": "unknown",
        "nova_origin": "unknown",
        "fodmap_origin": "unknown",
    }


# =============================================================================
# SEARCH
# =============================================================================


def test_search_requires_query():
    with pytest.raises(ServiceValidationError):
        FoodService.search("   ")


def test_search_uses_text_index_first(monkeypatch):
    seen = {}

    def fake_text(query, limit=20):
        seen["query"] = query
        return [PANEER]

    monkeypatch.setattr(mongo_adapter, "text_search", fake_text)
    monkeypatch.setattr(mongo_adapter, "fuzzy_search", lambda q, limit=20: pytest.fail("fallback used"))

    result = FoodService.search("  PANEER ")

    assert seen["query"] == "paneer"
    assert result["search_type"] == "text"
    assert result["foods"][0]["id"] == "ifct-paneer"
    # Provenance is only attached on request
    assert result["foods"][0]["provenance"] is None


def test_search_falls_back_to_fuzzy_with_provenance(monkeypatch):
    monkeypatch.setattr(mongo_adapter, "text_search", lambda q, limit=20: [])
    monkeypatch.setattr(mongo_adapter, "fuzzy_search", lambda q, limit=20: [SPINACH])

    result = FoodService.search("spinch", include_provenance=True)

    assert result["search_type"] == "fuzzy"
    prov = result["foods"][0]["provenance"]
    assert prov["source"] == "ifct"
    assert prov["gi_origin"] == "unknown"


def test_get_food_missing(monkeypatch):
    monkeypatch.setattr(mongo_adapter, "get_food", lambda fid: None)
    with pytest.raises(NotFoundError):
        FoodService.get_food("nope")


# =============================================================================
# SUGGESTIONS
# =============================================================================


def test_compute_needs():
    assert FoodService.compute_needs([ROTI]) == ["protein"]
    assert FoodService.compute_needs([PANEER]) == ["protein", "veg"]
    assert FoodService.compute_needs([PANEER, PANEER, SPINACH]) == []


def test_suggestions_query_targets_missing_protein(monkeypatch):
    captured = {}

    def fake_find(query, exclude_ids=None, sort_by=None, limit=10):
        captured["query"] = query
        captured["exclude"] = exclude_ids
        return [PANEER]

    monkeypatch.setattr(mongo_adapter, "get_foods_by_ids", lambda ids: [ROTI])
    monkeypatch.setattr(mongo_adapter, "find_foods", fake_find)

    result = FoodService.get_suggestions(["ifct-roti", " "])

    assert result["needs"] == ["protein"]
    assert {"nutrients.protein": {"$gte": 15}} in captured["query"]["$or"]
    assert captured["exclude"] == ["ifct-roti"]
    assert result["suggestions"][0]["name"] == "Paneer"


def test_suggestions_without_current_foods_use_general_query(monkeypatch):
    monkeypatch.setattr(mongo_adapter, "find_foods", lambda q, exclude_ids=None, sort_by=None, limit=10: [SPINACH])

    result = FoodService.get_suggestions([])

    assert result["needs"] == []
    assert result["suggestions"][0]["id"] == "ifct-spinach"


# =============================================================================
# ROUTES
# =============================================================================


def test_food_routes_require_auth():
    r = client.get("/api/food/search?q=dal")
    assert r.status_code == 401
    assert r.json()["success"] is False
    assert r.json()["error"]["code"] == "UNAUTHORIZED"


def test_search_route(monkeypatch, auth_user):
    monkeypatch.setattr(
        FoodService,
        "search",
        lambda q, limit=20, include_provenance=False: {
            "foods": [],
            "search_type": "fuzzy",
            "query": q,
        },
    )
    r = client.get("/api/food/search?q=idli")
    assert r.status_code == 200
    assert r.json() == {"foods": [], "search_type": "fuzzy", "query": "idli"}


def test_search_route_missing_query_is_400(auth_user):
    r = client.get("/api/food/search")
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Search query is required"


def test_get_food_route_404(monkeypatch, auth_user):
    monkeypatch.setattr(mongo_adapter, "get_food", lambda fid: None)
    r = client.get("/api/food/unknown-id")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"
