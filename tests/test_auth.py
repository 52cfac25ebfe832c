"""
Tests for registration, login, bearer tokens and the profile.

These run against the in-memory database through the real
``get_current_user`` dependency, so tokens are actually signed and checked.
"""

import uuid
from datetime import datetime, timedelta

import jwt
import pytest

from test_fixtures import client, db_session, db_user, unique_email
from app.config import settings
from app.exceptions import ConflictError, UnauthorizedError
from domain.schemas.auth_schemas import ProfileUpdate, UserLogin, UserRegister
from services.auth_service import AuthService


def register(email=None, password="s3cret-pass", name="Priya Sharma"):
    return client.post(
        "/api/auth/register",
        json={"email": email or unique_email("priya"), "name": name, "password": password},
    )


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# PASSWORDS AND TOKENS
# =============================================================================


def test_password_hash_round_trip():
    hashed = AuthService.hash_password("correct horse")
    assert hashed != "correct horse"
    assert AuthService.verify_password("correct horse", hashed)
    assert not AuthService.verify_password("wrong horse", hashed)


def test_malformed_hash_does_not_verify():
    assert AuthService.verify_password("anything", "not-a-bcrypt-hash") is False


def test_token_carries_user_id(db_user):
    token = AuthService.create_token(db_user)["token"]
    assert AuthService.decode_token(token) == db_user.user_id


@pytest.mark.parametrize(
    "payload,secret",
    [
        ({"sub": str(uuid.uuid4()), "exp": datetime.utcnow() - timedelta(minutes=1)}, "test-secret"),
        ({"sub": str(uuid.uuid4())}, "someone-elses-secret"),
        ({"sub": "not-a-uuid"}, "test-secret"),
        ({"email": "x@example.com"}, "test-secret"),
    ],
)
def test_bad_tokens_are_rejected(payload, secret):
    token = jwt.encode(payload, secret, algorithm=settings.jwt_algorithm)
    with pytest.raises(UnauthorizedError):
        AuthService.decode_token(token)


# =============================================================================
# SERVICE
# =============================================================================


def test_register_and_login(db_session):
    email = unique_email("arjun")
    session = AuthService.register(
        db_session, UserRegister(email=email.upper(), name="Arjun", password="hunter22")
    )
    assert session["user"].email == email
    assert session["token_type"] == "bearer"

    again = AuthService.login(db_session, UserLogin(email=email, password="hunter22"))
    assert again["user"].user_id == session["user"].user_id


def test_duplicate_email_conflicts(db_session):
    email = unique_email("dup")
    AuthService.register(db_session, UserRegister(email=email, name="One", password="hunter22"))
    with pytest.raises(ConflictError):
        AuthService.register(db_session, UserRegister(email=email, name="Two", password="hunter22"))


def test_wrong_password(db_session):
    email = unique_email("emma")
    AuthService.register(db_session, UserRegister(email=email, name="Emma", password="hunter22"))
    with pytest.raises(UnauthorizedError):
        AuthService.login(db_session, UserLogin(email=email, password="hunter23"))
    with pytest.raises(UnauthorizedError):
        AuthService.login(db_session, UserLogin(email=unique_email("nobody"), password="x"))


def test_profile_update_merges(db_session, db_user):
    AuthService.update_profile(
        db_session, db_user, ProfileUpdate(profile={"diet": "vegetarian", "wake_time": "06:00"})
    )
    user = AuthService.update_profile(
        db_session,
        db_user,
        ProfileUpdate(onboarding_completed=True, profile={"wake_time": "05:30"}),
    )

    assert user.onboarding_completed is True
    assert user.profile == {"diet": "vegetarian", "wake_time": "05:30"}


# =============================================================================
# ROUTES
# =============================================================================


def test_register_route_returns_token(db_session):
    r = register()

    assert r.status_code == 201
    body = r.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["name"] == "Priya Sharma"
    assert "password_hash" not in body["user"]


def test_register_route_conflict(db_session):
    email = unique_email("taken")
    register(email)

    r = register(email)

    assert r.status_code == 409
    assert r.json()["error"]["code"] == "CONFLICT"


def test_register_route_validates_email(db_session):
    r = client.post(
        "/api/auth/register", json={"email": "not-an-email", "name": "X", "password": "hunter22"}
    )
    assert r.status_code == 422


def test_me_with_token(db_session):
    token = register().json()["token"]

    r = client.get("/api/auth/me", headers=bearer(token))

    assert r.status_code == 200
    assert r.json()["onboarding_completed"] is False


def test_me_without_token(db_session):
    r = client.get("/api/auth/me")

    assert r.status_code == 401
    assert r.json()["error"]["code"] == "UNAUTHORIZED"


def test_token_for_deleted_user_is_401(db_session):
    ghost = type("Ghost", (), {"user_id": uuid.uuid4(), "email": "ghost@example.com"})()
    token = AuthService.create_token(ghost)["token"]

    r = client.get("/api/auth/me", headers=bearer(token))

    assert r.status_code == 401
    assert r.json()["error"]["message"] == "User no longer exists"


def test_login_route(db_session):
    email = unique_email("login")
    register(email, password="hunter22")

    ok = client.post("/api/auth/login", json={"email": email, "password": "hunter22"})
    bad = client.post("/api/auth/login", json={"email": email, "password": "nope"})

    assert ok.status_code == 200
    assert bad.status_code == 401


def test_profile_route(db_session):
    token = register().json()["token"]

    r = client.put("/api/auth/profile", json={"name": "Priya S."}, headers=bearer(token))

    assert r.status_code == 200
    assert r.json()["name"] == "Priya S."
