"""
Tests for documents, relationships and household communication.
"""

import uuid
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from test_fixtures import client, auth_user, db_session, db_user
from app.exceptions import NotFoundError
from domain.enums import (
    CommunicationMethod,
    ContactType,
    DeliveryMethod,
    DocumentCategory,
    DocumentStatus,
    DocumentType,
    MessageStatus,
    MessageType,
    RelationshipType,
)
from domain.schemas.record_schemas import (
    CommunicationLogCreate,
    ContactCreate,
    DocumentCreate,
    DocumentUpdate,
    MessageCreate,
    RelationshipCreate,
    RelationshipUpdate,
)
from services.local_day import local_today
from services.record_service import (
    CommunicationService,
    DocumentService,
    RelationshipService,
)


def file_document(db, user_id, title="Passport", expires_in=None, **extra):
    fields = dict(title=title, type=DocumentType.PASSPORT, category=DocumentCategory.TRAVEL)
    if expires_in is not None:
        fields["expiry_date"] = local_today() + timedelta(days=expires_in)
    fields.update(extra)
    return DocumentService.create_document(db, user_id, DocumentCreate(**fields))


# =============================================================================
# DOCUMENTS
# =============================================================================


def test_document_crud(db_session, db_user):
    uid = db_user.user_id
    doc = file_document(db_session, uid, tags=["travel"])
    assert doc.status == DocumentStatus.ACTIVE
    assert doc.currency == "USD"

    doc = DocumentService.update_document(
        db_session, uid, doc.document_id, DocumentUpdate(location="Top drawer")
    )
    assert doc.location == "Top drawer"
    assert doc.title == "Passport"

    DocumentService.delete_document(db_session, uid, doc.document_id)
    with pytest.raises(NotFoundError):
        DocumentService.get_document(db_session, uid, doc.document_id)


def test_document_filters(db_session, db_user):
    uid = db_user.user_id
    file_document(db_session, uid)
    file_document(
        db_session,
        uid,
        "Health cover",
        type=DocumentType.INSURANCE,
        category=DocumentCategory.HEALTH,
    )

    insurance = DocumentService.list_documents(db_session, uid, type=DocumentType.INSURANCE)
    travel = DocumentService.list_documents(db_session, uid, category="travel")

    assert [d.title for d in insurance] == ["Health cover"]
    assert [d.title for d in travel] == ["Passport"]


def test_expiring_documents(db_session, db_user):
    """
    Verifies:
    - Only active documents inside the window are listed
    - Results are ordered soonest first
    """
    uid = db_user.user_id
    file_document(db_session, uid, "Licence", expires_in=20)
    file_document(db_session, uid, "Visa", expires_in=5)
    file_document(db_session, uid, "Old card", expires_in=-3)
    file_document(db_session, uid, "Far away", expires_in=200)
    file_document(db_session, uid, "Archived", expires_in=2, status=DocumentStatus.ARCHIVED)

    expiring = DocumentService.list_expiring(db_session, uid)

    assert [d.title for d in expiring] == ["Visa", "Licence"]
    assert [d.title for d in DocumentService.list_expiring(db_session, uid, days=7)] == ["Visa"]


def test_document_scoped_to_owner(db_session, db_user):
    doc = file_document(db_session, db_user.user_id)
    with pytest.raises(NotFoundError):
        DocumentService.update_document(
            db_session, uuid.uuid4(), doc.document_id, DocumentUpdate(title="Mine now")
        )


# =============================================================================
# RELATIONSHIPS
# =============================================================================


def test_relationship_crud(db_session, db_user):
    uid = db_user.user_id
    rel = RelationshipService.create_relationship(
        db_session,
        uid,
        RelationshipCreate(
            name="Asha",
            type=RelationshipType.FAMILY,
            relationship="sister",
            contact={"phone": "+91 98000 00000"},
            important_dates=[{"type": "birthday", "date": "1994-07-12", "reminder_days": 3}],
        ),
    )
    assert rel.last_contact is None
    assert rel.important_dates[0]["type"] == "birthday"

    rel = RelationshipService.update_relationship(
        db_session, uid, rel.relationship_id, RelationshipUpdate(notes="Loves filter coffee")
    )
    assert rel.notes == "Loves filter coffee"
    assert rel.name == "Asha"

    assert [r.name for r in RelationshipService.list_relationships(db_session, uid, type="family")] == ["Asha"]
    assert RelationshipService.list_relationships(db_session, uid, type="friend") == []


def test_log_communication_moves_last_contact_forward(db_session, db_user):
    uid = db_user.user_id
    rel = RelationshipService.create_relationship(
        db_session, uid, RelationshipCreate(name="Ravi", type=RelationshipType.FRIEND)
    )
    recent = datetime(2025, 3, 10, 12, 0)
    older = recent - timedelta(days=7)

    RelationshipService.log_communication(
        db_session,
        uid,
        rel.relationship_id,
        CommunicationLogCreate(date=recent, type=CommunicationMethod.PHONE, summary="Caught up"),
    )
    RelationshipService.log_communication(
        db_session,
        uid,
        rel.relationship_id,
        CommunicationLogCreate(date=older, type=CommunicationMethod.TEXT),
    )

    rel = RelationshipService.get_relationship(db_session, uid, rel.relationship_id)
    assert rel.last_contact == recent

    logs = RelationshipService.list_communications(db_session, uid, rel.relationship_id)
    assert [log.date for log in logs] == [recent, older]
    assert len(RelationshipService.list_communications(db_session, uid, rel.relationship_id, limit=1)) == 1


def test_log_communication_defaults_to_now(db_session, db_user):
    rel = RelationshipService.create_relationship(
        db_session, db_user.user_id, RelationshipCreate(name="Ravi", type=RelationshipType.FRIEND)
    )

    log = RelationshipService.log_communication(
        db_session,
        db_user.user_id,
        rel.relationship_id,
        CommunicationLogCreate(type=CommunicationMethod.IN_PERSON),
    )

    assert log.date is not None
    assert RelationshipService.get_relationship(
        db_session, db_user.user_id, rel.relationship_id
    ).last_contact == log.date


def test_log_communication_unknown_relationship(db_session, db_user):
    with pytest.raises(NotFoundError):
        RelationshipService.log_communication(
            db_session,
            db_user.user_id,
            uuid.uuid4(),
            CommunicationLogCreate(type=CommunicationMethod.EMAIL),
        )


# =============================================================================
# HOUSEHOLD COMMUNICATION
# =============================================================================


def hire(db, user_id, name="Lakshmi", type=ContactType.COOK):
    return CommunicationService.create_contact(db, user_id, ContactCreate(name=name, type=type))


def test_message_needs_known_contact(db_session, db_user):
    with pytest.raises(NotFoundError):
        CommunicationService.create_message(
            db_session,
            db_user.user_id,
            MessageCreate(
                contact_id=uuid.uuid4(),
                type=MessageType.INSTRUCTION,
                content="Less oil please",
                delivery_method=DeliveryMethod.IN_PERSON,
            ),
        )


def test_message_lifecycle(db_session, db_user):
    """
    Verifies:
    - New messages start as drafts
    - The first SENT stamps sent_at and later statuses keep it
    """
    uid = db_user.user_id
    cook = hire(db_session, uid)
    message = CommunicationService.create_message(
        db_session,
        uid,
        MessageCreate(
            contact_id=cook.contact_id,
            type=MessageType.SCHEDULE,
            content="Dinner at 8 tonight",
            instructions=["No onion", "Extra rotis"],
            delivery_method=DeliveryMethod.TEXT,
        ),
    )
    assert message.status == MessageStatus.DRAFT
    assert message.sent_at is None

    sent = CommunicationService.update_status(db_session, uid, message.message_id, MessageStatus.SENT)
    sent_at = sent.sent_at
    assert sent_at is not None

    read = CommunicationService.update_status(db_session, uid, message.message_id, MessageStatus.READ)
    assert read.status == MessageStatus.READ
    assert read.sent_at == sent_at


def test_message_filters(db_session, db_user):
    uid = db_user.user_id
    cook = hire(db_session, uid)
    driver = hire(db_session, uid, "Suresh", ContactType.DRIVER)
    for contact, kind in ((cook, MessageType.INSTRUCTION), (driver, MessageType.PAYMENT)):
        CommunicationService.create_message(
            db_session,
            uid,
            MessageCreate(
                contact_id=contact.contact_id,
                type=kind,
                content="note",
                delivery_method=DeliveryMethod.NOTE,
            ),
        )

    for_driver = CommunicationService.list_messages(db_session, uid, contact_id=driver.contact_id)
    payments = CommunicationService.list_messages(db_session, uid, type="payment")

    assert len(for_driver) == 1
    assert payments[0].contact_id == driver.contact_id
    assert CommunicationService.list_messages(db_session, uid, status="sent") == []
    assert [c.name for c in CommunicationService.list_contacts(db_session, uid, type="cook")] == ["Lakshmi"]


# =============================================================================
# ROUTES
# =============================================================================


def test_expiring_route_passes_days(monkeypatch, auth_user):
    seen = {}

    def fake_expiring(db, uid, days):
        seen["days"] = days
        return []

    monkeypatch.setattr(DocumentService, "list_expiring", fake_expiring)

    r = client.get("/api/documents/expiring?days=7")

    assert r.status_code == 200
    assert seen["days"] == 7


def test_create_document_route_validates_type(auth_user):
    r = client.post(
        "/api/documents", json={"title": "Scan", "type": "selfie", "category": "personal"}
    )
    assert r.status_code == 422
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


def test_log_communication_route(monkeypatch, auth_user):
    rel_id = uuid.uuid4()
    log = SimpleNamespace(
        log_id=uuid.uuid4(),
        relationship_id=rel_id,
        date=datetime(2025, 3, 10, 12, 0),
        type=CommunicationMethod.VIDEO_CALL,
        direction=None,
        summary="Weekend plans",
        mood=None,
        quality=None,
    )
    monkeypatch.setattr(RelationshipService, "log_communication", lambda db, uid, rid, data: log)

    r = client.post(
        f"/api/relationships/{rel_id}/communications",
        json={"type": "video-call", "summary": "Weekend plans"},
    )

    assert r.status_code == 201
    assert r.json()["type"] == "video-call"


def test_message_status_route_404(monkeypatch, auth_user):
    def missing(db, uid, message_id, status):
        raise NotFoundError(f"Message not found: {message_id}")

    monkeypatch.setattr(CommunicationService, "update_status", missing)

    r = client.patch(f"/api/communication/messages/{uuid.uuid4()}/status", json={"status": "sent"})

    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"
