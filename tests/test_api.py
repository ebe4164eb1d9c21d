"""Tests for the FastAPI routes.

Covers:
- GET /documents, GET /documents/{metadata_id}, DELETE /documents/{id}
- POST/GET /documents/{metadata_id}/assignments: assignment emails
- POST /users/invitations: registration emails, partial delivery failure
- GET /users/{user_id}
- POST/GET /nodes/{node_id}/comments, DELETE /comments/{comment_id}
- commits made by the real get_db when some emails fail
- error mapping for LegalValidationError and NotFoundError
"""
from __future__ import annotations

import asyncio
import json
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from legalconsult.api.deps import get_db, get_mail_transport
from legalconsult.core.exceptions import NotFoundError
from legalconsult.db import session as db_session_module
from legalconsult.db.base import Base
from legalconsult.db.models import DocumentConfiguration, DocumentConsolidated, DocumentMetadata, DocumentNode
from legalconsult.db.repositories import DocumentConsolidatedRepository, UserRepository
from legalconsult.notification.errors import TransportError
from legalconsult.notification.transport import ConsoleMailTransport


class BouncingTransport(ConsoleMailTransport):
    def __init__(self, bounce: set[str]) -> None:
        super().__init__(sender="noreply@example.ro")
        self.bounce = bounce

    def send(self, message) -> None:
        if message.to in self.bounce:
            raise TransportError("550 no such user")
        super().send(message)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def transport() -> ConsoleMailTransport:
    return BouncingTransport(bounce={"bounce@example.ro"})


@pytest.fixture()
def api(db_session: Session, transport, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    """TestClient with the DB session and mail transport overridden."""
    monkeypatch.setenv("DATABASE_URL", "sqlite+pysqlite:///:memory:")

    from legalconsult.core.settings import get_settings

    get_settings.cache_clear()

    from legalconsult.api.main import app

    def _override_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[get_mail_transport] = lambda: transport
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()
    get_settings.cache_clear()


@pytest.fixture()
def committing_api(transport, monkeypatch: pytest.MonkeyPatch):
    """TestClient on the real get_db, backed by a shared in-memory engine.

    Yields the client and the session factory, so tests can check what was
    committed from a fresh session.
    """
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    monkeypatch.setattr(db_session_module, "_session_factory", factory)

    from legalconsult.api.main import app

    app.dependency_overrides[get_mail_transport] = lambda: transport
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c, factory
    app.dependency_overrides.clear()
    engine.dispose()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_document(db_session: Session, *, open_for_commenting: bool = True) -> DocumentConsolidated:
    root = DocumentNode(title="Proiect de lege", document_node_type="DOCUMENT")
    root.children.append(DocumentNode(title="Art. 1", document_node_type="ARTICLE", order_number=1))
    document = DocumentConsolidated(
        DocumentMetadata(document_title="Proiect de lege", document_number=7),
        root,
        DocumentConfiguration(open_for_commenting=open_for_commenting, excluded_from_consultation=False),
    )
    return DocumentConsolidatedRepository(db_session).save(document)


# ===========================================================================
# Documents
# ===========================================================================


def test_list_documents(api, db_session):
    _make_document(db_session)
    _make_document(db_session)

    response = api.get("/documents")

    assert response.status_code == 200
    assert len(response.json()) == 2


def test_get_document(api, db_session):
    document = _make_document(db_session)

    response = api.get(f"/documents/{document.document_metadata.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == str(document.id)
    assert body["document_metadata"]["document_title"] == "Proiect de lege"
    assert body["document_metadata"]["document_number"] == 7
    assert body["document_configuration"]["open_for_commenting"] is True
    assert body["document_node"]["children"][0]["title"] == "Art. 1"


def test_get_unknown_document_is_404(api):
    response = api.get(f"/documents/{uuid4()}")

    assert response.status_code == 404
    assert response.json()["code"] == "document.Consolidated.notFound"


def test_delete_document(api, db_session):
    document = _make_document(db_session)
    metadata_id = document.document_metadata.id

    assert api.delete(f"/documents/{document.id}").status_code == 204
    assert api.get(f"/documents/{metadata_id}").status_code == 404
    assert api.delete(f"/documents/{document.id}").status_code == 404


# ===========================================================================
# Assignments
# ===========================================================================


def test_assign_users_sends_document_link(api, db_session, transport):
    document = _make_document(db_session)
    user = UserRepository(db_session).create(email="ana@example.ro", first_name="Ana", last_name="Pop")

    response = api.post(
        f"/documents/{document.document_metadata.id}/assignments",
        json={"user_ids": [str(user.id)]},
    )

    assert response.status_code == 200
    assert [u["email"] for u in response.json()] == ["ana@example.ro"]
    [message] = transport.outbox
    assert message.to == "ana@example.ro"
    assert f"/documents/{document.document_metadata.id}" in message.html_body

    listed = api.get(f"/documents/{document.document_metadata.id}/assignments")
    assert [u["email"] for u in listed.json()] == ["ana@example.ro"]


def test_assign_with_bounced_email_reports_failure_and_keeps_assignment(api, db_session, transport):
    document = _make_document(db_session)
    users = UserRepository(db_session)
    ok = users.create(email="ok@example.ro")
    bounced = users.create(email="bounce@example.ro")

    response = api.post(
        f"/documents/{document.document_metadata.id}/assignments",
        json={"user_ids": [str(ok.id), str(bounced.id)]},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "user.Email.send.failed"
    assert body["args"] == ["bounce@example.ro"]
    assert "bounce@example.ro" in body["detail"]
    assert [m.to for m in transport.outbox] == ["ok@example.ro"]
    assert {u.email for u in document.assigned_users} == {"ok@example.ro", "bounce@example.ro"}


def test_assign_unknown_user_is_404(api, db_session):
    document = _make_document(db_session)

    response = api.post(
        f"/documents/{document.document_metadata.id}/assignments",
        json={"user_ids": [str(uuid4())]},
    )

    assert response.status_code == 404
    assert response.json()["code"] == "user.NotFound"


# ===========================================================================
# Invitations
# ===========================================================================


def test_invite_users(api, db_session, transport):
    response = api.post(
        "/users/invitations",
        json={"users": [{"email": "ana@example.ro", "first_name": "Ana"}, {"email": "ion@example.ro"}]},
    )

    assert response.status_code == 201
    assert [u["email"] for u in response.json()] == ["ana@example.ro", "ion@example.ro"]
    assert sorted(m.to for m in transport.outbox) == ["ana@example.ro", "ion@example.ro"]
    ana_mail = next(m for m in transport.outbox if m.to == "ana@example.ro")
    assert "/ana@example.ro" in ana_mail.html_body


def test_invite_with_bounced_email_keeps_users(api, db_session):
    response = api.post(
        "/users/invitations",
        json={"users": [{"email": "ana@example.ro"}, {"email": "bounce@example.ro"}]},
    )

    assert response.status_code == 400
    assert response.json()["args"] == ["bounce@example.ro"]
    assert UserRepository(db_session).find_by_email("bounce@example.ro") is not None


def test_invite_rejects_malformed_email(api):
    response = api.post("/users/invitations", json={"users": [{"email": "not-an-email"}]})
    assert response.status_code == 422


# ===========================================================================
# Comments
# ===========================================================================


def test_comment_round_trip(api, db_session):
    document = _make_document(db_session)
    article = document.document_node.children[0]
    user = UserRepository(db_session).create(email="ana@example.ro")

    created = api.post(f"/nodes/{article.id}/comments", json={"user_id": str(user.id), "text": "De acord."})
    assert created.status_code == 201
    assert created.json()["status"] == "PENDING"

    listed = api.get(f"/nodes/{article.id}/comments")
    assert [c["text"] for c in listed.json()] == ["De acord."]


def test_comment_on_closed_document_is_400(api, db_session):
    document = _make_document(db_session, open_for_commenting=False)
    user = UserRepository(db_session).create(email="ana@example.ro")

    response = api.post(
        f"/nodes/{document.document_node.id}/comments",
        json={"user_id": str(user.id), "text": "text"},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "comment.Document.closed"


def test_comments_for_unknown_node_is_404(api):
    response = api.get(f"/nodes/{uuid4()}/comments")
    assert response.status_code == 404
    assert response.json()["code"] == "documentNode.NotFound"


def test_delete_comment(api, db_session):
    document = _make_document(db_session)
    user = UserRepository(db_session).create(email="ana@example.ro")
    node_id = document.document_node.id
    created = api.post(f"/nodes/{node_id}/comments", json={"user_id": str(user.id), "text": "text"})
    comment_id = created.json()["id"]

    assert api.delete(f"/comments/{comment_id}").status_code == 204
    assert api.get(f"/nodes/{node_id}/comments").json() == []

    missing = api.delete(f"/comments/{comment_id}")
    assert missing.status_code == 404
    assert missing.json()["code"] == "comment.NotFound"


# ===========================================================================
# Users
# ===========================================================================


def test_get_user(api, db_session):
    user = UserRepository(db_session).create(email="ana@example.ro", first_name="Ana")

    response = api.get(f"/users/{user.id}")

    assert response.status_code == 200
    assert response.json()["email"] == "ana@example.ro"


def test_get_unknown_user_is_404(api):
    response = api.get(f"/users/{uuid4()}")
    assert response.status_code == 404
    assert response.json()["code"] == "user.NotFound"


# ===========================================================================
# Error mapping
# ===========================================================================


def test_unmapped_entity_uses_generic_not_found_key(api):
    from legalconsult.api.main import not_found_handler

    identifier = uuid4()
    response = asyncio.run(not_found_handler(None, NotFoundError("DocumentMetadata", identifier)))

    assert response.status_code == 404
    body = json.loads(response.body)
    assert body["code"] == "entity.NotFound"
    assert body["detail"] != "entity.NotFound"
    assert body["args"] == [str(identifier)]


# ===========================================================================
# Commit on partial delivery failure
# ===========================================================================


def test_invitations_committed_when_an_email_bounces(committing_api):
    client, factory = committing_api

    response = client.post(
        "/users/invitations",
        json={"users": [{"email": "ok@example.ro"}, {"email": "bounce@example.ro"}]},
    )

    assert response.status_code == 400
    assert response.json()["args"] == ["bounce@example.ro"]
    with factory() as fresh:
        emails = sorted(u.email for u in UserRepository(fresh).find_all())
    assert emails == ["bounce@example.ro", "ok@example.ro"]


def test_assignments_committed_when_an_email_bounces(committing_api):
    client, factory = committing_api
    with factory() as setup:
        document = _make_document(setup)
        users = UserRepository(setup)
        ok_id = users.create(email="ok@example.ro").id
        bounced_id = users.create(email="bounce@example.ro").id
        metadata_id = document.document_metadata.id
        setup.commit()

    response = client.post(
        f"/documents/{metadata_id}/assignments",
        json={"user_ids": [str(ok_id), str(bounced_id)]},
    )

    assert response.status_code == 400
    assert response.json()["args"] == ["bounce@example.ro"]
    with factory() as fresh:
        document = DocumentConsolidatedRepository(fresh).find_by_document_metadata_id(metadata_id)
        assert {u.email for u in document.assigned_users} == {"ok@example.ro", "bounce@example.ro"}


def test_invitations_committed_on_success(committing_api, transport):
    client, factory = committing_api

    assert client.post("/users/invitations", json={"users": [{"email": "ana@example.ro"}]}).status_code == 201

    with factory() as fresh:
        assert UserRepository(fresh).find_by_email("ana@example.ro") is not None
    assert [m.to for m in transport.outbox] == ["ana@example.ro"]
