import uuid

from tests.conftest import StubDocumentRepository, at, make_document


def test_save_version(api, owner):
    document = make_document(owner, "Resume", at(0))
    api.login_as(owner)
    api.use_documents(StubDocumentRepository([document]))

    response = api.client.post(
        "/api/versions",
        json={"documentId": str(document.uuid), "label": "Tailored", "content": "updated CV"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Version saved successfully"
    assert body["version"]["label"] == "Tailored"
    assert set(body["version"]) == {"id", "label", "createdAt"}


def test_save_version_missing_fields(api, owner):
    document = make_document(owner, "Resume", at(0))
    api.login_as(owner)
    api.use_documents(StubDocumentRepository([document]))

    response = api.client.post("/api/versions", json={"documentId": str(document.uuid), "label": "Tailored"})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}


def test_save_version_for_foreign_document(api, owner, other_user):
    document = make_document(other_user, "Resume", at(0))
    api.login_as(owner)
    api.use_documents(StubDocumentRepository([document]))

    response = api.client.post(
        "/api/versions",
        json={"documentId": str(document.uuid), "label": "Tailored", "content": "mine"},
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Document not found or access denied"}


def test_update_version(api, owner):
    document = make_document(owner, "Resume", at(0), versions=[("Original", at(0))])
    version = document.versions[0]
    api.login_as(owner)
    api.use_documents(StubDocumentRepository([document]))

    response = api.client.put(f"/api/versions/{version.uuid}", json={"content": "rewritten"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["version"]["content"] == "rewritten"
    assert body["version"]["documentId"] == str(document.uuid)


def test_update_version_requires_content(api, owner):
    api.login_as(owner)
    api.use_documents(StubDocumentRepository())

    response = api.client.put(f"/api/versions/{uuid.uuid4()}", json={})

    assert response.status_code == 400
    assert response.json() == {"error": "Content is required"}


def test_update_foreign_version(api, owner, other_user):
    document = make_document(other_user, "Resume", at(0), versions=[("Original", at(0))])
    api.login_as(owner)
    api.use_documents(StubDocumentRepository([document]))

    response = api.client.put(f"/api/versions/{document.versions[0].uuid}", json={"content": "x"})

    assert response.status_code == 404
    assert response.json() == {"error": "Version not found or access denied"}


def test_versions_require_identity(api):
    api.login_as(None)
    api.use_documents(StubDocumentRepository())

    response = api.client.post("/api/versions", json={})

    assert response.status_code == 401


def test_save_version_for_malformed_document_id(api, owner):
    repository = StubDocumentRepository()
    api.login_as(owner)
    api.use_documents(repository)

    response = api.client.post(
        "/api/versions",
        json={"documentId": "not-a-uuid", "label": "Tailored", "content": "text"},
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Document not found or access denied"}


def test_get_version(api, owner):
    document = make_document(owner, "Resume", at(0), versions=[("Original", at(5))])
    version = document.versions[0]
    api.login_as(owner)
    api.use_documents(StubDocumentRepository([document]))

    response = api.client.get(f"/api/versions/{version.uuid}")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == str(version.uuid)
    assert body["documentId"] == str(document.uuid)
    assert body["label"] == "Original"
    assert body["content"] == "..."
    assert body["isActive"] is False
    assert body["createdAt"].startswith("2024-05-01T09:05:00")


def test_get_version_hides_foreign_and_unknown(api, owner, other_user):
    document = make_document(other_user, "Resume", at(0), versions=[("Original", at(0))])
    api.login_as(owner)
    api.use_documents(StubDocumentRepository([document]))

    for version_id in (document.versions[0].uuid, uuid.uuid4(), "not-a-uuid"):
        response = api.client.get(f"/api/versions/{version_id}")

        assert response.status_code == 404
        assert response.json() == {"error": "Version not found or access denied"}


def test_get_version_requires_identity(api):
    api.login_as(None)
    api.use_documents(StubDocumentRepository())

    response = api.client.get(f"/api/versions/{uuid.uuid4()}")

    assert response.status_code == 401
    assert response.json() == {"error": "Authentication required"}
