import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from cvdash.api.http.documents import get_document_service
from cvdash.api.http.versions import get_version_service
from cvdash.core.auth import IdentityResolver, get_identity_resolver
from cvdash.domains.documents.entities import Document, DocumentVersion
from cvdash.domains.documents.services import DocumentService, DocumentVersionService
from cvdash.domains.identity.entities import User
from cvdash.main import app

T0 = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    return T0 + timedelta(minutes=minutes)


def make_user(email: str = "demo@matchmycv.com", name: str = "Demo User") -> User:
    return User(uuid=uuid.uuid4(), email=email, name=name, password_hash="not-a-hash")


def make_document(owner: User, title: str, created_at: datetime, versions=()) -> Document:
    document = Document(
        uuid=uuid.uuid4(),
        user_id=owner.uuid,
        title=title,
        mime_type="application/pdf",
        file_size=204800,
        storage_key=f"{owner.uuid}/{title}.pdf",
        raw_text="raw text that must never be listed",
        created_at=created_at,
    )
    document.versions = [
        DocumentVersion(uuid=uuid.uuid4(), document_id=document.uuid, label=label, content="...", created_at=ts)
        for label, ts in versions
    ]
    return document


class StubIdentityResolver(IdentityResolver):
    def __init__(self, user=None, error=None):
        self.user = user
        self.error = error

    async def resolve_identity(self):
        if self.error:
            raise self.error
        return self.user


class StubDocumentRepository:
    """Хранилище в памяти; find_documents отдает документы в порядке добавления"""

    def __init__(self, documents=(), error=None, leak_foreign=False):
        self.documents = list(documents)
        self.error = error
        self.leak_foreign = leak_foreign
        self.find_calls = []
        self.deleted = []

    async def find_documents(self, owner_id):
        self.find_calls.append(owner_id)
        if self.error:
            raise self.error
        if self.leak_foreign:
            return list(self.documents)
        return [doc for doc in self.documents if doc.user_id == owner_id]

    async def get_by_uuid(self, document_uuid):
        if self.error:
            raise self.error
        return next((doc for doc in self.documents if doc.uuid == document_uuid), None)

    async def update(self, document):
        return document

    async def delete(self, document_uuid):
        self.deleted.append(document_uuid)
        self.documents = [doc for doc in self.documents if doc.uuid != document_uuid]
        return True


class StubVersionRepository:
    def __init__(self, documents_repository: StubDocumentRepository):
        self.documents_repository = documents_repository
        self.created = []

    async def create(self, version):
        self.created.append(version)
        return version

    async def get_with_owner(self, version_uuid):
        for document in self.documents_repository.documents:
            for version in document.versions:
                if version.uuid == version_uuid:
                    return version, document.user_id
        return None

    async def update(self, version):
        return version


@pytest.fixture
def owner():
    return make_user()


@pytest.fixture
def other_user():
    return make_user(email="someone@else.com", name="Someone Else")


@pytest.fixture
def api():
    """TestClient с подменяемыми зависимостями"""

    class Api:
        client = TestClient(app)

        def login_as(self, user, error=None):
            app.dependency_overrides[get_identity_resolver] = lambda: StubIdentityResolver(user, error)

        def use_documents(self, repository):
            app.dependency_overrides[get_document_service] = lambda: DocumentService(
                document_repository=repository
            )
            app.dependency_overrides[get_version_service] = lambda: DocumentVersionService(
                document_repository=repository,
                version_repository=StubVersionRepository(repository)
            )

    yield Api()
    app.dependency_overrides.clear()
