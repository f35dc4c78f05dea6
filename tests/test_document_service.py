import pytest

from cvdash.domains.documents.services import DocumentService
from tests.conftest import StubDocumentRepository, at, make_document


@pytest.mark.asyncio
async def test_documents_newest_first(owner):
    oldest = make_document(owner, "CV v1", at(0))
    newest = make_document(owner, "CV v3", at(20))
    middle = make_document(owner, "CV v2", at(10))
    service = DocumentService(document_repository=StubDocumentRepository([oldest, newest, middle]))

    listing = await service.list_documents(owner.uuid)

    assert [d.title for d in listing.documents] == ["CV v3", "CV v2", "CV v1"]


@pytest.mark.asyncio
async def test_versions_newest_first(owner):
    document = make_document(
        owner, "Resume", at(0), versions=[("draft", at(0)), ("final", at(60)), ("review", at(30))]
    )
    service = DocumentService(document_repository=StubDocumentRepository([document]))

    listing = await service.list_documents(owner.uuid)

    assert [v.label for v in listing.documents[0].versions] == ["final", "review", "draft"]


@pytest.mark.asyncio
async def test_equal_timestamps_are_kept(owner):
    first = make_document(owner, "A", at(5))
    second = make_document(owner, "B", at(5))
    service = DocumentService(document_repository=StubDocumentRepository([first, second]))

    listing = await service.list_documents(owner.uuid)

    assert sorted(d.id for d in listing.documents) == sorted([first.uuid, second.uuid])


@pytest.mark.asyncio
async def test_empty_listing(owner):
    service = DocumentService(document_repository=StubDocumentRepository())

    listing = await service.list_documents(owner.uuid)

    assert listing.documents == []
    assert listing.model_dump(by_alias=True) == {"documents": []}


@pytest.mark.asyncio
async def test_foreign_documents_never_listed(owner, other_user):
    mine = make_document(owner, "Mine", at(0))
    theirs = make_document(other_user, "Theirs", at(10))
    repository = StubDocumentRepository([mine, theirs], leak_foreign=True)
    service = DocumentService(document_repository=repository)

    listing = await service.list_documents(owner.uuid)

    assert [d.id for d in listing.documents] == [mine.uuid]
    assert repository.find_calls == [owner.uuid]


@pytest.mark.asyncio
async def test_listing_excludes_document_content(owner):
    document = make_document(owner, "Resume", at(0), versions=[("draft", at(0))])
    service = DocumentService(document_repository=StubDocumentRepository([document]))

    listing = await service.list_documents(owner.uuid)
    dumped = listing.model_dump(by_alias=True)["documents"][0]

    assert set(dumped) == {"id", "title", "mimeType", "fileSize", "createdAt", "versions"}
    assert set(dumped["versions"][0]) == {"id", "label", "createdAt"}


@pytest.mark.asyncio
async def test_repository_errors_propagate(owner):
    service = DocumentService(document_repository=StubDocumentRepository(error=RuntimeError("boom")))

    with pytest.raises(RuntimeError, match="boom"):
        await service.list_documents(owner.uuid)


@pytest.mark.asyncio
async def test_rename_validates_before_lookup(owner):
    repository = StubDocumentRepository(error=AssertionError("repository must not be used"))
    service = DocumentService(document_repository=repository)

    with pytest.raises(ValueError, match="Title is required"):
        await service.rename_document(owner.uuid, owner.uuid, None)
