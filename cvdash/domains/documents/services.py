from typing import Any, Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
import logging
import uuid

from cvdash.db.repositories.document_repository import DocumentRepository, DocumentVersionRepository
from cvdash.domains.documents.entities import Document, DocumentVersion, DocumentAccess
from cvdash.domains.documents.schemas import (
    DocumentListing, DocumentSummary, DocumentVersionSummary, MAX_TITLE_LENGTH
)

logger = logging.getLogger(__name__)


def parse_uuid(value: Any) -> Optional[uuid.UUID]:
    """UUID из значения запроса или None, если это не UUID"""
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str):
        return None
    try:
        return uuid.UUID(value)
    except ValueError:
        return None


def to_version_summary(version: DocumentVersion) -> DocumentVersionSummary:
    return DocumentVersionSummary(
        id=version.uuid,
        label=version.label,
        created_at=version.created_at
    )


def to_document_summary(document: Document) -> DocumentSummary:
    versions = sorted(document.versions, key=lambda v: v.created_at, reverse=True)
    return DocumentSummary(
        id=document.uuid,
        title=document.title,
        mime_type=document.mime_type,
        file_size=document.file_size,
        created_at=document.created_at,
        versions=[to_version_summary(v) for v in versions]
    )


class DocumentService:
    """Сервис для работы с документами пользователя"""

    def __init__(
        self,
        session: Optional[AsyncSession] = None,
        document_repository: Optional[DocumentRepository] = None
    ):
        self.session = session
        self.document_repository = document_repository or DocumentRepository(session)

    async def list_documents(self, owner_id: uuid.UUID) -> DocumentListing:
        """Документы владельца с версиями, от новых к старым"""
        documents = await self.document_repository.find_documents(owner_id)

        owned: List[Document] = [doc for doc in documents if doc.user_id == owner_id]
        owned.sort(key=lambda d: d.created_at, reverse=True)

        logger.debug("Listed %d documents for user %s", len(owned), owner_id)
        return DocumentListing(documents=[to_document_summary(doc) for doc in owned])

    async def get_owned_document(self, document_uuid: uuid.UUID, user_id: uuid.UUID) -> Optional[Document]:
        """Документ, если он существует и принадлежит пользователю"""
        document = await self.document_repository.get_by_uuid(document_uuid)

        if not document or not DocumentAccess(document.uuid, document.user_id).can_access(user_id):
            return None

        return document

    async def rename_document(
        self,
        document_uuid: uuid.UUID,
        user_id: uuid.UUID,
        title: Any
    ) -> Optional[Document]:
        """Переименование документа"""
        if not isinstance(title, str) or not title.strip():
            raise ValueError("Title is required")

        new_title = title.strip()
        if len(new_title) > MAX_TITLE_LENGTH:
            raise ValueError(f"Title cannot exceed {MAX_TITLE_LENGTH} characters")

        document = await self.get_owned_document(document_uuid, user_id)
        if not document:
            return None

        document.rename(new_title)
        return await self.document_repository.update(document)

    async def delete_document(self, document_uuid: uuid.UUID, user_id: uuid.UUID) -> Optional[Document]:
        """Удаление документа и всех его версий"""
        document = await self.get_owned_document(document_uuid, user_id)
        if not document:
            return None

        await self.document_repository.delete(document_uuid)
        logger.info("Document %s deleted by user %s", document_uuid, user_id)
        return document


class DocumentVersionService:
    """Сервис для работы с версиями документов"""

    def __init__(
        self,
        session: Optional[AsyncSession] = None,
        document_repository: Optional[DocumentRepository] = None,
        version_repository: Optional[DocumentVersionRepository] = None
    ):
        self.session = session
        self.document_repository = document_repository or DocumentRepository(session)
        self.version_repository = version_repository or DocumentVersionRepository(session)

    async def save_version(
        self,
        user_id: uuid.UUID,
        document_id: Any,
        label: Optional[str],
        content: Optional[str]
    ) -> Optional[DocumentVersion]:
        """Сохранение новой (неактивной) версии документа"""
        if not document_id or not label or not content:
            raise ValueError("Missing required fields")

        document_uuid = parse_uuid(document_id)
        if document_uuid is None:
            return None

        document = await self.document_repository.get_by_uuid(document_uuid)
        if not document or not DocumentAccess(document.uuid, document.user_id).can_access(user_id):
            return None

        version = DocumentVersion.create_version(document_id=document.uuid, label=label, content=content)
        return await self.version_repository.create(version)

    async def update_version(
        self,
        user_id: uuid.UUID,
        version_uuid: uuid.UUID,
        content: Optional[str]
    ) -> Optional[DocumentVersion]:
        """Обновление содержимого версии"""
        if not content:
            raise ValueError("Content is required")

        found = await self.version_repository.get_with_owner(version_uuid)
        if not found:
            return None

        version, owner_id = found
        if owner_id != user_id:
            return None

        version.update_content(content)
        return await self.version_repository.update(version)

    async def get_version(self, user_id: uuid.UUID, version_id: Any) -> Optional[DocumentVersion]:
        """Версия документа пользователя"""
        version_uuid = parse_uuid(version_id)
        if version_uuid is None:
            return None

        found = await self.version_repository.get_with_owner(version_uuid)
        if not found or found[1] != user_id:
            return None

        return found[0]
