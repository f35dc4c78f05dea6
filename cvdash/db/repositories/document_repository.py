from typing import Optional, List, Tuple, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.orm import selectinload
from sqlalchemy.exc import IntegrityError
import uuid

from cvdash.db.base import as_utc
from cvdash.db.models.document import Document as DocumentModel, DocumentVersion as DocumentVersionModel

if TYPE_CHECKING:
    from cvdash.domains.documents.entities import Document, DocumentVersion


class DocumentRepository:
    """Репозиторий для работы с документами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: "Document") -> "Document":
        """Создание нового документа"""
        db_document = DocumentModel(
            uuid=document.uuid,
            user_id=document.user_id,
            title=document.title,
            storage_key=document.storage_key,
            mime_type=document.mime_type,
            file_size=document.file_size,
            raw_text=document.raw_text,
            structured=document.structured,
            created_at=document.created_at,
            updated_at=document.updated_at
        )

        self.session.add(db_document)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ValueError("Invalid user_id")

        return await self.get_by_uuid(document.uuid)

    async def get_by_uuid(self, document_uuid: uuid.UUID) -> Optional["Document"]:
        """Получение документа по UUID"""
        result = await self.session.execute(
            select(DocumentModel)
            .options(selectinload(DocumentModel.versions))
            .execution_options(populate_existing=True)
            .where(DocumentModel.uuid == document_uuid)
        )
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document) if db_document else None

    async def find_documents(self, owner_id: uuid.UUID) -> List["Document"]:
        """Документы владельца с версиями, новые первыми на обоих уровнях"""
        result = await self.session.execute(
            select(DocumentModel)
            .options(selectinload(DocumentModel.versions))
            .execution_options(populate_existing=True)
            .where(DocumentModel.user_id == owner_id)
            .order_by(DocumentModel.created_at.desc())
        )
        db_documents = result.scalars().all()
        return [self._to_domain(doc) for doc in db_documents]

    async def find_by_title(self, owner_id: uuid.UUID, title: str) -> Optional["Document"]:
        """Поиск документа владельца по заголовку"""
        result = await self.session.execute(
            select(DocumentModel)
            .options(selectinload(DocumentModel.versions))
            .execution_options(populate_existing=True)
            .where(DocumentModel.user_id == owner_id, DocumentModel.title == title)
            .limit(1)
        )
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document) if db_document else None

    async def update(self, document: "Document") -> "Document":
        """Обновление метаданных документа"""
        stmt = (
            update(DocumentModel)
            .where(DocumentModel.uuid == document.uuid)
            .values(
                title=document.title,
                updated_at=document.updated_at
            )
        )

        await self.session.execute(stmt)
        await self.session.commit()

        return await self.get_by_uuid(document.uuid)

    async def delete(self, document_uuid: uuid.UUID) -> bool:
        """Удаление документа вместе с версиями"""
        # Версии загружаются заново, чтобы каскад удалил их все
        db_document = await self.session.get(
            DocumentModel,
            document_uuid,
            options=[selectinload(DocumentModel.versions)],
            populate_existing=True
        )
        if db_document is None:
            return False

        await self.session.delete(db_document)
        await self.session.commit()
        return True

    def _to_domain(self, db_document: DocumentModel) -> "Document":
        """Преобразование модели БД в доменную сущность"""
        from cvdash.domains.documents.entities import Document

        return Document(
            uuid=db_document.uuid,
            user_id=db_document.user_id,
            title=db_document.title,
            mime_type=db_document.mime_type,
            file_size=db_document.file_size,
            storage_key=db_document.storage_key,
            raw_text=db_document.raw_text or "",
            structured=db_document.structured or "{}",
            versions=[version_to_domain(v) for v in db_document.versions],
            created_at=as_utc(db_document.created_at),
            updated_at=as_utc(db_document.updated_at)
        )


class DocumentVersionRepository:
    """Репозиторий для работы с версиями документов"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, version: "DocumentVersion") -> "DocumentVersion":
        """Создание новой версии документа"""
        db_version = DocumentVersionModel(
            uuid=version.uuid,
            document_id=version.document_id,
            label=version.label,
            content=version.content,
            is_active=version.is_active,
            created_at=version.created_at,
            updated_at=version.updated_at
        )

        self.session.add(db_version)
        await self.session.commit()
        await self.session.refresh(db_version)
        return version_to_domain(db_version)

    async def get_by_uuid(self, version_uuid: uuid.UUID) -> Optional["DocumentVersion"]:
        """Получение версии по UUID"""
        result = await self.session.execute(
            select(DocumentVersionModel).where(DocumentVersionModel.uuid == version_uuid)
        )
        db_version = result.scalar_one_or_none()
        return version_to_domain(db_version) if db_version else None

    async def get_with_owner(self, version_uuid: uuid.UUID) -> Optional[Tuple["DocumentVersion", uuid.UUID]]:
        """Получение версии вместе с владельцем документа"""
        result = await self.session.execute(
            select(DocumentVersionModel, DocumentModel.user_id)
            .join(DocumentModel, DocumentVersionModel.document_id == DocumentModel.uuid)
            .where(DocumentVersionModel.uuid == version_uuid)
        )
        row = result.one_or_none()
        if row is None:
            return None
        db_version, owner_id = row
        return version_to_domain(db_version), owner_id

    async def find_by_label(self, document_id: uuid.UUID, label: str) -> Optional["DocumentVersion"]:
        """Поиск версии документа по метке"""
        result = await self.session.execute(
            select(DocumentVersionModel)
            .where(DocumentVersionModel.document_id == document_id, DocumentVersionModel.label == label)
            .limit(1)
        )
        db_version = result.scalar_one_or_none()
        return version_to_domain(db_version) if db_version else None

    async def update(self, version: "DocumentVersion") -> "DocumentVersion":
        """Обновление содержимого версии"""
        stmt = (
            update(DocumentVersionModel)
            .where(DocumentVersionModel.uuid == version.uuid)
            .values(
                content=version.content,
                updated_at=version.updated_at
            )
        )

        await self.session.execute(stmt)
        await self.session.commit()

        return await self.get_by_uuid(version.uuid)


def version_to_domain(db_version: DocumentVersionModel) -> "DocumentVersion":
    """Преобразование модели версии в доменную сущность"""
    from cvdash.domains.documents.entities import DocumentVersion

    return DocumentVersion(
        uuid=db_version.uuid,
        document_id=db_version.document_id,
        label=db_version.label,
        content=db_version.content,
        is_active=bool(db_version.is_active),
        created_at=as_utc(db_version.created_at),
        updated_at=as_utc(db_version.updated_at)
    )
