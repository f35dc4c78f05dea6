import uuid
from datetime import datetime, timezone
from typing import Optional, List


class DocumentVersion:
    """Сущность версии документа"""

    def __init__(
        self,
        uuid: uuid.UUID,
        document_id: uuid.UUID,
        label: str,
        content: str = "",
        is_active: bool = False,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.document_id = document_id
        self.label = label
        self.content = content
        self.is_active = is_active
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or self.created_at

    def update_content(self, new_content: str) -> None:
        """Обновление содержимого версии"""
        self.content = new_content
        self.updated_at = datetime.now(timezone.utc)

    @classmethod
    def create_version(
        cls,
        document_id: uuid.UUID,
        label: str,
        content: str,
        is_active: bool = False
    ) -> "DocumentVersion":
        """Создание новой версии документа"""
        return cls(
            uuid=uuid.uuid4(),
            document_id=document_id,
            label=label,
            content=content,
            is_active=is_active
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, DocumentVersion):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"DocumentVersion(uuid={self.uuid}, document_id={self.document_id}, label={self.label})"


class Document:
    """Сущность загруженного CV"""

    def __init__(
        self,
        uuid: uuid.UUID,
        user_id: uuid.UUID,
        title: str,
        mime_type: str,
        file_size: int = 0,
        storage_key: str = "",
        raw_text: str = "",
        structured: str = "{}",
        versions: Optional[List[DocumentVersion]] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.user_id = user_id
        self.title = title
        self.mime_type = mime_type
        self.file_size = file_size
        self.storage_key = storage_key
        self.raw_text = raw_text
        self.structured = structured
        self.versions = versions or []
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or self.created_at

    def rename(self, new_title: str) -> None:
        """Обновление заголовка документа"""
        self.title = new_title
        self.updated_at = datetime.now(timezone.utc)

    @classmethod
    def create_document(
        cls,
        user_id: uuid.UUID,
        title: str,
        mime_type: str,
        file_size: int,
        storage_key: str = "",
        raw_text: str = "",
        structured: str = "{}"
    ) -> "Document":
        """Создание нового документа"""
        return cls(
            uuid=uuid.uuid4(),
            user_id=user_id,
            title=title,
            mime_type=mime_type,
            file_size=file_size,
            storage_key=storage_key,
            raw_text=raw_text,
            structured=structured
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"Document(uuid={self.uuid}, title={self.title})"


class DocumentAccess:
    """Проверка доступа к документу"""

    def __init__(self, document_id: uuid.UUID, owner_id: uuid.UUID):
        self.document_id = document_id
        self.owner_id = owner_id

    def can_access(self, user_id: uuid.UUID) -> bool:
        """Документ доступен только владельцу"""
        return user_id == self.owner_id
