from pydantic import Field
from typing import Any, Optional, List
import uuid
from datetime import datetime

from cvdash.core.schemas import CamelModel

# Максимальная длина заголовка при переименовании
MAX_TITLE_LENGTH = 100


class DocumentVersionSummary(CamelModel):
    """Версия документа в списке"""
    id: uuid.UUID
    label: str
    created_at: datetime


class DocumentSummary(CamelModel):
    """Документ в списке: только метаданные и версии"""
    id: uuid.UUID
    title: str
    mime_type: str
    file_size: int
    created_at: datetime
    versions: List[DocumentVersionSummary] = Field(default_factory=list)


class DocumentListing(CamelModel):
    """Ответ со списком документов пользователя"""
    documents: List[DocumentSummary] = Field(default_factory=list)


class DocumentRename(CamelModel):
    """Запрос на переименование документа"""
    title: Optional[Any] = None


class DocumentRenameResponse(CamelModel):
    id: uuid.UUID
    title: str
    updated_at: datetime


class DocumentDeleteResponse(CamelModel):
    success: bool = True
    message: str


class DocumentVersionCreate(CamelModel):
    """Запрос на сохранение новой версии"""
    document_id: Optional[Any] = None
    label: Optional[str] = None
    content: Optional[str] = None


class DocumentVersionUpdate(CamelModel):
    """Запрос на обновление содержимого версии"""
    content: Optional[str] = None


class DocumentVersionDetail(CamelModel):
    id: uuid.UUID
    document_id: uuid.UUID
    label: str
    content: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class DocumentVersionSaveResponse(CamelModel):
    message: str = "Version saved successfully"
    version: DocumentVersionSummary


class DocumentVersionUpdateResponse(CamelModel):
    success: bool = True
    version: DocumentVersionDetail
