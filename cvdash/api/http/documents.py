from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging
import uuid

from cvdash.api.http.errors import internal_error
from cvdash.core.auth import IdentityResolver, get_identity_resolver
from cvdash.core.db import get_db
from cvdash.domains.documents.schemas import (
    DocumentListing, DocumentRename, DocumentRenameResponse, DocumentDeleteResponse
)
from cvdash.domains.documents.services import DocumentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/documents", tags=["documents"])

DOCUMENT_NOT_FOUND = "Document not found or access denied"


def get_document_service(db: AsyncSession = Depends(get_db)) -> DocumentService:
    return DocumentService(db)


@router.get("", response_model=DocumentListing)
async def list_documents(
    resolver: IdentityResolver = Depends(get_identity_resolver),
    document_service: DocumentService = Depends(get_document_service)
):
    """Документы текущего пользователя с версиями, новые первыми"""
    try:
        user = await resolver.require_auth()
        return await document_service.list_documents(user.uuid)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Documents fetch error")
        return internal_error(e, "Failed to fetch documents")


@router.patch("/{document_uuid}/rename", response_model=DocumentRenameResponse)
async def rename_document(
    document_uuid: uuid.UUID,
    rename_data: DocumentRename,
    resolver: IdentityResolver = Depends(get_identity_resolver),
    document_service: DocumentService = Depends(get_document_service)
):
    """Переименование документа"""
    try:
        user = await resolver.require_auth()
        document = await document_service.rename_document(document_uuid, user.uuid, rename_data.title)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Rename document error")
        return internal_error(e, "Failed to rename document")

    if not document:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=DOCUMENT_NOT_FOUND)

    return DocumentRenameResponse(id=document.uuid, title=document.title, updated_at=document.updated_at)


@router.delete("/{document_uuid}", response_model=DocumentDeleteResponse)
async def delete_document(
    document_uuid: uuid.UUID,
    resolver: IdentityResolver = Depends(get_identity_resolver),
    document_service: DocumentService = Depends(get_document_service)
):
    """Удаление документа вместе с версиями"""
    try:
        user = await resolver.require_auth()
        document = await document_service.delete_document(document_uuid, user.uuid)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Delete document error")
        return internal_error(e, "Failed to delete document")

    if not document:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=DOCUMENT_NOT_FOUND)

    return DocumentDeleteResponse(message=f'Document "{document.title}" deleted successfully')
