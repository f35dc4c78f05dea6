from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging
import uuid

from cvdash.api.http.errors import internal_error
from cvdash.core.auth import IdentityResolver, get_identity_resolver
from cvdash.core.db import get_db
from cvdash.domains.documents.schemas import (
    DocumentVersionCreate, DocumentVersionUpdate, DocumentVersionDetail,
    DocumentVersionSaveResponse, DocumentVersionUpdateResponse
)
from cvdash.domains.documents.services import DocumentVersionService, to_version_summary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/versions", tags=["versions"])


def get_version_service(db: AsyncSession = Depends(get_db)) -> DocumentVersionService:
    return DocumentVersionService(db)


def to_version_detail(version) -> DocumentVersionDetail:
    return DocumentVersionDetail(
        id=version.uuid,
        document_id=version.document_id,
        label=version.label,
        content=version.content,
        is_active=version.is_active,
        created_at=version.created_at,
        updated_at=version.updated_at
    )


@router.post("", response_model=DocumentVersionSaveResponse)
async def save_version(
    version_data: DocumentVersionCreate,
    resolver: IdentityResolver = Depends(get_identity_resolver),
    version_service: DocumentVersionService = Depends(get_version_service)
):
    """Сохранение новой версии документа"""
    try:
        user = await resolver.require_auth()
        version = await version_service.save_version(
            user.uuid,
            version_data.document_id,
            version_data.label,
            version_data.content
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Version save error")
        return internal_error(e, "Failed to save version")

    if not version:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found or access denied"
        )

    return DocumentVersionSaveResponse(version=to_version_summary(version))


@router.put("/{version_uuid}", response_model=DocumentVersionUpdateResponse)
async def update_version(
    version_uuid: uuid.UUID,
    update_data: DocumentVersionUpdate,
    resolver: IdentityResolver = Depends(get_identity_resolver),
    version_service: DocumentVersionService = Depends(get_version_service)
):
    """Обновление содержимого версии"""
    try:
        user = await resolver.require_auth()
        version = await version_service.update_version(user.uuid, version_uuid, update_data.content)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Update version error")
        return internal_error(e, "Failed to update version")

    if not version:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Version not found or access denied"
        )

    return DocumentVersionUpdateResponse(version=to_version_detail(version))


@router.get("/{version_id}", response_model=DocumentVersionDetail)
async def get_version(
    version_id: str,
    resolver: IdentityResolver = Depends(get_identity_resolver),
    version_service: DocumentVersionService = Depends(get_version_service)
):
    """Версия документа с содержимым"""
    try:
        user = await resolver.require_auth()
        version = await version_service.get_version(user.uuid, version_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Fetch version error")
        return internal_error(e, "Failed to fetch version")

    if not version:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Version not found or access denied"
        )

    return to_version_detail(version)
