from cvdash.domains.documents.entities import Document, DocumentVersion, DocumentAccess
from cvdash.domains.documents.schemas import (
    DocumentListing, DocumentSummary, DocumentVersionSummary,
    DocumentRename, DocumentRenameResponse, DocumentDeleteResponse,
    DocumentVersionCreate, DocumentVersionUpdate, DocumentVersionDetail,
    DocumentVersionSaveResponse, DocumentVersionUpdateResponse
)
from cvdash.domains.documents.services import DocumentService, DocumentVersionService

__all__ = [
    "Document", "DocumentVersion", "DocumentAccess",
    "DocumentListing", "DocumentSummary", "DocumentVersionSummary",
    "DocumentRename", "DocumentRenameResponse", "DocumentDeleteResponse",
    "DocumentVersionCreate", "DocumentVersionUpdate", "DocumentVersionDetail",
    "DocumentVersionSaveResponse", "DocumentVersionUpdateResponse",
    "DocumentService", "DocumentVersionService"
]
