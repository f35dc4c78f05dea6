from cvdash.db.repositories.user_repository import UserRepository
from cvdash.db.repositories.document_repository import DocumentRepository, DocumentVersionRepository

__all__ = [
    "UserRepository",
    "DocumentRepository",
    "DocumentVersionRepository",
]
