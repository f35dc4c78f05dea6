from cvdash.db.models.user import User
from cvdash.db.models.document import Document, DocumentVersion

__all__ = [
    "User",
    "Document",
    "DocumentVersion",
]
