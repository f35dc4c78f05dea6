from cvdash.api.http.auth import router as auth_router
from cvdash.api.http.documents import router as documents_router
from cvdash.api.http.versions import router as versions_router
from cvdash.api.http.pages import router as pages_router

__all__ = [
    "auth_router",
    "documents_router",
    "versions_router",
    "pages_router"
]
