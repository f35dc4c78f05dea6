from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from cvdash.api.http.documents import get_document_service
from cvdash.api.http.templating import render
from cvdash.core.auth import require_page_user
from cvdash.domains.documents.services import DocumentService
from cvdash.domains.identity.entities import User

router = APIRouter(tags=["pages"])

RECENT_DOCUMENTS_LIMIT = 5


@router.get("/")
async def index():
    return RedirectResponse("/app", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/app")
async def dashboard(
    request: Request,
    user: User = Depends(require_page_user),
    document_service: DocumentService = Depends(get_document_service)
):
    """Главная страница с последними документами"""
    listing = await document_service.list_documents(user.uuid)
    return render(
        request,
        "app/dashboard.html",
        user,
        documents=listing.documents[:RECENT_DOCUMENTS_LIMIT],
        total_documents=len(listing.documents),
    )


@router.get("/app/documents")
async def documents_page(
    request: Request,
    user: User = Depends(require_page_user),
    document_service: DocumentService = Depends(get_document_service)
):
    """Страница со всеми документами пользователя"""
    listing = await document_service.list_documents(user.uuid)
    return render(request, "app/documents.html", user, documents=listing.documents)


@router.get("/app/new")
async def new_analysis_page(request: Request, user: User = Depends(require_page_user)):
    """Страница с формой загрузки CV и описания вакансии"""
    return render(request, "app/new.html", user)
