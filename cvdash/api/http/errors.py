import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cvdash.core.auth import SigninRequired
from cvdash.core.config import settings

logger = logging.getLogger(__name__)


def internal_error(exc: Exception, default_message: str) -> JSONResponse:
    """Ответ 500 с сообщением исключения или сообщением по умолчанию"""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc) or default_message},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def signin_required_handler(request: Request, exc: SigninRequired) -> RedirectResponse:
    logger.debug("Redirecting anonymous request %s to sign-in", request.url.path)
    return RedirectResponse(settings.signin_path, status_code=status.HTTP_303_SEE_OTHER)


def register_exception_handlers(app: FastAPI) -> None:
    """Подключение обработчиков ошибок к приложению"""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SigninRequired, signin_required_handler)
