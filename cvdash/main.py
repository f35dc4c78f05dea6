from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cvdash.api.http import auth_router, documents_router, versions_router, pages_router
from cvdash.api.http.errors import register_exception_handlers
from cvdash.core.config import settings
from cvdash.core.db import create_tables, engine
from cvdash.core.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Подготовка БД при старте и закрытие соединений при остановке"""
    setup_logging(settings.log_level)
    await create_tables()
    logger.info("%s started", settings.app_name)
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("%s stopped", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    description="CV analysis dashboard: documents and their versions",
    version="1.0.0",
    lifespan=lifespan,
)

# Настройка CORS для работы с frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Подключаем роутеры
app.include_router(auth_router)
app.include_router(documents_router)
app.include_router(versions_router)
app.include_router(pages_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
