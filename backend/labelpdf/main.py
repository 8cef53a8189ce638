"""
Точка входа FastAPI приложения.

Склейка исходного PDF со страницами-этикетками.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from labelpdf.api.errors import register_exception_handlers
from labelpdf.api.routes import health, pdf
from labelpdf.config import get_settings
from labelpdf.logging_config import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifecycle приложения.

    Настройка логирования при старте.
    """
    setup_logging()
    logger.info(f"[START] {settings.app_name} v{settings.app_version}")
    logger.info(f"[CONFIG] Результат по умолчанию: {settings.pdf_output_file}")

    yield

    logger.info(f"[STOP] {settings.app_name}")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
## Label PDF API

Склейка PDF документа со страницами-этикетками.

* После каждой страницы исходного PDF — этикетка 120x75 мм с номенклатурой,
  количеством, номером заказа и номером отгрузки
* Кириллица через встроенный TrueType шрифт
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

register_exception_handlers(app)

# Подключение роутеров
app.include_router(health.router, tags=["Health"])
app.include_router(pdf.router, prefix="/pdf", tags=["PDF"])


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Корневой эндпоинт — информация о сервисе."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
