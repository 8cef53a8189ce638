"""
Перевод ошибок сервиса в HTTP ответы.

PdfFileNotFoundError → 404, PdfGenerationError и всё неожиданное → 500.
Тело ответа: {"message": "..."}.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from labelpdf.exceptions import PdfFileNotFoundError, PdfGenerationError
from labelpdf.models.schemas import ApiError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ApiError(message=message).model_dump())


async def handle_not_found(_request: Request, exc: PdfFileNotFoundError) -> JSONResponse:
    logger.error("File not found", exc_info=exc)
    return _error_response(status.HTTP_404_NOT_FOUND, exc.message)


async def handle_generation(_request: Request, exc: PdfGenerationError) -> JSONResponse:
    logger.error("PDF generation failed", exc_info=exc)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)


async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unexpected error", exc_info=exc)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "Unexpected error")


def register_exception_handlers(app: FastAPI) -> None:
    """Подключить обработчики ошибок к приложению."""
    app.add_exception_handler(PdfFileNotFoundError, handle_not_found)
    app.add_exception_handler(PdfGenerationError, handle_generation)
    app.add_exception_handler(Exception, handle_unexpected)
