"""
API эндпоинты генерации PDF.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from labelpdf.api.dependencies import get_merge_service
from labelpdf.models.schemas import ApiError, GeneratePdfRequestDto
from labelpdf.services.merger import PdfMergeService

router = APIRouter()


@router.post(
    "/generate",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    responses={
        404: {"model": ApiError, "description": "Исходный PDF не найден"},
        500: {"model": ApiError, "description": "Ошибка генерации PDF"},
    },
)
def generate(
    request: GeneratePdfRequestDto,
    service: Annotated[PdfMergeService, Depends(get_merge_service)],
) -> Response:
    """
    Склеить исходный PDF с этикетками.

    После каждой страницы исходного PDF вставляется этикетка с тем же
    индексом. Результат сохраняется в outputFile (или путь из настроек).

    Обычный def: генерация блокирует на файловом I/O и выполняется
    в threadpool FastAPI.
    """
    service.generate(request.to_request())
    return Response(status_code=status.HTTP_200_OK)
