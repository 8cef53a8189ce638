"""
Dependencies для FastAPI эндпоинтов.
"""

from typing import Annotated

from fastapi import Depends

from labelpdf.config import Settings, get_settings
from labelpdf.services.merger import PdfMergeService


def get_merge_service(settings: Annotated[Settings, Depends(get_settings)]) -> PdfMergeService:
    """
    Dependency для получения сервиса склейки.

    Пути по умолчанию (результат, шрифт) берутся из настроек.
    """
    return PdfMergeService(
        output_file=settings.pdf_output_file,
        font_file=settings.pdf_font_file,
    )
