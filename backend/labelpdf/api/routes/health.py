"""
Health check эндпоинты.
"""

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Базовая проверка состояния сервиса.

    Returns:
        Статус "ok" если сервис работает
    """
    return {"status": "ok"}
