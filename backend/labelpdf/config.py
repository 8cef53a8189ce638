"""
Конфигурация сервиса склейки PDF с этикетками.

Все настройки в одном месте (SSOT — Single Source of Truth).
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LabelPageGeometry:
    """
    Геометрия страницы-этикетки.

    Фиксированная политика печати, от входных данных не зависит.
    Координаты ReportLab: точки (1/72 дюйма), Y от нижнего края.
    """

    POINTS_PER_MM: float = 72.0 / 25.4

    # Физический размер карточки
    WIDTH_MM: float = 120.0
    HEIGHT_MM: float = 75.0

    # Поворот страницы при просмотре/печати (градусы, кратно 90)
    ROTATION_DEGREES: int = 90

    # Отступ рамки от края и отступ текста от рамки
    FRAME_INSET_MM: float = 2.0
    CONTENT_PADDING_MM: float = 2.0
    FRAME_LINE_WIDTH: float = 1.0

    # Шрифт
    FONT_SIZE: float = 10.0
    LINE_HEIGHT: float = 14.0

    # Статичная подпись в верхней части карточки
    CAPTION: str = "Наш сайт diasgroup.ru"

    @property
    def width(self) -> float:
        """Ширина страницы в точках."""
        return self.WIDTH_MM * self.POINTS_PER_MM

    @property
    def height(self) -> float:
        """Высота страницы в точках."""
        return self.HEIGHT_MM * self.POINTS_PER_MM

    @property
    def frame_inset(self) -> float:
        return self.FRAME_INSET_MM * self.POINTS_PER_MM

    @property
    def content_inset(self) -> float:
        return self.frame_inset + self.CONTENT_PADDING_MM * self.POINTS_PER_MM


class Settings(BaseSettings):
    """
    Настройки приложения из переменных окружения.

    Загружаются из .env файла или переменных окружения.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Приложение ===
    app_name: str = "Label PDF API"
    app_version: str = "0.1.0"
    debug: bool = False

    # === PDF ===
    # Куда сохранять результат, если в запросе outputFile пустой
    pdf_output_file: str = Field(default="output/result.pdf")
    # Явный путь к TTF шрифту (иначе ищем в системных папках)
    pdf_font_file: str = Field(default="")

    # === Логирование ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> Settings:
    """
    Получить настройки приложения (singleton).

    Использует кэширование для избежания повторного чтения .env
    """
    return Settings()


# Экспорт геометрии этикетки для удобства
LABEL_PAGE = LabelPageGeometry()
