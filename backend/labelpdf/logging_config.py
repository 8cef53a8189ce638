"""
Централизованная конфигурация логирования.

JSON формат для production, human-readable для development.

Сервис склейки передаёт контекст генерации через extra=...
(base_path, output_path, labels, pages, base_pages). В JSON эти поля
выносятся на верхний уровень записи, в human формате дописываются
в конец строки как key=value.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from labelpdf.config import Settings, get_settings

# Поля контекста генерации, которые идут в JSON на верхний уровень
GENERATION_FIELDS = ("base_path", "output_path", "labels", "pages", "base_pages")

# Стандартные атрибуты LogRecord — всё остальное считаем extra
_STANDARD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

# Сторонние логгеры, которые шумят на INFO
_QUIET_LOGGERS = ("pikepdf", "httpx", "uvicorn.access")


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Поля, переданные в лог через extra=..."""
    return {k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS}


class JSONFormatter(logging.Formatter):
    """
    Форматтер для структурированных JSON логов.

    Формат:
    {"timestamp": "...", "level": "INFO", "logger": "labelpdf.services.merger",
     "message": "...", "output_path": "...", "pages": 5, "extra": {...}}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = record_context(record)
        for field in GENERATION_FIELDS:
            if field in context:
                log_data[field] = context.pop(field)

        if context:
            log_data["extra"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class HumanFormatter(logging.Formatter):
    """Человекочитаемый формат для development: контекст в конце строки."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        context = record_context(record)
        if not context:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in context.items())
        return f"{line} | {pairs}"


def resolve_level(settings: Settings) -> int:
    """DEBUG=true всегда включает уровень DEBUG, иначе LOG_LEVEL."""
    if settings.debug:
        return logging.DEBUG
    return logging.getLevelName(settings.log_level)


def setup_logging(settings: Settings | None = None) -> logging.Handler:
    """
    Настройка централизованного логирования.

    В production: JSON формат для парсинга (ELK, Loki, etc.)
    В development (DEBUG=true): человекочитаемый формат

    Повторный вызов заменяет обработчик, а не добавляет второй.

    Returns:
        Установленный обработчик stdout
    """
    settings = settings or get_settings()

    log_level = resolve_level(settings)
    formatter = HumanFormatter() if settings.debug else JSONFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("labelpdf").setLevel(log_level)

    return handler
