"""
Сервис склейки исходного PDF со страницами-этикетками.

Основная бизнес-логика: после каждой страницы исходного документа
вставляется этикетка с тем же индексом.
"""

import logging
from pathlib import Path

import pikepdf

from labelpdf.exceptions import PdfFileNotFoundError, PdfGenerationError
from labelpdf.models.label_types import GenerationRequest
from labelpdf.services.documents import PdfBackend, PikePdfDocument
from labelpdf.services.fonts import FontResolver
from labelpdf.services.label_renderer import LabelPageRenderer

logger = logging.getLogger(__name__)


class PdfMergeService:
    """
    Склейка PDF с этикетками.

    Workflow:
    1. Проверка что исходный PDF существует (до любых изменений на диске)
    2. Создание папок для результата
    3. Поиск и регистрация шрифта (один раз на вызов)
    4. Чередование: страница i исходника → этикетка i
    5. Сохранение результата

    Пример для 3 страниц и 2 этикеток:
    base[0], label[0], base[1], label[1], base[2]
    """

    def __init__(
        self,
        output_file: str,
        font_file: str = "",
        renderer: LabelPageRenderer | None = None,
        font_resolver: FontResolver | None = None,
        backend: PdfBackend = PikePdfDocument,
    ):
        """
        Args:
            output_file: Путь результата по умолчанию
            font_file: Явный путь к TTF шрифту (пусто — системные шрифты)
            renderer: Генератор страниц-этикеток
            font_resolver: Поиск шрифта (по умолчанию — по font_file)
            backend: Фабрика документов для исходника и результата
        """
        self.output_file = output_file
        self.renderer = renderer or LabelPageRenderer(backend=backend)
        self.font_resolver = font_resolver or FontResolver(configured_path=font_file)
        self.backend = backend

    def generate(self, request: GenerationRequest) -> None:
        """
        Генерирует итоговый PDF.

        Args:
            request: Исходный PDF, путь результата и этикетки

        Raises:
            PdfFileNotFoundError: Исходный PDF не существует
            PdfGenerationError: Ошибка чтения/записи PDF или шрифта
        """
        try:
            self._generate(request)
        except (OSError, pikepdf.PdfError) as e:
            raise PdfGenerationError("Failed to generate PDF", e) from e

    def resolve_output_path(self, output_path: str) -> Path:
        """Путь из запроса, а если он пустой — из настроек."""
        if output_path.strip():
            return Path(output_path)
        return Path(self.output_file)

    def _generate(self, request: GenerationRequest) -> None:
        base_path = Path(request.base_path)
        output_path = self.resolve_output_path(request.output_path)

        if not base_path.exists():
            raise PdfFileNotFoundError(str(base_path))

        output_path.parent.mkdir(parents=True, exist_ok=True)

        labels = request.labels
        logger.info(
            f"[MERGE] Старт: base={base_path}, labels={len(labels)}",
            extra={"base_path": str(base_path), "output_path": str(output_path), "labels": len(labels)},
        )

        # Результат закрывается первым: его страницы ссылаются на исходник до save()
        with self.backend.open(base_path) as base_doc, self.backend.new() as result_doc:
            font = self.font_resolver.resolve()

            base_count = base_doc.page_count
            total = max(base_count, len(labels))

            for index in range(total):
                if index < base_count:
                    result_doc.import_page(base_doc, index)

                if index < len(labels):
                    self.renderer.render(result_doc, labels[index], font)

            result_doc.save(output_path)
            pages_count = result_doc.page_count

        logger.info(
            f"[MERGE] Готово: {output_path} "
            f"(страниц: {pages_count}, исходных: {base_count}, этикеток: {len(labels)})",
            extra={
                "output_path": str(output_path),
                "pages": pages_count,
                "base_pages": base_count,
                "labels": len(labels),
            },
        )
