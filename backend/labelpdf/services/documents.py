"""
Обёртки над PDF документами.

Склейка и рендеринг работают через PdfDocument, а не через конкретную
библиотеку. Реализация по умолчанию — pikepdf (qpdf).
"""

import io
import logging
from pathlib import Path
from types import TracebackType
from typing import Protocol, Self

import pikepdf

logger = logging.getLogger(__name__)


class PdfDocument(Protocol):
    """Минимальный набор операций над PDF, нужный для склейки."""

    @property
    def page_count(self) -> int: ...

    def import_page(self, source: Self, index: int) -> None: ...

    def adopt(self, source: Self) -> None: ...

    def save(self, path: Path) -> None: ...

    def close(self) -> None: ...

    def __enter__(self) -> Self: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


class PdfBackend(Protocol):
    """
    Фабрика документов: откуда берутся исходник, результат и страницы-этикетки.

    Классметоды PikePdfDocument удовлетворяют протоколу, поэтому сам класс
    передаётся как бэкенд по умолчанию.
    """

    def open(self, path: Path) -> PdfDocument: ...

    def from_bytes(self, data: bytes) -> PdfDocument: ...

    def new(self) -> PdfDocument: ...


class PikePdfDocument:
    """
    PDF документ на pikepdf.

    Страницы, скопированные из другого документа, читают свои потоки из
    исходника только при сохранении. Поэтому документы-источники, созданные
    ради одной страницы (этикетки), передаются во владение через adopt()
    и закрываются вместе с этим документом.
    """

    def __init__(self, pdf: pikepdf.Pdf):
        self._pdf = pdf
        self._adopted: list[PikePdfDocument] = []
        self._closed = False

    @classmethod
    def open(cls, path: Path) -> "PikePdfDocument":
        """Открыть существующий PDF только для чтения."""
        return cls(pikepdf.open(path))

    @classmethod
    def from_bytes(cls, data: bytes) -> "PikePdfDocument":
        """Открыть PDF из памяти (например, только что нарисованную этикетку)."""
        return cls(pikepdf.open(io.BytesIO(data)))

    @classmethod
    def new(cls) -> "PikePdfDocument":
        """Пустой документ для результата."""
        return cls(pikepdf.new())

    @property
    def pdf(self) -> pikepdf.Pdf:
        return self._pdf

    @property
    def page_count(self) -> int:
        return len(self._pdf.pages)

    def import_page(self, source: "PikePdfDocument", index: int) -> None:
        """Скопировать страницу index из source в конец документа."""
        self._pdf.pages.append(source.pdf.pages[index])

    def adopt(self, source: "PikePdfDocument") -> None:
        """Закрыть source вместе с этим документом."""
        self._adopted.append(source)

    def save(self, path: Path) -> None:
        self._pdf.save(path)

    def close(self) -> None:
        """Закрыть документ и все принятые во владение. Повторный вызов — no-op."""
        if self._closed:
            return
        self._closed = True

        try:
            self._pdf.close()
        finally:
            adopted, self._adopted = self._adopted, []
            for source in adopted:
                source.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
