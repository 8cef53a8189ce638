"""
Поиск и регистрация TrueType шрифта для этикеток.

Стандартные шрифты PDF (Helvetica и т.п.) не содержат кириллицы, поэтому
нужен TTF, который ReportLab встроит в PDF подмножеством глифов.
"""

import hashlib
import logging
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from labelpdf.exceptions import PdfGenerationError
from labelpdf.services.text_layout import FontMetrics, font_metrics

logger = logging.getLogger(__name__)

# Известные расположения шрифтов с кириллицей (Windows, Linux, macOS)
DEFAULT_FONT_PATHS: tuple[str, ...] = (
    "C:/Windows/Fonts/arial.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
)

# Шрифты из папки Windows (%WINDIR%\Fonts), проверяются раньше жёстких путей
WINDOWS_FONT_NAMES: tuple[str, ...] = ("arial.ttf", "times.ttf")


@dataclass(frozen=True)
class ResolvedFont:
    """Шрифт, зарегистрированный в ReportLab и готовый к встраиванию."""

    name: str
    path: Path

    @property
    def metrics(self) -> FontMetrics:
        return font_metrics(self.name)


class FontResolver:
    """
    Выбор шрифта по списку кандидатов в порядке приоритета.

    Порядок: явно настроенный путь → %WINDIR%/Fonts → известные системные пути.
    Первый существующий обычный файл регистрируется в ReportLab.
    """

    def __init__(
        self,
        configured_path: str = "",
        fallback_paths: Sequence[str] = DEFAULT_FONT_PATHS,
        environ: Mapping[str, str] | None = None,
    ):
        self.configured_path = configured_path
        self.fallback_paths = fallback_paths
        self.environ = os.environ if environ is None else environ

    def candidates(self) -> list[Path]:
        """Пути-кандидаты без повторов, в порядке проверки."""
        candidates: list[Path] = []

        configured = self.configured_path.strip()
        if configured:
            candidates.append(Path(configured))

        windows_dir = self.environ.get("WINDIR", "").strip()
        if windows_dir:
            candidates.extend(Path(windows_dir, "Fonts", name) for name in WINDOWS_FONT_NAMES)

        candidates.extend(Path(path) for path in self.fallback_paths)

        return list(dict.fromkeys(candidates))

    def find(self) -> Path:
        """
        Первый существующий файл шрифта.

        Raises:
            PdfGenerationError: Ни один кандидат не найден
        """
        candidates = self.candidates()
        for path in candidates:
            if path.is_file():
                return path

        checked = ", ".join(str(path) for path in candidates)
        raise PdfGenerationError(
            "Unable to find a TrueType font for PDF labels. "
            f"Set 'PDF_FONT_FILE' in configuration. Checked: {checked}"
        )

    def resolve(self) -> ResolvedFont:
        """
        Найти шрифт и зарегистрировать его в ReportLab.

        Имя регистрации зависит от пути, размера и времени изменения файла:
        повторные вызовы с тем же файлом возвращают тот же шрифт, а подменённый
        на диске файл регистрируется заново.

        Returns:
            ResolvedFont

        Raises:
            PdfGenerationError: Шрифт не найден или не читается
        """
        path = self.find()
        name = _font_name_for(path)

        if name not in pdfmetrics.getRegisteredFontNames():
            try:
                with path.open("rb") as font_stream:
                    ttf = TTFont(name, font_stream)
            except Exception as e:
                # struct.error, IndexError и т.п. на обрезанном файле, не только TTFError
                raise PdfGenerationError(f"Failed to load font {path}", e) from e

            pdfmetrics.registerFont(ttf)
            logger.info(f"[FONT] Зарегистрирован шрифт {path} как {name}")

        return ResolvedFont(name=name, path=path)


def _font_name_for(path: Path) -> str:
    """Стабильное имя шрифта для реестра ReportLab."""
    stat = path.stat()
    key = f"{path.resolve()}:{stat.st_size}:{stat.st_mtime_ns}"
    digest = hashlib.sha1(key.encode("utf-8")).hexdigest()[:12]
    return f"LabelFont-{digest}"
