"""
Общие фикстуры тестов.

Шрифт берём из поставки ReportLab (Vera.ttf), чтобы тесты не зависели
от системных шрифтов.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
import reportlab
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from labelpdf.services.fonts import FontResolver, ResolvedFont

REPORTLAB_FONT = Path(reportlab.__file__).parent / "fonts" / "Vera.ttf"


@pytest.fixture
def font_file() -> str:
    """Путь к TTF шрифту для тестов."""
    return str(REPORTLAB_FONT)


@pytest.fixture
def resolved_font(font_file: str) -> ResolvedFont:
    """Зарегистрированный шрифт."""
    return FontResolver(configured_path=font_file, fallback_paths=(), environ={}).resolve()


@pytest.fixture
def fake_metrics() -> Callable[[str, float], float]:
    """Моноширинные метрики: каждый символ = половина кегля."""

    def width(text: str, font_size: float) -> float:
        return len(text) * font_size * 0.5

    return width


@pytest.fixture
def make_base_pdf(tmp_path: Path) -> Callable[[int], Path]:
    """Фабрика исходных PDF формата A4 с подписанными страницами."""

    def make(pages: int, name: str = "base.pdf") -> Path:
        path = tmp_path / name
        c = canvas.Canvas(str(path), pagesize=A4)
        for i in range(pages):
            c.setFont("Helvetica", 14)
            c.drawString(72, 720, f"Base page {i}")
            c.showPage()
        c.save()
        return path

    return make
