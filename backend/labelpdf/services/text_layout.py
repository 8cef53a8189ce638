"""
Раскладка текста на этикетке: измерение ширины, перенос по словам, центрирование.

Функции чистые: всё, что нужно знать о шрифте, передаётся через FontMetrics.
"""

from collections.abc import Callable, Iterator

from reportlab.pdfbase import pdfmetrics

# width(text, font_size) -> ширина строки в точках
FontMetrics = Callable[[str, float], float]


def font_metrics(font_name: str) -> FontMetrics:
    """
    Метрики зарегистрированного в ReportLab шрифта.

    stringWidth суммирует advance width глифов (единицы шрифта / 1000 * кегль).
    """

    def width(text: str, font_size: float) -> float:
        return pdfmetrics.stringWidth(text, font_name, font_size)

    return width


def measure(text: str, font_size: float, metrics: FontMetrics) -> float:
    """Ширина строки в точках."""
    return metrics(text, font_size)


def wrap_by_words(
    text: str,
    font_size: float,
    max_width: float,
    metrics: FontMetrics,
) -> Iterator[str]:
    """
    Жадный перенос текста по словам.

    Набирает слова в строку, пока она помещается в max_width. Слово, которое
    само по себе шире max_width, уходит отдельной строкой (иначе — пустой
    вывод или бесконечный цикл).

    Args:
        text: Исходный текст (разбивается по любым пробельным символам)
        font_size: Кегль
        max_width: Максимальная ширина строки в точках
        metrics: Метрики шрифта

    Yields:
        Строки по порядку. Итератор одноразовый.
    """
    current = ""

    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if not current or measure(candidate, font_size, metrics) <= max_width:
            current = candidate
        else:
            yield current
            current = word

    if current:
        yield current


def center_offset(text: str, font_size: float, page_width: float, metrics: FontMetrics) -> float:
    """
    X-координата для центрирования строки на странице.

    Если строка шире страницы — 0 (не уезжаем за левый край).
    """
    return max(0.0, (page_width - measure(text, font_size, metrics)) / 2)
