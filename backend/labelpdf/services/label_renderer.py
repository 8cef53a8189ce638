# backend/labelpdf/services/label_renderer.py
"""
Рендеринг страницы-этикетки через ReportLab (векторный PDF).

Карточка 120x75 мм, повёрнута на 90°, в рамке. Сверху вниз:
- статичная подпись (сайт)
- номенклатура, перенос по словам (сколько строк помещается)
- количество + единица измерения
- номер заказа
- номер отгрузки
Все строки центрируются по горизонтали, пустые не рисуются.
"""

import itertools
import math
from dataclasses import dataclass
from io import BytesIO

from reportlab.pdfgen import canvas

from labelpdf.config import LABEL_PAGE, LabelPageGeometry
from labelpdf.models.label_types import LabelRecord
from labelpdf.services.documents import PdfBackend, PdfDocument, PikePdfDocument
from labelpdf.services.fonts import ResolvedFont
from labelpdf.services.text_layout import FontMetrics, center_offset, wrap_by_words


@dataclass(frozen=True)
class PlacedLine:
    """Строка текста с координатами левого нижнего угла (в точках)."""

    text: str
    x: float
    y: float


class LabelPageRenderer:
    """Генератор страниц-этикеток."""

    def __init__(
        self,
        geometry: LabelPageGeometry = LABEL_PAGE,
        backend: PdfBackend = PikePdfDocument,
    ) -> None:
        self.geometry = geometry
        self.backend = backend

    def render(self, document: PdfDocument, label: LabelRecord, font: ResolvedFont) -> None:
        """
        Рисует этикетку и добавляет её страницей в конец document.

        Args:
            document: Итоговый документ
            label: Данные этикетки
            font: Шрифт, зарегистрированный для этого вызова генерации
        """
        page_doc = self.backend.from_bytes(self.draw(label, font))
        # Владение передаём сразу: документ закроется даже если импорт упадёт
        document.adopt(page_doc)
        document.import_page(page_doc, 0)

    def draw(self, label: LabelRecord, font: ResolvedFont) -> bytes:
        """
        Рисует этикетку в отдельный одностраничный PDF.

        Returns:
            bytes: PDF с одной страницей
        """
        g = self.geometry
        width, height = g.width, g.height

        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=(width, height))
        c.setPageRotation(g.ROTATION_DEGREES)

        # Рамка
        c.setLineWidth(g.FRAME_LINE_WIDTH)
        c.rect(
            g.frame_inset,
            g.frame_inset,
            width - g.frame_inset * 2,
            height - g.frame_inset * 2,
            stroke=1,
            fill=0,
        )

        c.setFont(font.name, g.FONT_SIZE)
        c.setFillColorRGB(0, 0, 0)
        for line in self.layout(label, font.metrics):
            c.drawString(line.x, line.y, line.text)

        c.showPage()
        c.save()
        return buffer.getvalue()

    def layout(self, label: LabelRecord, metrics: FontMetrics) -> list[PlacedLine]:
        """
        Раскладка строк этикетки.

        Номенклатура занимает место между подписью и строкой количества;
        то, что не поместилось, отбрасывается.

        Returns:
            Непустые строки с координатами, сверху вниз
        """
        g = self.geometry
        font_size = g.FONT_SIZE
        line_height = g.LINE_HEIGHT

        caption_y = g.height - g.content_inset - font_size
        shipment_y = g.content_inset
        order_y = shipment_y + line_height
        quantity_y = order_y + line_height * 1.5

        nomenclature_y = caption_y - line_height * 1.5
        available_height = nomenclature_y - quantity_y - line_height
        max_lines = max(1, math.floor(available_height / line_height))
        max_text_width = g.width - g.content_inset * 2

        nomenclature = wrap_by_words(label.nomenclature, font_size, max_text_width, metrics)

        rows: list[tuple[float, str]] = [(caption_y, g.CAPTION)]
        rows.extend(
            (nomenclature_y - index * line_height, line)
            for index, line in enumerate(itertools.islice(nomenclature, max_lines))
        )
        rows.append((quantity_y, label.quantity_line))
        rows.append((order_y, label.order_number))
        rows.append((shipment_y, label.shipment_number))

        placed: list[PlacedLine] = []
        for y, text in rows:
            text = text.strip()
            if not text:
                continue
            x = center_offset(text, font_size, g.width, metrics)
            placed.append(PlacedLine(text=text, x=x, y=y))

        return placed
