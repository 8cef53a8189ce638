"""
Типы данных для склейки PDF с этикетками.
"""

from dataclasses import dataclass, field


@dataclass
class LabelRecord:
    """
    Данные одной этикетки.

    Все поля — свободный текст. Пустое значение = строка не печатается.
    """

    nomenclature: str = ""
    quantity: str = ""
    unit_of_measure: str = ""
    order_number: str = ""
    shipment_number: str = ""

    @property
    def quantity_line(self) -> str:
        """Количество + единица измерения без лишних пробелов ("12 шт")."""
        return f"{self.quantity.strip()} {self.unit_of_measure.strip()}".strip()


@dataclass
class GenerationRequest:
    """
    Запрос на генерацию итогового PDF.

    Этикетка с индексом i идёт сразу после страницы i исходного PDF.
    Пустой output_path = путь по умолчанию из настроек.
    """

    base_path: str
    output_path: str = ""
    labels: list[LabelRecord] = field(default_factory=list)
