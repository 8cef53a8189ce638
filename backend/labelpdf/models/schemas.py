"""
Pydantic схемы для API.

Модели запросов и ответов. Поля в JSON — camelCase.
"""

from pydantic import BaseModel, ConfigDict, Field

from labelpdf.models.label_types import GenerationRequest, LabelRecord


class LabelDto(BaseModel):
    """Этикетка в запросе."""

    model_config = ConfigDict(populate_by_name=True)

    nomenclature: str = Field(default="", description="Номенклатура (переносится по словам)")
    quantity: str = Field(default="", description="Количество")
    unit_of_measure: str = Field(
        default="", alias="unitOfMeasure", description="Единица измерения"
    )
    order_number: str = Field(default="", alias="orderNumber", description="Номер заказа")
    shipment_number: str = Field(
        default="", alias="shipmentNumber", description="Номер отгрузки"
    )

    def to_record(self) -> LabelRecord:
        return LabelRecord(
            nomenclature=self.nomenclature,
            quantity=self.quantity,
            unit_of_measure=self.unit_of_measure,
            order_number=self.order_number,
            shipment_number=self.shipment_number,
        )


class GeneratePdfRequestDto(BaseModel):
    """Запрос на генерацию PDF: исходный файл + этикетки по порядку страниц."""

    model_config = ConfigDict(populate_by_name=True)

    base_file: str = Field(alias="baseFile", description="Путь к исходному PDF")
    labels: list[LabelDto] = Field(default_factory=list, description="Этикетки по порядку")
    output_file: str = Field(
        default="",
        alias="outputFile",
        description="Путь для результата (пусто — путь из настроек)",
    )

    def to_request(self) -> GenerationRequest:
        return GenerationRequest(
            base_path=self.base_file,
            output_path=self.output_file,
            labels=[label.to_record() for label in self.labels],
        )


class ApiError(BaseModel):
    """Тело ответа с ошибкой."""

    message: str = Field(description="Описание ошибки")
