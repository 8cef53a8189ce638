"""
Ошибки генерации PDF.

HTTP слой переводит их в коды ответа (см. labelpdf/api/errors.py).
"""


class LabelPdfError(Exception):
    """Базовая ошибка сервиса."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PdfFileNotFoundError(LabelPdfError):
    """Исходный PDF не найден на диске."""

    def __init__(self, path: str):
        super().__init__(f"File not found: {path}")
        self.path = path


class PdfGenerationError(LabelPdfError):
    """
    Любой сбой при чтении, рендеринге или сохранении PDF.

    Исходное исключение доступно через .cause (и __cause__ при raise ... from).
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause
