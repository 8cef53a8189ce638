"""
Тесты сервиса склейки PDF.

Покрывает:
- Чередование страниц исходника и этикеток
- Путь результата по умолчанию и создание папок
- Ошибки: нет исходника, нет шрифта, битый PDF
- Закрытие документов на всех путях выхода
- Подменяемый бэкенд документов и поля контекста в логах
"""

import logging
from pathlib import Path

import pikepdf
import pytest

from labelpdf.config import LABEL_PAGE
from labelpdf.exceptions import PdfFileNotFoundError, PdfGenerationError
from labelpdf.models.label_types import GenerationRequest, LabelRecord
from labelpdf.services.documents import PikePdfDocument
from labelpdf.services.fonts import FontResolver
from labelpdf.services.label_renderer import LabelPageRenderer
from labelpdf.services.merger import PdfMergeService

# === Fixtures ===


@pytest.fixture
def service(tmp_path: Path, font_file: str) -> PdfMergeService:
    return PdfMergeService(output_file=str(tmp_path / "default" / "result.pdf"), font_file=font_file)


@pytest.fixture
def output_path(tmp_path: Path) -> Path:
    return tmp_path / "out" / "nested" / "merged.pdf"


def make_labels(count: int) -> list[LabelRecord]:
    return [
        LabelRecord(
            nomenclature=f"Item {i}",
            quantity=str(i + 1),
            unit_of_measure="pcs",
            order_number=f"Order {i}",
            shipment_number=f"Shipment {i}",
        )
        for i in range(count)
    ]


def page_kinds(path: Path) -> list[str]:
    """base / label для каждой страницы (по размеру и повороту)."""
    kinds = []
    with pikepdf.open(path) as pdf:
        for page in pdf.pages:
            is_label = (
                abs(float(page.mediabox[2]) - LABEL_PAGE.width) < 0.01
                and int(page.obj.get("/Rotate", 0)) == LABEL_PAGE.ROTATION_DEGREES
            )
            kinds.append("label" if is_label else "base")
    return kinds


# === Чередование ===


class TestInterleaving:
    """Порядок страниц в результате."""

    def test_more_pages_than_labels(self, service, make_base_pdf, output_path):
        """3 страницы + 2 этикетки = base, label, base, label, base."""
        base = make_base_pdf(3)

        service.generate(GenerationRequest(str(base), str(output_path), make_labels(2)))

        assert page_kinds(output_path) == ["base", "label", "base", "label", "base"]

    def test_more_labels_than_pages(self, service, make_base_pdf, output_path):
        """Лишние этикетки всё равно добавляются в конец."""
        base = make_base_pdf(1)

        service.generate(GenerationRequest(str(base), str(output_path), make_labels(3)))

        assert page_kinds(output_path) == ["base", "label", "label", "label"]

    @pytest.mark.parametrize(("pages", "labels"), [(1, 1), (3, 1), (2, 0), (4, 4), (2, 5)])
    def test_page_count_is_sum(self, service, make_base_pdf, output_path, pages, labels):
        base = make_base_pdf(pages)

        service.generate(GenerationRequest(str(base), str(output_path), make_labels(labels)))

        with pikepdf.open(output_path) as pdf:
            assert len(pdf.pages) == pages + labels

    def test_base_page_copied_unchanged(self, service, make_base_pdf, output_path):
        """1 страница, 0 этикеток — результат совпадает с исходником."""
        base = make_base_pdf(1)

        service.generate(GenerationRequest(str(base), str(output_path), []))

        with pikepdf.open(base) as source, pikepdf.open(output_path) as result:
            assert len(result.pages) == 1
            assert [float(v) for v in result.pages[0].mediabox] == [
                float(v) for v in source.pages[0].mediabox
            ]
            assert (
                result.pages[0].obj.Contents.read_bytes()
                == source.pages[0].obj.Contents.read_bytes()
            )

    def test_existing_output_overwritten(self, service, make_base_pdf, output_path):
        output_path.parent.mkdir(parents=True)
        output_path.write_bytes(b"old content")
        base = make_base_pdf(2)

        service.generate(GenerationRequest(str(base), str(output_path), make_labels(1)))

        with pikepdf.open(output_path) as pdf:
            assert len(pdf.pages) == 3


# === Путь результата ===


class TestOutputPath:
    """Выбор пути результата."""

    def test_parent_directories_created(self, service, make_base_pdf, output_path):
        service.generate(GenerationRequest(str(make_base_pdf(1)), str(output_path), []))

        assert output_path.is_file()

    @pytest.mark.parametrize("blank", ["", "   "])
    def test_blank_output_uses_default(self, service, make_base_pdf, tmp_path, blank):
        service.generate(GenerationRequest(str(make_base_pdf(1)), blank, make_labels(1)))

        default = tmp_path / "default" / "result.pdf"
        assert default.is_file()
        assert page_kinds(default) == ["base", "label"]

    def test_resolve_output_path(self, service):
        assert service.resolve_output_path("x/y.pdf") == Path("x/y.pdf")
        assert service.resolve_output_path("") == Path(service.output_file)


# === Ошибки ===


class TestErrors:
    """Ошибки и отсутствие побочных эффектов."""

    def test_missing_base_file(self, service, tmp_path, output_path):
        missing = tmp_path / "nope.pdf"

        with pytest.raises(PdfFileNotFoundError) as exc_info:
            service.generate(GenerationRequest(str(missing), str(output_path), make_labels(1)))

        assert exc_info.value.path == str(missing)
        assert not output_path.exists()
        assert not output_path.parent.exists()

    def test_missing_font(self, tmp_path, make_base_pdf, output_path):
        service = PdfMergeService(
            output_file=str(tmp_path / "default.pdf"),
            font_resolver=FontResolver(fallback_paths=(), environ={}),
        )

        with pytest.raises(PdfGenerationError) as exc_info:
            service.generate(GenerationRequest(str(make_base_pdf(2)), str(output_path), make_labels(2)))

        assert "Unable to find a TrueType font" in exc_info.value.message
        assert not output_path.exists()

    def test_corrupt_base_pdf(self, service, tmp_path, output_path):
        broken = tmp_path / "broken.pdf"
        broken.write_bytes(b"this is not a pdf")

        with pytest.raises(PdfGenerationError) as exc_info:
            service.generate(GenerationRequest(str(broken), str(output_path), make_labels(1)))

        assert exc_info.value.message == "Failed to generate PDF"
        assert isinstance(exc_info.value.cause, pikepdf.PdfError)
        assert not output_path.exists()

    def test_render_failure_wrapped(self, font_file, make_base_pdf, tmp_path, output_path):
        class FailingRenderer(LabelPageRenderer):
            def render(self, document, label, font):
                raise OSError("disk full")

        service = PdfMergeService(
            output_file=str(tmp_path / "default.pdf"),
            font_file=font_file,
            renderer=FailingRenderer(),
        )

        with pytest.raises(PdfGenerationError) as exc_info:
            service.generate(GenerationRequest(str(make_base_pdf(1)), str(output_path), make_labels(1)))

        assert isinstance(exc_info.value.__cause__, OSError)
        assert not output_path.exists()


# === Ресурсы ===


class TestResourceRelease:
    """Все документы закрываются, в том числе при ошибке в середине цикла."""

    @pytest.fixture
    def created_documents(self, monkeypatch) -> list[PikePdfDocument]:
        created: list[PikePdfDocument] = []
        original_init = PikePdfDocument.__init__

        def tracking_init(self, pdf):
            original_init(self, pdf)
            created.append(self)

        monkeypatch.setattr(PikePdfDocument, "__init__", tracking_init)
        return created

    def test_closed_after_success(self, service, make_base_pdf, output_path, created_documents):
        service.generate(GenerationRequest(str(make_base_pdf(2)), str(output_path), make_labels(2)))

        # исходник + результат + по документу на этикетку
        assert len(created_documents) == 4
        assert all(doc.closed for doc in created_documents)

    def test_closed_after_failure_mid_loop(
        self, font_file, make_base_pdf, tmp_path, output_path, created_documents
    ):
        class FailOnSecond(LabelPageRenderer):
            def render(self, document, label, font):
                if label.order_number == "Order 1":
                    raise OSError("disk full")
                super().render(document, label, font)

        service = PdfMergeService(
            output_file=str(tmp_path / "default.pdf"),
            font_file=font_file,
            renderer=FailOnSecond(),
        )

        with pytest.raises(PdfGenerationError):
            service.generate(GenerationRequest(str(make_base_pdf(3)), str(output_path), make_labels(3)))

        assert len(created_documents) == 3
        assert all(doc.closed for doc in created_documents)

    def test_closed_when_font_missing(self, tmp_path, make_base_pdf, output_path, created_documents):
        service = PdfMergeService(
            output_file=str(tmp_path / "default.pdf"),
            font_resolver=FontResolver(fallback_paths=(), environ={}),
        )

        with pytest.raises(PdfGenerationError):
            service.generate(GenerationRequest(str(make_base_pdf(1)), str(output_path), make_labels(1)))

        assert len(created_documents) == 2
        assert all(doc.closed for doc in created_documents)


# === Подменяемый бэкенд документов ===


class RecordingDocument:
    """Документ в памяти: страницы — строковые метки."""

    def __init__(self, pages: list[str] | None = None):
        self.pages = list(pages or [])
        self.adopted: list["RecordingDocument"] = []
        self.saved_to: Path | None = None
        self.closed = False

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def import_page(self, source: "RecordingDocument", index: int) -> None:
        self.pages.append(source.pages[index])

    def adopt(self, source: "RecordingDocument") -> None:
        self.adopted.append(source)

    def save(self, path: Path) -> None:
        self.saved_to = path

    def close(self) -> None:
        self.closed = True
        for source in self.adopted:
            source.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class RecordingBackend:
    """Фабрика RecordingDocument; исходник из base_pages страниц."""

    def __init__(self, base_pages: int):
        self.base_pages = base_pages
        self.results: list[RecordingDocument] = []
        self.label_documents: list[RecordingDocument] = []

    def open(self, path: Path) -> RecordingDocument:
        return RecordingDocument([f"base{i}" for i in range(self.base_pages)])

    def new(self) -> RecordingDocument:
        document = RecordingDocument()
        self.results.append(document)
        return document

    def from_bytes(self, data: bytes) -> RecordingDocument:
        assert data.startswith(b"%PDF")
        document = RecordingDocument([f"label{len(self.label_documents)}"])
        self.label_documents.append(document)
        return document


class TestBackend:
    """Сервис работает через переданный бэкенд, а не напрямую через pikepdf."""

    def test_interleaving_through_backend(self, font_file, tmp_path, output_path):
        base_file = tmp_path / "base.pdf"
        base_file.write_bytes(b"%PDF-1.4 stub")
        backend = RecordingBackend(base_pages=3)
        service = PdfMergeService(output_file=str(tmp_path / "default.pdf"), font_file=font_file, backend=backend)

        service.generate(GenerationRequest(str(base_file), str(output_path), make_labels(2)))

        (result,) = backend.results
        assert result.pages == ["base0", "label0", "base1", "label1", "base2"]
        assert result.saved_to == output_path
        assert result.closed
        assert all(doc.closed for doc in backend.label_documents)

    def test_default_renderer_shares_backend(self):
        backend = RecordingBackend(base_pages=0)
        service = PdfMergeService(output_file="out.pdf", backend=backend)

        assert service.renderer.backend is backend


# === Логирование ===


class TestLogging:
    """Контекст генерации передаётся в записи лога полями extra."""

    def test_finish_record_has_generation_fields(self, service, make_base_pdf, output_path, caplog):
        with caplog.at_level(logging.INFO, logger="labelpdf"):
            service.generate(GenerationRequest(str(make_base_pdf(2)), str(output_path), make_labels(1)))

        (finish,) = [r for r in caplog.records if r.getMessage().startswith("[MERGE] Готово")]
        assert finish.output_path == str(output_path)
        assert finish.pages == 3
        assert finish.base_pages == 2
        assert finish.labels == 1

    def test_start_record_has_base_path(self, service, make_base_pdf, output_path, caplog):
        base = make_base_pdf(1)

        with caplog.at_level(logging.INFO, logger="labelpdf"):
            service.generate(GenerationRequest(str(base), str(output_path), []))

        (start,) = [r for r in caplog.records if r.getMessage().startswith("[MERGE] Старт")]
        assert start.base_path == str(base)
