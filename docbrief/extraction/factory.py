from docbrief.config.settings import Settings
from docbrief.extraction.base import BasePdfExtractor
from docbrief.extraction.docx_adapter import DocxAdapter
from docbrief.extraction.extractor import DocumentExtractor
from docbrief.extraction.pdfplumber_adapter import PdfPlumberAdapter
from docbrief.extraction.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Creates the PDF engine adapter and the document extractor around it."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def create_document_extractor(cls, settings: Settings) -> DocumentExtractor:
        """Build a DocumentExtractor wired to the configured PDF engine."""
        return DocumentExtractor(
            pdf_extractor=cls.create(settings),
            docx_extractor=DocxAdapter(),
        )
