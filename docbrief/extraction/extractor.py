"""Format dispatch for uploaded documents."""

from docbrief.extraction.base import BaseDocxExtractor, BasePdfExtractor
from docbrief.extraction.exceptions import ExtractionError
from docbrief.intake.file_validator import DOC_MEDIA_TYPE, DOCX_MEDIA_TYPE, PDF_MEDIA_TYPE
from docbrief.intake.models import UploadedFile
from docbrief.logging.logger import Log


class DocumentExtractor:
    """Converts an UploadedFile into raw text using the format-specific adapter.

    The format is taken from the file extension and, when the extension is not
    recognised, from the declared media type. Anything else is decoded as
    UTF-8 text and left for the readability check to judge. That fallback only
    serves direct callers: IntakeProcessor admits PDF and Word uploads only,
    and takes plain text through ``select_text``.
    """

    def __init__(self, pdf_extractor: BasePdfExtractor, docx_extractor: BaseDocxExtractor) -> None:
        self._pdf_extractor = pdf_extractor
        self._docx_extractor = docx_extractor

    def extract(self, file: UploadedFile) -> str:
        """Extract text from a single uploaded document.

        Raises:
            ExtractionError: with kind password_protected, unsupported or corrupted.
        """
        file_format = self._detect_format(file)
        Log.debug(
            "Starting document extraction",
            file_name=file.name,
            format=file_format,
            size=file.size,
        )
        try:
            text = self._extract_format(file_format, file.content)
        except ExtractionError as exc:
            Log.warning(
                "Document extraction failed",
                file_name=file.name,
                kind=exc.kind.value,
                detail=exc.detail,
            )
            raise
        Log.info(f"Extracted {len(text)} chars from {file.name}")
        return text

    def _extract_format(self, file_format: str, content: bytes) -> str:
        if file_format == "pdf":
            return self._pdf_extractor.extract(content)
        if file_format == "docx":
            return self._docx_extractor.extract(content)
        if file_format == "doc":
            raise ExtractionError.unsupported("legacy .doc requires server-side conversion")
        return content.decode("utf-8", errors="replace")

    @staticmethod
    def _detect_format(file: UploadedFile) -> str:
        extension = file.extension
        if extension in (".pdf", ".docx", ".doc"):
            return extension.lstrip(".")
        media_formats = {
            PDF_MEDIA_TYPE: "pdf",
            DOCX_MEDIA_TYPE: "docx",
            DOC_MEDIA_TYPE: "doc",
        }
        return media_formats.get(file.media_type, "text")
