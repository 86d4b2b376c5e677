import io

import pdfplumber

from docbrief.extraction.base import PAGE_SEPARATOR, BasePdfExtractor
from docbrief.extraction.exceptions import ExtractionError, is_password_error


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text from PDF using pdfplumber."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
            return PAGE_SEPARATOR.join(pages).strip()
        except ExtractionError:
            raise
        except Exception as exc:
            if is_password_error(exc):
                raise ExtractionError.password_protected(
                    f"pdfplumber: encrypted document: {exc!r}"
                ) from exc
            raise ExtractionError.corrupted(
                f"pdfplumber extraction failed: {exc!r}"
            ) from exc
