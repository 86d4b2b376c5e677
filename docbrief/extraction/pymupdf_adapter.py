import pymupdf

from docbrief.extraction.base import PAGE_SEPARATOR, BasePdfExtractor
from docbrief.extraction.exceptions import ExtractionError, is_password_error


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts text from PDF using PyMuPDF."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.needs_pass:
                    raise ExtractionError.password_protected("pymupdf: document needs a password")
                pages = [page.get_text() for page in doc]
            return PAGE_SEPARATOR.join(pages).strip()
        except ExtractionError:
            raise
        except Exception as exc:
            if is_password_error(exc):
                raise ExtractionError.password_protected(
                    f"pymupdf: encrypted document: {exc!r}"
                ) from exc
            raise ExtractionError.corrupted(f"pymupdf extraction failed: {exc!r}") from exc
