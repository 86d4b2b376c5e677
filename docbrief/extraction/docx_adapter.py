import io

from docx import Document

from docbrief.extraction.base import BaseDocxExtractor
from docbrief.extraction.exceptions import WORD_PASSWORD_MESSAGE, ExtractionError

# Encrypted OOXML files and legacy .doc files are OLE compound files, not zips.
OLE_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


class DocxAdapter(BaseDocxExtractor):
    """Extracts raw paragraph text from .docx using python-docx."""

    def extract(self, docx_bytes: bytes) -> str:
        if docx_bytes.startswith(OLE_SIGNATURE):
            raise ExtractionError.password_protected(
                "docx payload is an OLE container (encrypted package or legacy .doc)",
                message=WORD_PASSWORD_MESSAGE,
            )
        try:
            document = Document(io.BytesIO(docx_bytes))
            paragraphs = [paragraph.text for paragraph in document.paragraphs]
            for table in document.tables:
                for row in table.rows:
                    paragraphs.append("\t".join(cell.text for cell in row.cells))
        except Exception as exc:
            raise ExtractionError.corrupted(f"python-docx extraction failed: {exc!r}") from exc
        return "\n".join(paragraphs).strip()
