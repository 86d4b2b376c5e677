from abc import ABC, abstractmethod

PAGE_SEPARATOR = "\n\n"


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Extract plain text from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            Page texts in reading order, separated by a blank line.

        Raises:
            ExtractionError: password_protected if the PDF is encrypted,
                corrupted for any other failure, including a single bad page.
        """


class BaseDocxExtractor(ABC):
    """Contract for Word (OOXML) text extraction adapters."""

    @abstractmethod
    def extract(self, docx_bytes: bytes) -> str:
        """Extract the raw paragraph text of a .docx document in one pass.

        Raises:
            ExtractionError: on encrypted or malformed documents.
        """
