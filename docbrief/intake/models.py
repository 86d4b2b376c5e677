from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath


@dataclass(frozen=True)
class UploadedFile:
    """A document selected by the user, as received at the upload boundary."""

    content: bytes = field(repr=False)
    name: str
    size: int
    media_type: str = ""

    @property
    def extension(self) -> str:
        return PurePath(self.name).suffix.lower()


class FileValidationError(str, Enum):
    UNSUPPORTED_TYPE = "unsupported_type"
    FILE_TOO_LARGE = "file_too_large"
    CANNOT_READ = "cannot_read"


class DocumentKind(str, Enum):
    """Which explainer a document goes through; picks endpoints, prompts and copy."""

    CONTRACT = "contract"
    OFFER_LETTER = "offer_letter"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")
