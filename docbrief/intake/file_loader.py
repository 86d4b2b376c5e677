import mimetypes
from pathlib import Path

from docbrief.intake.file_validator import DOCX_MEDIA_TYPE
from docbrief.intake.models import UploadedFile

mimetypes.add_type(DOCX_MEDIA_TYPE, ".docx")


class FileLoader:
    """Reads a document from disk into an UploadedFile."""

    def load(self, path: Path) -> UploadedFile:
        """Read file bytes and declared metadata.

        Raises:
            FileNotFoundError: if the file does not exist at the given path.
        """
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        content = path.read_bytes()
        media_type, _ = mimetypes.guess_type(path.name)
        return UploadedFile(
            content=content,
            name=path.name,
            size=len(content),
            media_type=media_type or "",
        )
