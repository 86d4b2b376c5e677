from docbrief.intake.models import FileValidationError, UploadedFile

PDF_MEDIA_TYPE = "application/pdf"
DOC_MEDIA_TYPE = "application/msword"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

ALLOWED_MEDIA_TYPES = frozenset({PDF_MEDIA_TYPE, DOC_MEDIA_TYPE, DOCX_MEDIA_TYPE})
ALLOWED_EXTENSIONS = (".pdf", ".doc", ".docx")

MAX_FILE_SIZE_MB = 10
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024


def validate_file(
    file: UploadedFile,
    max_size_bytes: int = MAX_FILE_SIZE_BYTES,
) -> FileValidationError | None:
    """Check type and size of a selected file before any extraction work.

    A file passes the type check when either its extension or its declared
    media type is allowed; some platforms do not report media types.
    """
    has_valid_extension = file.name.lower().endswith(ALLOWED_EXTENSIONS)
    has_valid_media_type = file.media_type in ALLOWED_MEDIA_TYPES
    if not has_valid_extension and not has_valid_media_type:
        return FileValidationError.UNSUPPORTED_TYPE

    if file.size > max_size_bytes:
        return FileValidationError.FILE_TOO_LARGE

    if not file.content:
        return FileValidationError.CANNOT_READ

    return None
