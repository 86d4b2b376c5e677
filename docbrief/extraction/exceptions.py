from enum import Enum


class ExtractionErrorKind(str, Enum):
    PASSWORD_PROTECTED = "password_protected"
    UNSUPPORTED = "unsupported"
    CORRUPTED = "corrupted"


WORD_PASSWORD_MESSAGE = (
    "This Word document is password-protected or saved in an older format. "
    "Please upload an unlocked .docx document."
)

EXTRACTION_MESSAGES: dict[ExtractionErrorKind, str] = {
    ExtractionErrorKind.PASSWORD_PROTECTED: (
        "This PDF is password-protected. Please upload an unlocked document."
    ),
    ExtractionErrorKind.UNSUPPORTED: (
        "Legacy .doc files are not supported. Please save as .docx and try again."
    ),
    ExtractionErrorKind.CORRUPTED: (
        "We could not read this file. Please upload a clear, uncorrupted document."
    ),
}


class ExtractionError(Exception):
    """Raised when a document cannot be turned into text.

    ``message`` is safe to show to the user; the technical reason is kept in
    ``detail`` for logs.
    """

    def __init__(self, kind: ExtractionErrorKind, detail: str = "", message: str | None = None) -> None:
        self.kind = kind
        self.message = message or EXTRACTION_MESSAGES[kind]
        self.detail = detail
        super().__init__(detail or self.message)

    @classmethod
    def password_protected(cls, detail: str = "", message: str | None = None) -> "ExtractionError":
        return cls(ExtractionErrorKind.PASSWORD_PROTECTED, detail, message)

    @classmethod
    def unsupported(cls, detail: str = "") -> "ExtractionError":
        return cls(ExtractionErrorKind.UNSUPPORTED, detail)

    @classmethod
    def corrupted(cls, detail: str = "") -> "ExtractionError":
        return cls(ExtractionErrorKind.CORRUPTED, detail)


def is_password_error(exc: BaseException) -> bool:
    """Return True if a decoder exception reports a password/encryption condition.

    Decoders wrap their own errors (pdfplumber wraps pdfminer exceptions), so
    the cause chain and exception arguments are searched as well.
    """
    seen: set[int] = set()
    pending: list[BaseException] = [exc]
    while pending:
        current = pending.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        if "password" in type(current).__name__.lower():
            return True
        if "password" in str(current).lower():
            return True
        pending.extend(arg for arg in current.args if isinstance(arg, BaseException))
        if current.__cause__ is not None:
            pending.append(current.__cause__)
        if current.__context__ is not None:
            pending.append(current.__context__)
    return False
