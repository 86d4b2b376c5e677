"""User-facing copy for validation outcomes. No technical detail is exposed."""

from dataclasses import dataclass

from docbrief.intake.models import FileValidationError
from docbrief.validation.models import TextValidationError, TextValidationWarning


@dataclass(frozen=True)
class UserMessage:
    title: str
    description: str

    def __str__(self) -> str:
        return f"{self.title} {self.description}"


ERROR_MESSAGES: dict[str, UserMessage] = {
    FileValidationError.UNSUPPORTED_TYPE.value: UserMessage(
        "Unsupported file type.",
        "Please upload a PDF or Word document (.doc or .docx).",
    ),
    FileValidationError.FILE_TOO_LARGE.value: UserMessage(
        "File too large.",
        "Please upload a document smaller than 10MB.",
    ),
    FileValidationError.CANNOT_READ.value: UserMessage(
        "We could not read this file.",
        "Please upload a clear, uncorrupted document.",
    ),
    TextValidationError.INSUFFICIENT_TEXT.value: UserMessage(
        "This file does not appear to contain readable contract text.",
        "Please upload a different document.",
    ),
    TextValidationError.NON_ENGLISH.value: UserMessage(
        "Currently, we support English contracts only.",
        "Please upload an English-language document.",
    ),
    TextValidationError.UNREADABLE_TEXT.value: UserMessage(
        "We could not extract readable text from this document.",
        "Please upload a clearer file.",
    ),
    TextValidationWarning.NOT_CONTRACT_LIKE.value: UserMessage(
        "This document may not be a contract.",
        "Are you sure you want to continue?",
    ),
}


def message_for(
    kind: FileValidationError | TextValidationError | TextValidationWarning,
) -> UserMessage:
    return ERROR_MESSAGES[kind.value]
