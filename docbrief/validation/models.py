from dataclasses import dataclass
from enum import Enum


class TextValidationError(str, Enum):
    """Hard validation outcomes: processing stops."""

    INSUFFICIENT_TEXT = "insufficient_text"
    UNREADABLE_TEXT = "unreadable_text"
    NON_ENGLISH = "non_english"


class TextValidationWarning(str, Enum):
    """Soft validation outcomes: processing continues only on user confirmation."""

    NOT_CONTRACT_LIKE = "not_contract_like"


@dataclass(frozen=True)
class ValidationResult:
    """Verdict of the text validation chain plus its diagnostic counts."""

    error: TextValidationError | None
    warning: TextValidationWarning | None
    character_count: int
    keyword_count: int
    is_readable: bool

    @property
    def passed(self) -> bool:
        return self.error is None and self.warning is None
