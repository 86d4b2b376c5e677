from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

from docbrief.intake.models import DocumentKind

GENERIC_ANALYSIS_MESSAGE = "We couldn't analyze this contract right now. Please try again."
OFFER_LETTER_ANALYSIS_MESSAGE = "We couldn't analyze this offer letter right now. Please try again."
RATE_LIMIT_MESSAGE = "We're experiencing high demand. Please wait a moment and try again."
RATE_LIMIT_CODE = "rate_limited"

WRONG_DOCUMENT_TYPES = frozenset({"not_contract", "not_offer_letter"})


def generic_failure_message(kind: DocumentKind) -> str:
    if kind is DocumentKind.OFFER_LETTER:
        return OFFER_LETTER_ANALYSIS_MESSAGE
    return GENERIC_ANALYSIS_MESSAGE


@dataclass(frozen=True)
class AnalysisSuccess:
    """Structured analysis returned by the analysis service.

    ``analysis`` is kept as the service sent it; only ``document_type`` is
    interpreted by the pipeline.
    """

    analysis: dict[str, Any]
    document_type: str | None = None

    @property
    def is_wrong_document_type(self) -> bool:
        return self.document_type in WRONG_DOCUMENT_TYPES


@dataclass(frozen=True)
class AnalysisFailure:
    """A failed analysis call. ``message`` is safe to show to the user."""

    message: str = GENERIC_ANALYSIS_MESSAGE
    code: str | None = None
    detail: str = ""

    @property
    def is_rate_limited(self) -> bool:
        return self.code == RATE_LIMIT_CODE


AnalysisOutcome = AnalysisSuccess | AnalysisFailure


@dataclass(frozen=True)
class ChatMessage:
    """One turn of the follow-up Q&A conversation."""

    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_wire(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}
