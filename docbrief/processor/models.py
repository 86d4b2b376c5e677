import asyncio
from dataclasses import dataclass, field
from enum import Enum

from docbrief.complexity.scorer import ComplexityLevel
from docbrief.validation.models import ValidationResult

TIMEOUT_MESSAGE = "Analysis timed out. Please try again with a shorter document."


class ProcessingPhase(str, Enum):
    IDLE = "idle"
    EXTRACTING = "extracting"
    VALIDATING = "validating"
    AWAITING_OVERRIDE = "awaiting_override"
    SENDING_TO_ANALYSIS = "sending_to_analysis"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self in (ProcessingPhase.SUCCEEDED, ProcessingPhase.FAILED, ProcessingPhase.TIMED_OUT)


@dataclass
class ProcessingSession:
    """Working memory of one attempt to process one uploaded file.

    ``session_id`` is a generation number: async completions compare the id
    they captured with the processor's current session before applying
    anything.
    """

    session_id: int
    phase: ProcessingPhase = ProcessingPhase.IDLE
    started_at: float | None = None
    pending_text: str | None = field(default=None, repr=False)
    validation: ValidationResult | None = None
    complexity: ComplexityLevel | None = None
    error_message: str | None = None
    error_kind: str | None = None
    timeout_handle: asyncio.TimerHandle | None = field(default=None, repr=False)
    interrupted: "asyncio.Future[None] | None" = field(default=None, repr=False)
