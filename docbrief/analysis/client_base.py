from abc import ABC, abstractmethod
from typing import Any


class BaseAnalysisClient(ABC):
    """Contract for transport-specific analysis clients.

    Clients return the decoded response payload untouched; validation happens
    in ``docbrief.analysis.validator``.
    """

    @abstractmethod
    async def analyze(self, document_text: str, *, identity_token: str | None = None) -> Any:
        """Submit document text; return ``{"success": ..., ...}`` payload.

        Raises:
            AnalysisNetworkError: on transport failure.
            AnalysisValidationError: if the response cannot be decoded.
        """

    @abstractmethod
    async def ask(
        self,
        *,
        original_text: str,
        analysis_result: dict[str, Any],
        messages: list[dict[str, str]],
    ) -> Any:
        """Send the Q&A history; return ``{"success": ..., "reply": ...}`` payload."""
