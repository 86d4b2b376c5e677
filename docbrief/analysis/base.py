from abc import ABC, abstractmethod
from typing import Any

from docbrief.analysis.models import AnalysisOutcome


class BaseAnalyzer(ABC):
    """Contract for document analyzers consumed by the intake pipeline."""

    @abstractmethod
    async def analyze(
        self,
        document_text: str,
        *,
        identity_token: str | None = None,
    ) -> AnalysisOutcome:
        """Analyze document text exactly once.

        Returns:
            AnalysisSuccess, or AnalysisFailure for every transport,
            service-reported or payload-shape problem. Never raises for those.
        """

    @abstractmethod
    async def ask(
        self,
        *,
        original_text: str,
        analysis_result: dict[str, Any],
        messages: list[dict[str, str]],
    ) -> str:
        """Answer a follow-up question about an analyzed document.

        Raises:
            AnalysisError: on any failure.
        """
