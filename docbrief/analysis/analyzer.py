"""AI-powered contract and offer-letter analyzer."""

from typing import Any

from docbrief.analysis.base import BaseAnalyzer
from docbrief.analysis.client_base import BaseAnalysisClient
from docbrief.analysis.exceptions import AnalysisError
from docbrief.analysis.models import (
    AnalysisFailure,
    AnalysisOutcome,
    AnalysisSuccess,
    generic_failure_message,
)
from docbrief.analysis.validator import parse_analysis_response, parse_qa_response
from docbrief.intake.models import DocumentKind
from docbrief.logging.logger import Log


class Analyzer(BaseAnalyzer):
    """Sends document text to an analysis client and validates what comes back."""

    def __init__(
        self,
        *,
        client: BaseAnalysisClient,
        kind: DocumentKind = DocumentKind.CONTRACT,
    ) -> None:
        self._client = client
        self._kind = kind
        self._failure_message = generic_failure_message(kind)

    @property
    def kind(self) -> DocumentKind:
        return self._kind

    async def analyze(
        self,
        document_text: str,
        *,
        identity_token: str | None = None,
    ) -> AnalysisOutcome:
        Log.info(f"Requesting {self._kind.label} analysis for {len(document_text)} chars")
        try:
            payload = await self._client.analyze(document_text, identity_token=identity_token)
            outcome = parse_analysis_response(payload, generic_message=self._failure_message)
        except AnalysisError as exc:
            Log.error(f"Analysis failed: {exc}", error_type=type(exc).__name__)
            return AnalysisFailure(message=self._failure_message, detail=str(exc))

        if isinstance(outcome, AnalysisSuccess):
            Log.info("Analysis complete", document_type=outcome.document_type)
        else:
            Log.warning(
                "Analysis service reported failure",
                code=outcome.code,
                detail=outcome.detail,
            )
        return outcome

    async def ask(
        self,
        *,
        original_text: str,
        analysis_result: dict[str, Any],
        messages: list[dict[str, str]],
    ) -> str:
        Log.debug(f"Sending Q&A request with {len(messages)} messages")
        payload = await self._client.ask(
            original_text=original_text,
            analysis_result=analysis_result,
            messages=messages,
        )
        return parse_qa_response(payload)
