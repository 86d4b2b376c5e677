"""Offline analysis client.

Returns a fixed, well-formed analysis without network calls. Useful for local
development and demos of the intake pipeline.
"""

from typing import Any, ClassVar

from docbrief.analysis.client_base import BaseAnalysisClient
from docbrief.intake.models import DocumentKind


class ExampleAnalysisClient(BaseAnalysisClient):
    """Example adapter that returns a canned analysis for its document kind."""

    DEFAULT_ANALYSIS: ClassVar[dict[str, Any]] = {
        "document_type_detected": "contract",
        "contract_title": "Example Services Agreement",
        "party_a": "PARTY_A",
        "party_b": "PARTY_B",
        "confidence_score": 50,
        "key_terms_summary": {},
        "sections": [],
        "red_flags": [],
        "caution_items": [],
        "missing_items": [],
        "glossary": [],
        "negotiation_tips": [],
    }
    DEFAULT_OFFER_LETTER_ANALYSIS: ClassVar[dict[str, Any]] = {
        "document_type_detected": "offer_letter",
        "company_name": "Example Corp",
        "role_title": "Example Role",
        "confidence_score": 50,
        "total_compensation_summary": {},
        "sections": [],
        "red_flags": [],
        "caution_items": [],
        "missing_items": [],
        "glossary": [],
        "negotiation_tips": [],
    }
    DEFAULT_REPLY: ClassVar[str] = "This is an offline example answer."

    def __init__(self, kind: DocumentKind = DocumentKind.CONTRACT) -> None:
        self._kind = kind

    async def analyze(self, document_text: str, *, identity_token: str | None = None) -> Any:
        _ = document_text, identity_token
        if self._kind is DocumentKind.OFFER_LETTER:
            return {"success": True, "analysis": dict(self.DEFAULT_OFFER_LETTER_ANALYSIS)}
        return {"success": True, "analysis": dict(self.DEFAULT_ANALYSIS)}

    async def ask(
        self,
        *,
        original_text: str,
        analysis_result: dict[str, Any],
        messages: list[dict[str, str]],
    ) -> Any:
        _ = original_text, analysis_result, messages
        return {"success": True, "reply": self.DEFAULT_REPLY}
