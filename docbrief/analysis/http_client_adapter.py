from typing import Any, ClassVar

import httpx

from docbrief.analysis.client_base import BaseAnalysisClient
from docbrief.analysis.exceptions import AnalysisNetworkError, AnalysisValidationError
from docbrief.analysis.models import RATE_LIMIT_CODE
from docbrief.intake.models import DocumentKind


class HttpAnalysisClient(BaseAnalysisClient):
    """Client for the hosted analysis functions (JSON over HTTPS).

    The functions answer most failures with HTTP 200 and ``success: false``;
    a 429 from the gateway is translated into the rate-limit error code.
    Each document kind has its own analysis and Q&A function; ``kind`` picks
    the pair unless explicit endpoints are given.
    """

    ENDPOINTS: ClassVar[dict[DocumentKind, tuple[str, str]]] = {
        DocumentKind.CONTRACT: ("analyze-contract-v2", "contract-qa"),
        DocumentKind.OFFER_LETTER: ("analyze-offer-letter", "offer-letter-qa"),
    }

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        timeout_seconds: float,
        kind: DocumentKind = DocumentKind.CONTRACT,
        analysis_endpoint: str | None = None,
        qa_endpoint: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = httpx.Timeout(timeout_seconds)
        default_analysis, default_qa = self.ENDPOINTS[kind]
        self._analysis_endpoint = analysis_endpoint or default_analysis
        self._qa_endpoint = qa_endpoint or default_qa
        self._transport = transport
        self._headers = {"Content-Type": "application/json"}
        if api_key:
            self._headers["Authorization"] = f"Bearer {api_key}"
            self._headers["apikey"] = api_key

    async def analyze(self, document_text: str, *, identity_token: str | None = None) -> Any:
        body: dict[str, Any] = {"documentText": document_text}
        if identity_token:
            body["fingerprint"] = identity_token
        return await self._post(self._analysis_endpoint, body)

    async def ask(
        self,
        *,
        original_text: str,
        analysis_result: dict[str, Any],
        messages: list[dict[str, str]],
    ) -> Any:
        body = {
            "originalText": original_text,
            "analysisResult": analysis_result,
            "messages": messages,
        }
        return await self._post(self._qa_endpoint, body)

    async def _post(self, endpoint: str, body: dict[str, Any]) -> Any:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                headers=self._headers,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(endpoint, json=body)
        except httpx.HTTPError as exc:
            raise AnalysisNetworkError(f"Analysis service network error: {exc!r}") from exc

        if response.status_code == 429:
            return {
                "success": False,
                "error": "Too many requests",
                "errorCode": RATE_LIMIT_CODE,
            }

        try:
            payload = response.json()
        except ValueError as exc:
            if response.is_error:
                raise AnalysisNetworkError(
                    f"Analysis service returned HTTP {response.status_code}"
                ) from exc
            raise AnalysisValidationError(f"Invalid JSON response: {exc}") from exc

        if response.is_error and not (isinstance(payload, dict) and payload.get("success") is False):
            raise AnalysisNetworkError(f"Analysis service returned HTTP {response.status_code}")
        return payload
