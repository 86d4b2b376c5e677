import json

import httpx
import pytest

from docbrief.analysis.exceptions import AnalysisNetworkError, AnalysisValidationError
from docbrief.analysis.http_client_adapter import HttpAnalysisClient
from docbrief.intake.models import DocumentKind


def _make_client(handler, api_key: str = "anon-key") -> HttpAnalysisClient:  # type: ignore[no-untyped-def]
    return HttpAnalysisClient(
        base_url="https://functions.example.test/v1",
        api_key=api_key,
        timeout_seconds=5,
        transport=httpx.MockTransport(handler),
    )


class TestAnalyze:
    @pytest.mark.asyncio
    async def test_posts_document_text(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"success": True, "analysis": {"x": 1}})

        payload = await _make_client(handler).analyze("contract body", identity_token="fp_abc")

        assert payload == {"success": True, "analysis": {"x": 1}}
        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == "/v1/analyze-contract-v2"
        assert json.loads(request.content) == {
            "documentText": "contract body",
            "fingerprint": "fp_abc",
        }
        assert request.headers["Authorization"] == "Bearer anon-key"
        assert request.headers["apikey"] == "anon-key"

    @pytest.mark.asyncio
    async def test_omits_identity_when_absent(self) -> None:
        bodies: list[dict[str, str]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"success": True, "analysis": {"x": 1}})

        await _make_client(handler, api_key="").analyze("text")

        assert bodies == [{"documentText": "text"}]

    @pytest.mark.asyncio
    async def test_too_many_requests_becomes_rate_limit_payload(self) -> None:
        payload = await _make_client(lambda request: httpx.Response(429)).analyze("text")
        assert payload["success"] is False
        assert payload["errorCode"] == "rate_limited"

    @pytest.mark.asyncio
    async def test_error_status_with_failure_body_is_passed_through(self) -> None:
        body = {"success": False, "error": "Document too long"}
        payload = await _make_client(lambda request: httpx.Response(400, json=body)).analyze("t")
        assert payload == body

    @pytest.mark.asyncio
    async def test_server_error_without_json_is_network_error(self) -> None:
        client = _make_client(lambda request: httpx.Response(502, text="Bad gateway"))
        with pytest.raises(AnalysisNetworkError, match="502"):
            await client.analyze("text")

    @pytest.mark.asyncio
    async def test_invalid_json_is_validation_error(self) -> None:
        client = _make_client(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(AnalysisValidationError, match="Invalid JSON"):
            await client.analyze("text")

    @pytest.mark.asyncio
    async def test_connection_failure_is_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(AnalysisNetworkError, match="network error"):
            await _make_client(handler).analyze("text")


class TestAsk:
    @pytest.mark.asyncio
    async def test_posts_conversation(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"success": True, "reply": "Two weeks."})

        payload = await _make_client(handler).ask(
            original_text="contract",
            analysis_result={"a": 1},
            messages=[{"role": "user", "content": "Notice period?"}],
        )

        assert payload == {"success": True, "reply": "Two weeks."}
        assert seen[0].url.path == "/v1/contract-qa"
        assert json.loads(seen[0].content) == {
            "originalText": "contract",
            "analysisResult": {"a": 1},
            "messages": [{"role": "user", "content": "Notice period?"}],
        }


class TestDocumentKind:
    @pytest.mark.asyncio
    async def test_offer_letter_uses_its_own_functions(self) -> None:
        paths: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.path)
            if request.url.path.endswith("qa"):
                return httpx.Response(200, json={"success": True, "reply": "ok"})
            return httpx.Response(200, json={"success": True, "analysis": {"x": 1}})

        client = HttpAnalysisClient(
            base_url="https://functions.example.test/v1",
            api_key="",
            timeout_seconds=5,
            kind=DocumentKind.OFFER_LETTER,
            transport=httpx.MockTransport(handler),
        )
        await client.analyze("offer body")
        await client.ask(original_text="offer body", analysis_result={}, messages=[])

        assert paths == ["/v1/analyze-offer-letter", "/v1/offer-letter-qa"]

    @pytest.mark.asyncio
    async def test_explicit_endpoint_wins_over_kind(self) -> None:
        paths: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.path)
            return httpx.Response(200, json={"success": True, "analysis": {"x": 1}})

        client = HttpAnalysisClient(
            base_url="https://functions.example.test/v1",
            api_key="",
            timeout_seconds=5,
            kind=DocumentKind.OFFER_LETTER,
            analysis_endpoint="analyze-offer-letter-v2",
            transport=httpx.MockTransport(handler),
        )
        await client.analyze("offer body")

        assert paths == ["/v1/analyze-offer-letter-v2"]
