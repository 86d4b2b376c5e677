"""Tests for Analyzer orchestration: client call + response validation."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from docbrief.analysis.analyzer import Analyzer
from docbrief.analysis.client_base import BaseAnalysisClient
from docbrief.analysis.exceptions import (
    AnalysisError,
    AnalysisNetworkError,
    AnalysisValidationError,
)
from docbrief.analysis.models import (
    GENERIC_ANALYSIS_MESSAGE,
    OFFER_LETTER_ANALYSIS_MESSAGE,
    RATE_LIMIT_MESSAGE,
    AnalysisFailure,
    AnalysisSuccess,
)
from docbrief.intake.models import DocumentKind


def _make_analyzer(
    analyze_result: object = None,
    analyze_error: Exception | None = None,
) -> tuple[Analyzer, MagicMock]:
    client = MagicMock(spec=BaseAnalysisClient)
    client.analyze = AsyncMock(return_value=analyze_result, side_effect=analyze_error)
    client.ask = AsyncMock()
    return Analyzer(client=client), client


class TestAnalyze:
    @pytest.mark.asyncio
    async def test_returns_success(self) -> None:
        analyzer, client = _make_analyzer({"success": True, "analysis": {"a": 1}})
        result = await analyzer.analyze("text", identity_token="fp_1")
        assert result == AnalysisSuccess(analysis={"a": 1})
        client.analyze.assert_awaited_once_with("text", identity_token="fp_1")

    @pytest.mark.asyncio
    async def test_returns_service_failure(self) -> None:
        analyzer, _ = _make_analyzer({"success": False, "error": "boom"})
        result = await analyzer.analyze("text")
        assert isinstance(result, AnalysisFailure)
        assert result.detail == "boom"

    @pytest.mark.asyncio
    async def test_network_error_becomes_generic_failure(self) -> None:
        analyzer, _ = _make_analyzer(analyze_error=AnalysisNetworkError("refused"))
        result = await analyzer.analyze("text")
        assert isinstance(result, AnalysisFailure)
        assert result.message == GENERIC_ANALYSIS_MESSAGE
        assert result.detail == "refused"

    @pytest.mark.asyncio
    async def test_malformed_payload_becomes_generic_failure(self) -> None:
        analyzer, _ = _make_analyzer({"unexpected": True})
        result = await analyzer.analyze("text")
        assert isinstance(result, AnalysisFailure)
        assert result.message == GENERIC_ANALYSIS_MESSAGE

    @pytest.mark.asyncio
    async def test_calls_client_exactly_once(self) -> None:
        analyzer, client = _make_analyzer(analyze_error=AnalysisValidationError("bad"))
        await analyzer.analyze("text")
        assert client.analyze.await_count == 1


class TestOfferLetterAnalyze:
    @pytest.mark.asyncio
    async def test_network_error_uses_offer_letter_copy(self) -> None:
        client = MagicMock(spec=BaseAnalysisClient)
        client.analyze = AsyncMock(side_effect=AnalysisNetworkError("refused"))
        analyzer = Analyzer(client=client, kind=DocumentKind.OFFER_LETTER)

        result = await analyzer.analyze("text")

        assert isinstance(result, AnalysisFailure)
        assert result.message == OFFER_LETTER_ANALYSIS_MESSAGE

    @pytest.mark.asyncio
    async def test_service_failure_uses_offer_letter_copy(self) -> None:
        client = MagicMock(spec=BaseAnalysisClient)
        client.analyze = AsyncMock(return_value={"success": False, "error": "boom"})
        analyzer = Analyzer(client=client, kind=DocumentKind.OFFER_LETTER)

        result = await analyzer.analyze("text")

        assert isinstance(result, AnalysisFailure)
        assert result.message == OFFER_LETTER_ANALYSIS_MESSAGE

    @pytest.mark.asyncio
    async def test_rate_limit_copy_is_shared(self) -> None:
        client = MagicMock(spec=BaseAnalysisClient)
        client.analyze = AsyncMock(
            return_value={"success": False, "error": "slow", "errorCode": "rate_limited"}
        )
        analyzer = Analyzer(client=client, kind=DocumentKind.OFFER_LETTER)

        result = await analyzer.analyze("text")

        assert isinstance(result, AnalysisFailure)
        assert result.message == RATE_LIMIT_MESSAGE


class TestAsk:
    @pytest.mark.asyncio
    async def test_returns_reply(self) -> None:
        analyzer, client = _make_analyzer()
        client.ask.return_value = {"success": True, "reply": "Thirty days."}
        reply = await analyzer.ask(
            original_text="contract",
            analysis_result={"a": 1},
            messages=[{"role": "user", "content": "Notice?"}],
        )
        assert reply == "Thirty days."
        client.ask.assert_awaited_once_with(
            original_text="contract",
            analysis_result={"a": 1},
            messages=[{"role": "user", "content": "Notice?"}],
        )

    @pytest.mark.asyncio
    async def test_failure_raises(self) -> None:
        analyzer, client = _make_analyzer()
        client.ask.return_value = {"success": False, "error": "nope"}
        with pytest.raises(AnalysisError):
            await analyzer.ask(original_text="c", analysis_result={}, messages=[])
