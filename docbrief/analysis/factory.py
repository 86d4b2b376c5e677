from typing import ClassVar

from docbrief.analysis.analyzer import Analyzer
from docbrief.analysis.base import BaseAnalyzer
from docbrief.analysis.client_base import BaseAnalysisClient
from docbrief.analysis.example_client_adapter import ExampleAnalysisClient
from docbrief.analysis.http_client_adapter import HttpAnalysisClient
from docbrief.analysis.openai_client_adapter import OpenAIAnalysisClient
from docbrief.config.settings import Settings
from docbrief.intake.models import DocumentKind


class AnalyzerFactory:
    """Creates the configured analyzer for one document kind."""

    PROVIDERS: ClassVar[tuple[str, ...]] = ("http", "openai", "openai_compatible", "example")

    @classmethod
    def create(
        cls,
        settings: Settings,
        kind: DocumentKind = DocumentKind.CONTRACT,
    ) -> BaseAnalyzer:
        """Create an analyzer from application settings."""
        return Analyzer(client=cls.create_client(settings, kind), kind=kind)

    @classmethod
    def create_client(
        cls,
        settings: Settings,
        kind: DocumentKind = DocumentKind.CONTRACT,
    ) -> BaseAnalysisClient:
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return ExampleAnalysisClient(kind)
        if provider == "http":
            analysis_endpoint, qa_endpoint = cls._resolve_endpoints(kind, settings)
            return HttpAnalysisClient(
                base_url=settings.analysis_base_url,
                api_key=settings.analysis_api_key,
                timeout_seconds=settings.analysis_timeout_seconds,
                kind=kind,
                analysis_endpoint=analysis_endpoint,
                qa_endpoint=qa_endpoint,
            )
        if provider in ("openai", "openai_compatible"):
            return OpenAIAnalysisClient(
                api_key=settings.analysis_openai_api_key,
                model=settings.analysis_openai_model_name,
                timeout_seconds=settings.analysis_timeout_seconds,
                base_url=cls._resolve_base_url(provider, settings),
                temperature=settings.analysis_openai_temperature,
                kind=kind,
            )
        raise ValueError(
            f"Unknown analysis provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

    @classmethod
    def _resolve_endpoints(cls, kind: DocumentKind, settings: Settings) -> tuple[str, str]:
        if kind is DocumentKind.OFFER_LETTER:
            return settings.offer_letter_analysis_endpoint, settings.offer_letter_qa_endpoint
        return settings.analysis_endpoint, settings.qa_endpoint

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        url = (settings.analysis_openai_base_url or "").strip()
        if not url:
            raise ValueError(
                "analysis_openai_base_url is required for "
                "analysis_provider=openai_compatible"
            )
        return url
