from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pdfplumber"

    analysis_provider: str = "http"
    analysis_base_url: str = "http://localhost:54321/functions/v1"
    analysis_api_key: str = ""
    analysis_timeout_seconds: int = 110
    analysis_endpoint: str = "analyze-contract-v2"
    qa_endpoint: str = "contract-qa"
    offer_letter_analysis_endpoint: str = "analyze-offer-letter"
    offer_letter_qa_endpoint: str = "offer-letter-qa"

    analysis_openai_api_key: str = ""
    analysis_openai_model_name: str = "gpt-4o-mini"
    analysis_openai_base_url: str | None = None
    analysis_openai_temperature: float = 0.2

    min_display_seconds: float = 3.0
    max_processing_seconds: float = 120.0
    max_file_size_mb: int = 10
    max_chat_exchanges: int = 20

    founder_mode: bool = False
    usage_store_path: Path = Path.home() / ".docbrief" / "usage.json"

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024
