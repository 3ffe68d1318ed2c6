"""
Runtime configuration.

Settings are built once at the entry point and passed explicitly into the
pipeline and clients, so tests can construct them directly.
"""

import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field


Provider = Literal["openrouter", "openai", "anthropic", "ollama"]

# OpenAI-compatible base URLs per provider
PROVIDER_BASE_URLS = {
    "openrouter": "https://openrouter.ai/api/v1",
    "openai": "https://api.openai.com/v1",
    "anthropic": "https://api.anthropic.com/v1",
    "ollama": "http://localhost:11434/v1",
}


class Settings(BaseModel):
    """Configuration for the analysis pipeline and its collaborators."""

    provider: Provider = "openrouter"
    api_key: Optional[str] = None
    model: str = "gpt-4o"
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    max_tokens: Optional[int] = None
    ollama_base_url: str = PROVIDER_BASE_URLS["ollama"]
    app_url: str = "http://localhost:3000"
    app_name: str = "Treatment Plan Assistant"

    # Reference lookups
    rxnorm_base_url: str = "https://rxnav.nlm.nih.gov/REST"
    openfda_base_url: str = "https://api.fda.gov"
    openfda_api_key: Optional[str] = None
    lookup_timeout: float = Field(default=10.0, gt=0)
    enrichment_concurrency: int = Field(default=1, ge=1)

    # Model call
    llm_timeout: float = Field(default=540.0, gt=0)

    # Storage
    analysis_store_path: Optional[Path] = None

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    @property
    def base_url(self) -> str:
        if self.provider == "ollama":
            return self.ollama_base_url
        return PROVIDER_BASE_URLS[self.provider]

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables.

        The API key is read from PROVIDER_API_KEY, falling back to
        <PROVIDER>_API_KEY (e.g. OPENROUTER_API_KEY).
        """
        provider = os.getenv("PROVIDER", "openrouter").lower()
        api_key = os.getenv("PROVIDER_API_KEY") or os.getenv(f"{provider.upper()}_API_KEY")
        store_path = os.getenv("ANALYSIS_STORE_PATH")
        log_file = os.getenv("LOG_FILE")

        return cls(
            provider=provider,
            api_key=api_key,
            model=os.getenv("PROVIDER_MODEL", "gpt-4o"),
            temperature=float(os.getenv("PROVIDER_TEMPERATURE", "0.3")),
            ollama_base_url=os.getenv("OLLAMA_BASE_URL", PROVIDER_BASE_URLS["ollama"]),
            app_url=os.getenv("APP_URL", "http://localhost:3000"),
            rxnorm_base_url=os.getenv("RXNORM_BASE_URL", "https://rxnav.nlm.nih.gov/REST"),
            openfda_base_url=os.getenv("OPENFDA_BASE_URL", "https://api.fda.gov"),
            openfda_api_key=os.getenv("OPENFDA_API_KEY"),
            lookup_timeout=float(os.getenv("LOOKUP_TIMEOUT", "10")),
            enrichment_concurrency=int(os.getenv("ENRICHMENT_CONCURRENCY", "1")),
            llm_timeout=float(os.getenv("LLM_TIMEOUT", "540")),
            analysis_store_path=Path(store_path) if store_path else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=Path(log_file) if log_file else None,
        )
