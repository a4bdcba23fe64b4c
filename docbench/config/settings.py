"""Application settings loaded from environment variables via pydantic-settings.

Values come from two sources, in priority order:

  1. Environment variables, e.g. ``GEMINI_API_KEY=...`` (always wins)
  2. A ``.env`` file in the working directory (local development)

Field names map to upper-cased variable names automatically.  The Gemini
credential also answers to plain ``API_KEY``, the name the browser build of
the workbench used.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Provider names accepted by ``llm_provider``; "auto" picks the first one
# with a configured key (see docbench.main._build_llm_provider).
LLM_PROVIDER_CHOICES = ("auto", "gemini", "openai", "anthropic")


class Settings(BaseSettings):
    """docbench application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # === LLM providers ===
    # Empty string = "not configured".
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("gemini_api_key", "GEMINI_API_KEY", "API_KEY"),
    )
    openai_api_key: str = ""
    openai_base_url: str = ""  # OpenAI-compatible endpoints (TogetherAI, Groq, ...)
    anthropic_api_key: str = ""
    llm_provider: str = "auto"

    # === App config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"
    config_path: str = "config/config.yaml"

    def get_available_llm_providers(self) -> list[str]:
        """Return provider names that have a non-empty API key configured."""
        providers: list[str] = []
        if self.gemini_api_key:
            providers.append("gemini")
        if self.openai_api_key:
            providers.append("openai")
        if self.anthropic_api_key:
            providers.append("anthropic")
        return providers
