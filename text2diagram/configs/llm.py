"""
LLM provider configuration settings.

Settings for the chat model used behind the LLM call boundary.

Dependencies: pydantic_settings
System role: Model selection and client-level timeout configuration
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings


class LLMSettings(BaseSettings):
    """Chat model configuration for the Google Generative AI provider."""

    model_id: str = Field(
        default="gemini-2.0-flash",
        description="Gemini model identifier",
    )
    temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="Sampling temperature (0.0 for deterministic output)",
    )
    google_api_key: SecretStr | None = Field(
        default=None,
        description="Google API key; falls back to GOOGLE_API_KEY when unset",
    )
    timeout_seconds: float | None = Field(
        default=None,
        description="Client-level request timeout in seconds",
    )
    max_retries: int = Field(
        default=0,
        ge=0,
        description="Provider client retries (retry policy lives in the analyzer)",
    )

    class Config:
        """Pydantic config for environment variable loading."""

        env_prefix = "LLM_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
