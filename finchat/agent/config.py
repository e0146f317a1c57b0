"""Assistant configuration with environment variable loading.

Pydantic-based configuration for the Gemini model gateway.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class AssistantConfig(BaseModel):
    """Configuration for the Gemini model gateway.

    The API key may be empty here. A missing key is reported per request,
    before any network call, rather than at startup.

    Attributes:
        api_key: Gemini API key.
        model_name: Gemini model identifier.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        max_output_tokens: Maximum tokens in the generated reply.
        request_timeout: Seconds to wait for a reply before giving up.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", ""),
        description="API key for the Gemini API",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        description="Model to use",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_output_tokens: int = Field(
        default=1024,
        ge=1,
        le=65536,
        description="Maximum tokens in generated response",
    )
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("LLM_TIMEOUT", "60")),
        gt=0,
        description="Seconds before an unanswered request fails",
    )

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        """Strip surrounding whitespace so a blank key counts as missing."""
        return v.strip()

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)


def get_assistant_config() -> AssistantConfig:
    """Create assistant configuration from environment.

    Returns:
        Configured AssistantConfig instance.
    """
    return AssistantConfig()
