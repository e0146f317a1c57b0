"""Gemini orchestration for the financial assistant.

Responsibilities:
    - Configuration loading from the environment
    - Prompt assembly: system persona, replayed history, document parts
    - Model gateway: one Gemini call per request with fixed decoding parameters
    - Failure classification into the shared error taxonomy

Keeps the google-genai SDK behind ModelGateway so the HTTP layer and the
conversation log never depend on it directly.
"""

from finchat.agent.config import AssistantConfig, get_assistant_config
from finchat.agent.gateway import ModelGateway, get_model_gateway
from finchat.agent.prompts import FINANCIAL_SYSTEM_PROMPT, assemble_request

__all__ = [
    "FINANCIAL_SYSTEM_PROMPT",
    "AssistantConfig",
    "ModelGateway",
    "assemble_request",
    "get_assistant_config",
    "get_model_gateway",
]
