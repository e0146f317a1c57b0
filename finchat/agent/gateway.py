"""Gemini model gateway.

Sends one assembled OutboundRequest to the Gemini chat API and returns the
reply text, or raises a classified AssistantError.

Design notes:

1. **Credential check first** - A missing key is reported before a client is
   created, so no network call is attempted without one.

2. **One call, no retries** - Each ``send`` makes exactly one request. Errors
   surface immediately to the caller, which turns them into a visible turn.

3. **Bounded wait** - The SDK call is wrapped in ``asyncio.wait_for`` with
   ``AssistantConfig.request_timeout``; expiry is an upstream failure.

4. **Singleton** - The client is created lazily and reused across requests
   through ``get_model_gateway``.
"""

import asyncio
import base64
import logging
from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from finchat.agent.config import AssistantConfig, get_assistant_config
from finchat.errors import InvalidCredentialError, MissingCredentialError, UpstreamError
from finchat.models.schemas import OutboundRequest, TextPart

logger = logging.getLogger(__name__)

_UNAUTHORIZED = 401


def is_credential_error(error: Exception) -> bool:
    """Check whether an upstream failure is an API key rejection.

    Args:
        error: Exception raised by the Gemini SDK.

    Returns:
        True for 401 API errors or errors mentioning the API key. A 403 alone
        is not enough: Gemini also uses it for disabled APIs and regions.
    """
    if isinstance(error, genai_errors.APIError) and error.code == _UNAUTHORIZED:
        return True
    return "api key" in str(error).lower()


class ModelGateway:
    """Gateway to the Gemini chat API.

    Translates OutboundRequest into google-genai types, attaches the fixed
    decoding parameters and classifies failures.
    """

    def __init__(self, config: AssistantConfig | None = None) -> None:
        """Initialize the gateway.

        Args:
            config: Optional assistant configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_assistant_config()
        self._client: genai.Client | None = None

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self._config.api_key)
        return self._client

    def _generation_config(self, request: OutboundRequest) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=request.system_instruction,
            max_output_tokens=self._config.max_output_tokens,
            temperature=self._config.temperature,
        )

    @staticmethod
    def _history(request: OutboundRequest) -> list[types.Content]:
        return [
            types.Content(role=turn.role, parts=[types.Part.from_text(text=turn.text)])
            for turn in request.history or []
        ]

    @staticmethod
    def _message_parts(request: OutboundRequest) -> list[types.Part]:
        """Convert message parts, decoding inline documents back to bytes."""
        parts: list[types.Part] = []
        for part in request.parts:
            if isinstance(part, TextPart):
                parts.append(types.Part.from_text(text=part.text))
            else:
                parts.append(
                    types.Part.from_bytes(
                        data=base64.b64decode(part.data),
                        mime_type=part.mime_type,
                    )
                )
        return parts

    async def send(self, request: OutboundRequest) -> str:
        """Send a request and return the model's reply.

        Args:
            request: The assembled outbound request.

        Returns:
            The reply text.

        Raises:
            MissingCredentialError: If no API key is configured.
            InvalidCredentialError: If Gemini rejects the API key.
            UpstreamError: For any other failure, including timeouts.
        """
        if not self._config.has_credential:
            raise MissingCredentialError()

        chat_kwargs: dict[str, Any] = {
            "model": self._config.model_name,
            "config": self._generation_config(request),
        }
        # Omit history entirely on the first exchange
        if request.history:
            chat_kwargs["history"] = self._history(request)

        try:
            chat = self._get_client().aio.chats.create(**chat_kwargs)
            response = await asyncio.wait_for(
                chat.send_message(self._message_parts(request)),
                timeout=self._config.request_timeout,
            )
        except TimeoutError as e:
            logger.warning(
                f"Gemini request timed out after {self._config.request_timeout}s"
            )
            raise UpstreamError() from e
        except Exception as e:
            if is_credential_error(e):
                logger.warning(f"Gemini rejected the API key: {e}")
                raise InvalidCredentialError() from e
            logger.warning(f"Gemini request failed: {e}")
            raise UpstreamError() from e

        reply = response.text
        if not reply:
            logger.warning("Gemini returned an empty reply")
            raise UpstreamError()

        logger.info(
            f"Gemini reply received ({len(reply)} chars, "
            f"{len(request.history or [])} history turns, "
            f"{len(request.parts) - 1} documents)"
        )
        return reply


# Module-level singleton instance
_model_gateway: ModelGateway | None = None


def get_model_gateway() -> ModelGateway:
    """Get or create the global model gateway.

    Returns:
        The ModelGateway instance.
    """
    global _model_gateway
    if _model_gateway is None:
        _model_gateway = ModelGateway()
    return _model_gateway
