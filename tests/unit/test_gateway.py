"""Unit tests for the Gemini model gateway.

The google-genai client is mocked; no network calls are made.
"""

import asyncio
from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_check as check
from google.genai import errors as genai_errors

from finchat.agent.config import AssistantConfig
from finchat.agent.gateway import ModelGateway, get_model_gateway, is_credential_error
from finchat.agent.prompts import FINANCIAL_SYSTEM_PROMPT, assemble_request
from finchat.conversation.store import ConversationStore
from finchat.errors import InvalidCredentialError, MissingCredentialError, UpstreamError
from finchat.models.schemas import DocumentDescriptor, Role


@pytest.fixture
def config() -> AssistantConfig:
    return AssistantConfig(api_key="test-key", model_name="gemini-test", request_timeout=5)


@pytest.fixture
def chat() -> MagicMock:
    """Mock chat session returned by client.aio.chats.create."""
    session = MagicMock()
    session.send_message = AsyncMock(return_value=MagicMock(text="Build an emergency fund first."))
    return session


@pytest.fixture
def client_cls(chat: MagicMock) -> Iterator[MagicMock]:
    with patch("finchat.agent.gateway.genai.Client") as mock_client:
        mock_client.return_value.aio.chats.create.return_value = chat
        yield mock_client


class TestModelGatewaySend:
    """Tests for request translation and successful replies."""

    async def test_returns_reply_text(
        self, config: AssistantConfig, client_cls: MagicMock
    ) -> None:
        gateway = ModelGateway(config=config)
        reply = await gateway.send(assemble_request((), "What is an emergency fund?"))

        check.equal(reply, "Build an emergency fund first.")
        client_cls.assert_called_once_with(api_key="test-key")

    async def test_attaches_fixed_decoding_parameters(
        self, config: AssistantConfig, client_cls: MagicMock
    ) -> None:
        """Every call carries 1024 max tokens, temperature 0.7 and the persona."""
        await ModelGateway(config=config).send(assemble_request((), "Hi"))

        kwargs = client_cls.return_value.aio.chats.create.call_args.kwargs
        generation_config = kwargs["config"]
        check.equal(kwargs["model"], "gemini-test")
        check.equal(generation_config.max_output_tokens, 1024)
        check.equal(generation_config.temperature, 0.7)
        check.equal(generation_config.system_instruction, FINANCIAL_SYSTEM_PROMPT)

    async def test_omits_history_on_first_exchange(
        self, config: AssistantConfig, client_cls: MagicMock
    ) -> None:
        await ModelGateway(config=config).send(assemble_request((), "Hi"))

        kwargs = client_cls.return_value.aio.chats.create.call_args.kwargs
        assert "history" not in kwargs

    async def test_replays_history_with_gemini_roles(
        self, config: AssistantConfig, client_cls: MagicMock
    ) -> None:
        store = ConversationStore()
        store.append(Role.USER, "Is a Roth IRA worth it?")
        store.append(Role.ASSISTANT, "Often, if you expect higher future taxes.")

        await ModelGateway(config=config).send(assemble_request(store.snapshot(), "Why?"))

        history = client_cls.return_value.aio.chats.create.call_args.kwargs["history"]
        check.equal([content.role for content in history], ["user", "model"])
        check.equal(history[0].parts[0].text, "Is a Roth IRA worth it?")

    async def test_sends_text_then_document_bytes(
        self,
        config: AssistantConfig,
        client_cls: MagicMock,
        chat: MagicMock,
        csv_document: DocumentDescriptor,
    ) -> None:
        """Documents are decoded back to bytes and follow the text part."""
        await ModelGateway(config=config).send(
            assemble_request((), "Analyze this", [csv_document])
        )

        (parts,) = chat.send_message.call_args.args
        check.equal(len(parts), 2)
        check.is_true(parts[0].text.startswith("Analyze this"))
        check.equal(parts[1].inline_data.mime_type, "text/csv")
        check.equal(parts[1].inline_data.data, csv_document.decode())


class TestModelGatewayFailures:
    """Tests for failure classification."""

    async def test_missing_key_fails_before_client_creation(
        self, client_cls: MagicMock
    ) -> None:
        gateway = ModelGateway(config=AssistantConfig(api_key=""))

        with pytest.raises(MissingCredentialError):
            await gateway.send(assemble_request((), "Hi"))

        client_cls.assert_not_called()

    async def test_rejected_key_is_invalid_credential(
        self, config: AssistantConfig, client_cls: MagicMock, chat: MagicMock
    ) -> None:
        chat.send_message.side_effect = RuntimeError(
            "400 INVALID_ARGUMENT. API key not valid. Please pass a valid API key."
        )

        with pytest.raises(InvalidCredentialError) as exc_info:
            await ModelGateway(config=config).send(assemble_request((), "Hi"))

        assert exc_info.value.status_code == 401

    async def test_other_errors_are_upstream_failures(
        self, config: AssistantConfig, client_cls: MagicMock, chat: MagicMock
    ) -> None:
        chat.send_message.side_effect = RuntimeError("429 RESOURCE_EXHAUSTED")

        with pytest.raises(UpstreamError):
            await ModelGateway(config=config).send(assemble_request((), "Hi"))

    async def test_timeout_is_upstream_failure(self, client_cls: MagicMock, chat: MagicMock) -> None:
        async def slow_reply(*args: object, **kwargs: object) -> MagicMock:
            await asyncio.sleep(1)
            return MagicMock(text="too late")

        chat.send_message.side_effect = slow_reply
        gateway = ModelGateway(config=AssistantConfig(api_key="k", request_timeout=0.01))

        with pytest.raises(UpstreamError):
            await gateway.send(assemble_request((), "Hi"))

    async def test_empty_reply_is_upstream_failure(
        self, config: AssistantConfig, client_cls: MagicMock, chat: MagicMock
    ) -> None:
        chat.send_message.return_value = MagicMock(text=None)

        with pytest.raises(UpstreamError):
            await ModelGateway(config=config).send(assemble_request((), "Hi"))

    async def test_makes_exactly_one_call_without_retry(
        self, config: AssistantConfig, client_cls: MagicMock, chat: MagicMock
    ) -> None:
        chat.send_message.side_effect = RuntimeError("503 UNAVAILABLE")

        with pytest.raises(UpstreamError):
            await ModelGateway(config=config).send(assemble_request((), "Hi"))

        chat.send_message.assert_called_once()


class TestIsCredentialError:
    """Tests for API key rejection detection."""

    def test_unauthorized_status_code(self) -> None:
        error = MagicMock(spec=genai_errors.APIError)
        error.code = 401

        assert is_credential_error(error) is True

    def test_permission_denied_without_key_signal(self) -> None:
        """A 403 for a disabled API or region is not a key rejection."""
        error = MagicMock(spec=genai_errors.APIError)
        error.code = 403
        error.__str__.return_value = "403 PERMISSION_DENIED. User location is not supported."

        assert is_credential_error(error) is False

    def test_permission_denied_with_key_signal(self) -> None:
        error = MagicMock(spec=genai_errors.APIError)
        error.code = 403
        error.__str__.return_value = "403 PERMISSION_DENIED. API key expired."

        assert is_credential_error(error) is True

    def test_api_key_message(self) -> None:
        assert is_credential_error(ValueError("Missing key inputs argument! API key required"))

    def test_unrelated_error(self) -> None:
        assert is_credential_error(ConnectionError("connection reset")) is False


class TestGetModelGateway:
    """Tests for get_model_gateway singleton function."""

    def test_singleton_returns_same_instance(self) -> None:
        import finchat.agent.gateway as gateway_module

        gateway_module._model_gateway = None

        with patch.object(gateway_module, "ModelGateway") as mock_gateway:
            mock_gateway.return_value = MagicMock()

            first = get_model_gateway()
            second = get_model_gateway()

            assert first is second
            mock_gateway.assert_called_once()

        gateway_module._model_gateway = None
