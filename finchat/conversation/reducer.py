"""Reduce chat outcomes into the conversation log.

The user turn is recorded before the model is called so it stays visible when
the call fails. A failure becomes a synthetic assistant turn, keeping the log
a continuous conversation.
"""

import logging
from collections.abc import Sequence
from typing import Protocol

from finchat.agent.prompts import assemble_request
from finchat.conversation.store import ConversationStore
from finchat.errors import AssistantError, FailureKind, UnexpectedError
from finchat.models.schemas import DocumentDescriptor, Message, OutboundRequest, Role

logger = logging.getLogger(__name__)

CREDENTIAL_FAILURE_MESSAGE = (
    "Sorry, I encountered an error. Please make sure your Gemini API key is "
    "configured. Check the environment variables in your project settings."
)
GENERIC_FAILURE_MESSAGE = (
    "Sorry, I encountered an error while processing your request. Please try again."
)

FAILURE_MESSAGES: dict[FailureKind, str] = {
    FailureKind.MISSING_CREDENTIAL: CREDENTIAL_FAILURE_MESSAGE,
    FailureKind.INVALID_CREDENTIAL: CREDENTIAL_FAILURE_MESSAGE,
}


class ReplySource(Protocol):
    """Anything that can answer an OutboundRequest (the model gateway)."""

    async def send(self, request: OutboundRequest) -> str: ...


def record_user_turn(
    store: ConversationStore,
    text: str,
    documents: Sequence[DocumentDescriptor] = (),
) -> Message:
    """Append the user's turn, noting attached document names."""
    content = text
    if documents:
        names = ", ".join(doc.name for doc in documents)
        content += f"\n\n[Documents attached: {names}]"
    return store.append(Role.USER, content)


def record_reply(store: ConversationStore, reply: str) -> Message:
    return store.append(Role.ASSISTANT, reply)


def record_failure(store: ConversationStore, kind: FailureKind) -> Message:
    """Append a synthetic assistant turn explaining the failure."""
    return store.append(
        Role.ASSISTANT, FAILURE_MESSAGES.get(kind, GENERIC_FAILURE_MESSAGE)
    )


async def converse(
    store: ConversationStore,
    gateway: ReplySource,
    text: str,
    documents: Sequence[DocumentDescriptor] = (),
) -> Message:
    """Run one request-response cycle against the store.

    Args:
        store: The session's conversation log.
        gateway: Model gateway that answers the assembled request.
        text: The new user utterance.
        documents: Descriptors to attach, in order.

    Returns:
        The assistant turn appended to the store (reply or failure notice).
    """
    prior = store.snapshot()
    record_user_turn(store, text, documents)

    try:
        request = assemble_request(prior, text, documents)
        reply = await gateway.send(request)
    except AssistantError as e:
        logger.warning(f"Chat cycle failed ({e.kind.value}): {e}")
        return record_failure(store, e.kind)
    except Exception as e:
        logger.exception(f"Unexpected chat cycle failure: {e}")
        return record_failure(store, UnexpectedError.kind)

    return record_reply(store, reply)
