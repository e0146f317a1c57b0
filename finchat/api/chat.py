"""Chat endpoint.

Rebuilds the conversation from the client transcript, assembles one Gemini
request and returns the reply. The client owns the conversation log and
records the returned reply or error itself.
"""

import logging

from fastapi import APIRouter, Depends

from finchat.agent.gateway import ModelGateway, get_model_gateway
from finchat.agent.prompts import assemble_request
from finchat.conversation.store import ConversationStore
from finchat.errors import AssistantError, UnexpectedError
from finchat.models.schemas import ChatReply, ChatRequest, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


@router.post(
    "/chat",
    response_model=ChatReply,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(
    request: ChatRequest,
    gateway: ModelGateway = Depends(get_model_gateway),
) -> ChatReply:
    """Send the user's message, with history and documents, to Gemini.

    Args:
        request: Transcript, new user message and attached documents.
        gateway: Model gateway (injected).

    Returns:
        ChatReply with the model's answer.

    Raises:
        401: Gemini rejected the API key.
        500: API key missing, upstream failure or unexpected error.
    """
    documents = request.documents or []
    logger.info(
        f"Chat request: {len(request.messages)} prior turns, {len(documents)} documents"
    )

    try:
        store = ConversationStore.from_transcript(request.messages)
        outbound = assemble_request(store.snapshot(), request.user_message, documents)
        reply = await gateway.send(outbound)
    except AssistantError as e:
        logger.warning(f"Chat failed ({e.kind.value}): {e}")
        raise
    except Exception as e:
        logger.exception(f"Chat error: {e}")
        raise UnexpectedError("Failed to process your request. Please try again.") from e

    return ChatReply(reply=reply)
