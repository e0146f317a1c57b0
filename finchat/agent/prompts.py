"""Prompt assembly for Gemini chat requests.

Builds one OutboundRequest from the conversation snapshot, the new user text
and any attached documents.
"""

from collections.abc import Sequence

from finchat.models.schemas import (
    DocumentDescriptor,
    HistoryTurn,
    InlineDataPart,
    Message,
    OutboundRequest,
    Role,
    TextPart,
)

FINANCIAL_SYSTEM_PROMPT = """You are FinanceAI, a professional financial advisor AI assistant. Your role is to help users with:

1. Investment guidance and portfolio analysis
2. Personal budgeting and financial planning
3. Tax strategies and optimization
4. Debt management and credit improvement
5. Retirement planning
6. Savings strategies
7. Financial goal setting

Guidelines:
- Provide practical, actionable advice
- Always remind users that you're not a licensed financial advisor and they should consult with professionals for major decisions
- Use simple language for complex financial concepts
- Include specific examples and scenarios when helpful
- Ask clarifying questions to provide personalized advice
- Stay focused on financial topics; politely redirect non-financial questions
- When documents are provided, analyze them carefully and reference specific data from them
- Be thorough in document analysis - extract key financial metrics, patterns, and insights

Keep responses concise but informative (2-3 paragraphs typically)."""

DOCUMENT_INSTRUCTION = "Content to analyze for financial insights."


def document_annotation(document: DocumentDescriptor) -> str:
    """Textual cue naming a document ahead of its bytes."""
    return f"\n[Document: {document.name}]\n{DOCUMENT_INSTRUCTION}"


def build_history(snapshot: Sequence[Message]) -> list[HistoryTurn] | None:
    """Map prior turns to Gemini roles, dropping the seed welcome turn.

    Gemini requires replayed history to open with a user turn, so the
    assistant-authored welcome message is never replayed.

    Returns:
        The replayable turns, or None when there are none.
    """
    history = [
        HistoryTurn(
            role="user" if message.role == Role.USER else "model",
            text=message.content,
        )
        for message in snapshot
        if not message.is_seed
    ]
    return history or None


def assemble_request(
    snapshot: Sequence[Message],
    user_text: str,
    documents: Sequence[DocumentDescriptor] = (),
) -> OutboundRequest:
    """Assemble the outbound chat request.

    Args:
        snapshot: Conversation so far, excluding the new user turn.
        user_text: The raw user input.
        documents: Descriptors to attach, in attachment order.

    Returns:
        OutboundRequest with the text part first and one inline part per
        document.
    """
    text = user_text
    if documents:
        text += "\n".join(document_annotation(doc) for doc in documents)

    parts: list[TextPart | InlineDataPart] = [TextPart(text=text)]
    parts.extend(
        InlineDataPart(mime_type=doc.mime_type, data=doc.content) for doc in documents
    )

    return OutboundRequest(
        system_instruction=FINANCIAL_SYSTEM_PROMPT,
        history=build_history(snapshot),
        parts=parts,
    )
