"""Conversation state for one chat session.

Holds the append-only message log and reduces gateway outcomes into it.
Each session owns its own store; nothing here is shared between sessions.
"""

from finchat.conversation.reducer import (
    converse,
    record_failure,
    record_reply,
    record_user_turn,
)
from finchat.conversation.store import WELCOME_MESSAGE, ConversationStore

__all__ = [
    "WELCOME_MESSAGE",
    "ConversationStore",
    "converse",
    "record_failure",
    "record_reply",
    "record_user_turn",
]
