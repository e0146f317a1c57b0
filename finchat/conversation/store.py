"""Append-only message log for a chat session."""

from collections.abc import Iterable, Iterator

from finchat.models.schemas import ChatTurn, Message, Role

WELCOME_MESSAGE = (
    "Hello! I'm your Financial Assistant powered by Gemini AI. I can help you "
    "with financial questions, investment advice, budgeting tips, and more. "
    "You can also upload financial documents like bank statements, tax returns, "
    "or investment statements to analyze them together. What would you like to know?"
)


class ConversationStore:
    """Ordered log of conversation turns, seeded with a welcome message.

    Messages can only be appended. ``snapshot()`` returns an immutable view
    for rendering and prompt assembly.
    """

    def __init__(self, welcome: str = WELCOME_MESSAGE) -> None:
        self._messages: list[Message] = [
            Message(role=Role.ASSISTANT, content=welcome, is_seed=True)
        ]

    @classmethod
    def from_transcript(cls, turns: Iterable[ChatTurn]) -> "ConversationStore":
        """Rebuild a store from a client-supplied transcript.

        The first turn is the session's welcome message and is flagged as the
        seed. An empty transcript yields a store with the default welcome.
        """
        turns = list(turns)
        if not turns:
            return cls()

        store = cls(welcome=turns[0].content)
        for turn in turns[1:]:
            store.append(turn.role, turn.content)
        return store

    def append(self, role: Role, content: str) -> Message:
        """Append a new turn and return it."""
        message = Message(role=role, content=content)
        self._messages.append(message)
        return message

    def snapshot(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.snapshot())
