"""Chat message model for the completion request body."""

from typing import TypedDict


class ChatMessage(TypedDict):
    """Single chat message for the chat-completions API."""

    role: str
    content: str
