"""
Ullama: a terminal chat client for local Ollama models.

An HTTP proxy relays whole conversations to the inference service, and a
Textual UI keeps several conversations side by side in one session.
"""

__version__ = "0.1.0"

from .conversations import (
    ChatState,
    Conversation,
    Message,
    new_chat_state,
)

__all__ = [
    "ChatState",
    "Conversation",
    "Message",
    "new_chat_state",
]
