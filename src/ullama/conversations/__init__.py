"""Conversation state for ullama.

Holds the session's conversations and the pure transitions between states.
"""

from .models import (
    DEFAULT_MODEL,
    NEW_CONVERSATION_NAME,
    ChatState,
    Conversation,
    Message,
    PendingSend,
    SendError,
)
from .state import (
    ConversationNotFoundError,
    begin_send,
    change_model,
    complete_send,
    create_conversation,
    delete_conversation,
    derive_conversation_name,
    fail_send,
    is_placeholder_name,
    new_chat_state,
    select_conversation,
)

__all__ = [
    "DEFAULT_MODEL",
    "NEW_CONVERSATION_NAME",
    "ChatState",
    "Conversation",
    "ConversationNotFoundError",
    "Message",
    "PendingSend",
    "SendError",
    "begin_send",
    "change_model",
    "complete_send",
    "create_conversation",
    "delete_conversation",
    "derive_conversation_name",
    "fail_send",
    "is_placeholder_name",
    "new_chat_state",
    "select_conversation",
]
