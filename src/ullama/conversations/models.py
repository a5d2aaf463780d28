"""Data models for conversation state.

These models define the in-memory state of one chat session. All of them
are frozen: transitions build new instances instead of mutating old ones.
"""

from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MODEL = "llama3.2:latest"
NEW_CONVERSATION_NAME = "New Conversation"


class Message(BaseModel):
    """A single transcript entry."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"] = Field(description="Who wrote the message")
    content: str = Field(description="Message text")


class Conversation(BaseModel):
    """One independent chat thread with its own history and model."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = Field(default=NEW_CONVERSATION_NAME, description="Display name")
    messages: tuple[Message, ...] = Field(default=(), description="Ordered transcript")
    model: str = Field(default=DEFAULT_MODEL, description="Model identifier sent with requests")


class PendingSend(BaseModel):
    """A request that has been accepted and is waiting for a reply."""

    model_config = ConfigDict(frozen=True)

    conversation_id: str
    messages: tuple[Message, ...] = Field(description="Full transcript including the new user message")
    model: str


class SendError(BaseModel):
    """The most recent failed send, kept until the next accepted send."""

    model_config = ConfigDict(frozen=True)

    conversation_id: str
    description: str


class ChatState(BaseModel):
    """Complete state of one UI session.

    ``conversations`` is ordered newest-first and is never empty.
    ``awaiting_reply`` is a single flag for the whole session, so at most one
    request is in flight regardless of which conversation sent it.
    """

    model_config = ConfigDict(frozen=True)

    conversations: tuple[Conversation, ...] = Field(min_length=1)
    active_conversation_id: str
    last_chosen_model: str = DEFAULT_MODEL
    awaiting_reply: bool = False
    last_error: SendError | None = None

    @property
    def active_conversation(self) -> Conversation:
        """The active conversation, falling back to the first one if the id is stale."""
        return self.get_conversation(self.active_conversation_id) or self.conversations[0]

    def get_conversation(self, conversation_id: str) -> Conversation | None:
        for conversation in self.conversations:
            if conversation.id == conversation_id:
                return conversation
        return None
