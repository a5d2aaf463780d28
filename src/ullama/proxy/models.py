"""Request and response shapes of the inference proxy."""

from pydantic import BaseModel, Field

from ..llm import ChatMessage

CHAT_ROUTE = "/api/ollama"
GENERIC_ERROR = "Failed to process the chat request"


class ChatRequest(BaseModel):
    """Body of ``POST /api/ollama``. Unknown fields are ignored."""

    messages: list[ChatMessage] = Field(description="Transcript, oldest first")
    model: str = Field(description="Model identifier, passed through unchecked")


class ErrorResponse(BaseModel):
    """Body returned for every failure, whatever the cause."""

    error: str = GENERIC_ERROR
