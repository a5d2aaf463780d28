from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """A chat message as sent to the inference service.

    Fields other than ``role`` and ``content`` (``images``, ``tool_calls``, ...)
    are kept and forwarded as received.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    role: str = Field(description="Message author as the inference service expects it")
    content: str = Field(description="Message text")
