from collections.abc import Mapping
from typing import Any

from ollama import AsyncClient
from pydantic import BaseModel

from ..base import LLMProvider
from ..models import ChatMessage


def _to_payload(response: Any) -> dict[str, Any]:
    """Turn an ollama response object into a plain JSON-ready dict."""
    if isinstance(response, BaseModel):
        return response.model_dump(mode="json", exclude_none=True)
    if isinstance(response, Mapping):
        return dict(response)
    raise TypeError(f"Unexpected response type from ollama: {type(response).__name__}")


class OllamaProvider(LLMProvider):
    """Ollama inference provider.

    Hidden design decisions:
    - ollama client initialization and host selection
    - Message format conversion
    - Response serialization
    """

    def __init__(self, host: str | None = None, **client_kwargs: Any):
        """Initialize Ollama provider.

        Args:
            host: Ollama server URL (None lets the client use OLLAMA_HOST
                or its built-in default)
            **client_kwargs: Additional kwargs for ollama.AsyncClient
        """
        self._host = host
        self._client = AsyncClient(host=host, **client_kwargs)

    @property
    def host(self) -> str | None:
        """Get the configured host, if any."""
        return self._host

    async def chat(
        self,
        messages: list[ChatMessage],
        model: str,
    ) -> dict[str, Any]:
        """Generate a chat completion using Ollama.

        Only the model and the messages are sent; no options, no streaming.
        Each message goes out with every field it arrived with.

        Args:
            messages: Conversation history
            model: Model identifier

        Returns:
            The ollama reply as a dict (``model``, ``message``, timing fields, ...)
        """
        ollama_messages = [msg.model_dump() for msg in messages]
        response = await self._client.chat(model=model, messages=ollama_messages)
        return _to_payload(response)

    async def list_models(self) -> list[str]:
        """List the models installed on the Ollama server."""
        response = await self._client.list()
        payload = _to_payload(response)
        return [
            entry.get("model") or entry.get("name", "")
            for entry in payload.get("models", [])
        ]

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        http_client = getattr(self._client, "_client", None)
        if http_client is not None:
            await http_client.aclose()
