from abc import ABC, abstractmethod
from typing import Any

from .models import ChatMessage


class LLMProvider(ABC):
    """Abstract base class for inference service clients.

    This module hides the design decision of which inference client to use.
    Implementations must handle provider-specific details like:
    - Client setup and connection settings
    - Request format conversion
    - Converting the service's reply into a JSON-ready payload

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            payload = await provider.chat(messages, model="llama3.2:latest")
        # Automatically cleaned up
    """

    @abstractmethod
    async def chat(
        self,
        messages: list[ChatMessage],
        model: str,
    ) -> dict[str, Any]:
        """Run a single, non-streamed chat completion.

        Args:
            messages: Conversation history, oldest first
            model: Model identifier, passed through unchecked

        Returns:
            The service's reply as a JSON-ready dict; includes at least
            ``message`` with ``role`` and ``content``

        Raises:
            Exception: Provider-specific errors during generation
        """
        pass

    @abstractmethod
    async def list_models(self) -> list[str]:
        """Return the identifiers of the models the service has available."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def __aenter__(self) -> "LLMProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Close the provider on exit.

        An "Event loop is closed" RuntimeError from the underlying httpx
        client is ignored; it is raised when the loop shuts down first
        (https://github.com/encode/httpx/issues/914).
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
