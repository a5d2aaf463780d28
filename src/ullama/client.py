"""HTTP client the UI uses to reach the inference proxy."""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from .conversations import Message
from .proxy import CHAT_ROUTE

logger = logging.getLogger(__name__)


class ProxyError(Exception):
    """Raised when the proxy cannot produce an assistant reply."""


class ProxyClient:
    """Sends transcripts to ``POST /api/ollama`` and returns the reply.

    No timeout is applied unless one is given: a hung inference service
    keeps the request open.

    Example:
        async with ProxyClient("http://127.0.0.1:3000") as client:
            reply = await client.chat(messages, model="llama3.2:latest")
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Proxy root URL, e.g. ``http://127.0.0.1:3000``
            timeout: Request timeout in seconds (None waits indefinitely)
            transport: Optional httpx transport, e.g. ``httpx.ASGITransport``
        """
        self._base_url = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def chat(self, messages: Sequence[Message], model: str) -> Message:
        """Send the full transcript and return the assistant's reply.

        Args:
            messages: Transcript including the newest user message
            model: Model identifier for the inference service

        Returns:
            The assistant message from the proxy's response

        Raises:
            ProxyError: On transport failure, non-success status, or a
                response without ``message.content``
        """
        logger.debug("POST %s: %d messages, model %s", CHAT_ROUTE, len(messages), model)
        payload = {
            "messages": [msg.model_dump() for msg in messages],
            "model": model,
        }
        try:
            response = await self._client.post(CHAT_ROUTE, json=payload)
            response.raise_for_status()
            data: Any = response.json()
        except httpx.HTTPStatusError as e:
            raise ProxyError(f"Proxy returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ProxyError(f"Failed to reach proxy: {e}") from e
        except ValueError as e:
            raise ProxyError("Proxy returned invalid JSON") from e

        try:
            content = data["message"]["content"]
        except (KeyError, TypeError) as e:
            raise ProxyError("Proxy response has no message content") from e
        if not isinstance(content, str):
            raise ProxyError("Proxy response has no message content")

        return Message(role="assistant", content=content)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "ProxyClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
