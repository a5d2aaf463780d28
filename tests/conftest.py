"""Pytest configuration and shared fixtures."""
import os
from typing import Any

import pytest

from ullama.client import ProxyError
from ullama.conversations import Message
from ullama.llm import ChatMessage, LLMProvider


class StubProvider(LLMProvider):
    """In-memory provider that records calls and answers with a fixed payload."""

    def __init__(self, reply: str = "Hello from the model", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[tuple[list[ChatMessage], str]] = []
        self.closed = False

    async def chat(self, messages: list[ChatMessage], model: str) -> dict[str, Any]:
        self.calls.append((list(messages), model))
        if self.error is not None:
            raise self.error
        return {
            "model": model,
            "created_at": "2024-01-01T00:00:00Z",
            "message": {"role": "assistant", "content": self.reply},
            "done": True,
            "total_duration": 1234,
        }

    async def list_models(self) -> list[str]:
        if self.error is not None:
            raise self.error
        return ["llama3.2:latest", "mistral"]

    async def close(self) -> None:
        self.closed = True


class FakeClient:
    """Stands in for ProxyClient in UI tests."""

    def __init__(
        self,
        reply: str = "**Hi** there",
        error: str | None = None,
        exception: Exception | None = None,
    ):
        self.reply = reply
        self.error = error
        self.exception = exception
        self.calls: list[tuple[tuple[Message, ...], str]] = []

    async def chat(self, messages, model: str) -> Message:
        self.calls.append((tuple(messages), model))
        if self.exception is not None:
            raise self.exception
        if self.error is not None:
            raise ProxyError(self.error)
        return Message(role="assistant", content=self.reply)

    async def close(self) -> None:
        pass


@pytest.fixture
def stub_provider():
    """Return a provider that answers without a server."""
    return StubProvider()


@pytest.fixture
def failing_provider():
    """Return a provider whose every chat call fails."""
    return StubProvider(error=ConnectionError("connection refused"))


@pytest.fixture
def fake_client():
    """Return a proxy client stand-in that always succeeds."""
    return FakeClient()


@pytest.fixture
def failing_client():
    """Return a proxy client stand-in whose every request fails."""
    return FakeClient(error="Proxy returned HTTP 500")


@pytest.fixture(scope="session")
def ollama_host():
    """Return the Ollama host for integration tests, if configured."""
    return os.getenv("OLLAMA_HOST")


@pytest.fixture
def broken_client():
    """Return a proxy client stand-in that fails with an unexpected exception."""
    return FakeClient(exception=RuntimeError("unexpected"))


@pytest.fixture
def long_reply_client():
    """Return a proxy client stand-in whose replies overflow the transcript view."""
    reply = "\n\n".join(f"Paragraph {n} of a long answer." for n in range(1, 41))
    return FakeClient(reply=reply)
