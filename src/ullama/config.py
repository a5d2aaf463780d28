"""Centralized configuration for ullama.

Settings come from the environment (optionally a ``.env`` file); CLI
options override them.
"""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .conversations import DEFAULT_MODEL


class Settings(BaseModel):
    """Runtime settings for the proxy and the UI."""

    model_config = ConfigDict(frozen=True)

    ollama_host: str | None = Field(default=None, description="Inference service URL")
    proxy_host: str = Field(default="127.0.0.1", description="Interface the proxy binds to")
    proxy_port: int = Field(default=3000, ge=1, le=65535)
    default_model: str = Field(default=DEFAULT_MODEL, description="Model for new conversations")
    request_timeout: float | None = Field(
        default=None,
        description="UI-to-proxy timeout in seconds; None waits indefinitely",
    )
    log_level: str = "info"

    @property
    def proxy_url(self) -> str:
        return f"http://{self.proxy_host}:{self.proxy_port}"


def load_settings(env_file: str | Path | None = None) -> Settings:
    """Create settings from environment variables.

    Args:
        env_file: Optional .env file; by default the nearest .env is used

    Returns:
        Settings instance

    Raises:
        ValueError: If a numeric variable cannot be parsed

    Environment variables:
        OLLAMA_HOST: Inference service URL (default: ollama client default)
        ULLAMA_PROXY_HOST: Proxy bind host (default: 127.0.0.1)
        ULLAMA_PROXY_PORT: Proxy port (default: 3000)
        ULLAMA_DEFAULT_MODEL: Default model (default: llama3.2:latest)
        ULLAMA_REQUEST_TIMEOUT: UI request timeout in seconds (default: none)
        ULLAMA_LOG_LEVEL: debug, info, warning or error (default: info)
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))

    timeout = os.getenv("ULLAMA_REQUEST_TIMEOUT")
    return Settings(
        ollama_host=os.getenv("OLLAMA_HOST") or None,
        proxy_host=os.getenv("ULLAMA_PROXY_HOST", "127.0.0.1"),
        proxy_port=int(os.getenv("ULLAMA_PROXY_PORT", "3000")),
        default_model=os.getenv("ULLAMA_DEFAULT_MODEL", DEFAULT_MODEL),
        request_timeout=float(timeout) if timeout else None,
        log_level=os.getenv("ULLAMA_LOG_LEVEL", "info").lower(),
    )
