"""Provider factory functions for CLI.

Centralizes creation of the inference provider and the proxy client from
settings. Hides configuration details from command implementations.
"""

from ..client import ProxyClient
from ..config import Settings
from ..llm import LLMProvider, create_llm_provider


def get_llm(settings: Settings) -> LLMProvider:
    """Create the inference provider.

    Args:
        settings: Loaded settings; ``ollama_host`` selects the server

    Returns:
        Ollama provider instance
    """
    return create_llm_provider("ollama", host=settings.ollama_host)


def get_proxy_client(settings: Settings, proxy_url: str | None = None) -> ProxyClient:
    """Create the client the UI uses to reach the proxy.

    Args:
        settings: Loaded settings
        proxy_url: Overrides the URL built from the proxy host and port

    Returns:
        Proxy client instance
    """
    return ProxyClient(proxy_url or settings.proxy_url, timeout=settings.request_timeout)
