from typing import Any

from .base import LLMProvider
from .providers import OllamaProvider


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create an inference provider instance.

    This factory function hides the instantiation logic for different providers.

    Args:
        provider: Provider type (only 'ollama' is supported)
        **config: Provider-specific configuration
            For Ollama:
                - host: str | None (default: OLLAMA_HOST or http://localhost:11434)
                - any other ollama.AsyncClient keyword argument

    Returns:
        Initialized provider instance

    Raises:
        ValueError: If provider type is not supported

    Examples:
        >>> provider = create_llm_provider("ollama")

        >>> provider = create_llm_provider(
        ...     "ollama",
        ...     host="http://gpu-box:11434"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower == "ollama":
        return OllamaProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'ollama'"
    )
