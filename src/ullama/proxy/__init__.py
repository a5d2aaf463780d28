"""Inference proxy for ullama.

Exposes ``POST /api/ollama``, a pass-through to the local inference service.
"""

from .app import create_app
from .models import CHAT_ROUTE, GENERIC_ERROR, ChatRequest, ErrorResponse

__all__ = [
    "CHAT_ROUTE",
    "GENERIC_ERROR",
    "ChatRequest",
    "ErrorResponse",
    "create_app",
]
