"""ASGI application for the inference proxy.

A single stateless handler forwards one chat request to the inference
service and relays the reply unmodified. Every failure is collapsed into
the same 500 response; the cause only reaches the server log.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..llm import LLMProvider
from .models import CHAT_ROUTE, ChatRequest, ErrorResponse

logger = logging.getLogger(__name__)


def create_app(provider: LLMProvider) -> FastAPI:
    """Build the proxy app bound to one provider.

    The provider is closed when the application shuts down.

    Args:
        provider: Inference provider that serves the chat requests

    Returns:
        FastAPI application exposing ``POST /api/ollama``
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await provider.close()

    app = FastAPI(
        title="Ullama Inference Proxy",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.provider = provider

    @app.post(CHAT_ROUTE)
    async def chat(request: Request) -> JSONResponse:
        # Body is parsed by hand so malformed input takes the same error path
        # as upstream failures.
        try:
            body = await request.json()
            chat_request = ChatRequest.model_validate(body)
            result = await provider.chat(chat_request.messages, chat_request.model)
        except Exception:
            logger.exception("Ollama API error")
            return JSONResponse(ErrorResponse().model_dump(), status_code=500)

        logger.debug(
            "Relayed reply from %s for %d message(s)",
            chat_request.model,
            len(chat_request.messages),
        )
        return JSONResponse(result)

    return app
