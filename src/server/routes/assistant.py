"""Assistant chat routes."""

from __future__ import annotations

import asyncio
import logging

from fastapi import FastAPI, HTTPException

from ..dependencies import get_assistant_service
from ..schemas import (
    AssistantChatRequest,
    AssistantHistoryResponse,
    AssistantMessage,
    HealthResponse,
)

logger = logging.getLogger(__name__)


def register_assistant_routes(app: FastAPI) -> None:
    """Register health and assistant endpoints on the provided app."""

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Simple health check endpoint."""
        return HealthResponse(status="ok")

    @app.post("/api/assistant/chat", response_model=AssistantMessage)
    async def chat(request: AssistantChatRequest) -> AssistantMessage:
        """Answer a message about the user's records."""
        service = get_assistant_service()
        try:
            reply = await asyncio.to_thread(service.chat, request.message)
            return AssistantMessage(**reply)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except Exception as exc:  # pragma: no cover - runtime diagnostics
            logger.exception("Assistant request failed: %s", exc)
            raise HTTPException(
                status_code=500, detail="I'm sorry, I encountered an error. Please try again."
            ) from exc

    @app.get("/api/assistant/history", response_model=AssistantHistoryResponse)
    async def history() -> AssistantHistoryResponse:
        """Return the display history of the conversation."""
        service = get_assistant_service()
        return AssistantHistoryResponse(messages=service.history)

    @app.post("/api/assistant/reset", response_model=AssistantHistoryResponse)
    async def reset() -> AssistantHistoryResponse:
        """Clear the conversation back to the greeting."""
        service = get_assistant_service()
        return AssistantHistoryResponse(messages=service.reset())
