"""FastAPI application bootstrap."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .dependencies import get_record_repository, get_reminder_scheduler
from .routes import (
    register_assistant_routes,
    register_journal_routes,
    register_record_routes,
    register_reminder_routes,
    register_settings_routes,
)

__all__ = ["app", "create_app", "get_record_repository"]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Arm the reminder timer from persisted settings; cancel it on shutdown."""
    scheduler = get_reminder_scheduler()
    yield
    scheduler.stop()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="Life Tracker API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_assistant_routes(app)
    register_record_routes(app)
    register_journal_routes(app)
    register_settings_routes(app)
    register_reminder_routes(app)

    return app


app = create_app()
