"""Settings endpoints."""

from __future__ import annotations

import asyncio
import logging

from fastapi import FastAPI, HTTPException

from src.settings import SettingsError

from ..dependencies import get_reminder_scheduler, get_settings_service, serialize_settings
from ..schemas import SettingsResponse, SettingsUpdateRequest

logger = logging.getLogger(__name__)


def register_settings_routes(app: FastAPI) -> None:
    """Register settings read/update endpoints."""

    @app.get("/api/settings", response_model=SettingsResponse)
    async def get_settings() -> SettingsResponse:
        """Return the current settings."""
        return serialize_settings(get_settings_service().current)

    @app.patch("/api/settings", response_model=SettingsResponse)
    async def update_settings(request: SettingsUpdateRequest) -> SettingsResponse:
        """Apply a partial settings update."""
        service = get_settings_service()
        # reminder scheduler subscribes to settings changes on creation
        get_reminder_scheduler()
        changes = request.model_dump(exclude_unset=True)
        try:
            updated = await asyncio.to_thread(lambda: service.update(**changes))
            return serialize_settings(updated)
        except SettingsError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to update settings: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to update settings") from exc
