"""Record endpoints."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException

from src.records import RecordValidationError

from ..dependencies import get_record_repository, get_settings, serialize_record
from ..schemas import (
    RecordCreateRequest,
    RecordImportRequest,
    RecordResponse,
    RecordUpdateRequest,
)

logger = logging.getLogger(__name__)


def register_record_routes(app: FastAPI) -> None:
    """Register record CRUD endpoints."""

    @app.get("/api/records", response_model=List[RecordResponse])
    async def list_records(
        date: Optional[str] = None, newest_first: Optional[bool] = None
    ) -> List[RecordResponse]:
        """List records, optionally only those filed under one day."""
        repo = get_record_repository()
        try:
            if date:
                if newest_first is None:
                    newest_first = get_settings().sort_newest_first
                records = await asyncio.to_thread(repo.list_by_date, date, newest_first)
            else:
                records = await asyncio.to_thread(repo.list_all)
            return [serialize_record(record) for record in records]
        except RecordValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to list records: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to list records") from exc

    @app.post("/api/records", response_model=RecordResponse)
    async def create_record(request: RecordCreateRequest) -> RecordResponse:
        """Create a new record."""
        repo = get_record_repository()
        try:
            record = await asyncio.to_thread(
                repo.create,
                request.text,
                request.date.isoformat() if request.date else None,
                request.image_data,
            )
            return serialize_record(record)
        except RecordValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to create record: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to create record") from exc

    @app.get("/api/records/export", response_model=List[RecordResponse])
    async def export_records() -> List[RecordResponse]:
        """Export every record."""
        repo = get_record_repository()
        try:
            records = await asyncio.to_thread(repo.list_all)
            return [serialize_record(record) for record in records]
        except Exception as exc:
            logger.exception("Failed to export records: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to export records") from exc

    @app.put("/api/records/import", response_model=List[RecordResponse])
    async def import_records(request: RecordImportRequest) -> List[RecordResponse]:
        """Replace all stored records with the uploaded set."""
        repo = get_record_repository()
        try:
            items = [item.model_dump() for item in request.records]
            records = await asyncio.to_thread(repo.replace_all, items)
            logger.info("Imported %d records", len(records))
            return [serialize_record(record) for record in records]
        except RecordValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to import records: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to import records") from exc

    @app.get("/api/records/{record_id}", response_model=RecordResponse)
    async def get_record(record_id: int) -> RecordResponse:
        """Fetch a single record."""
        repo = get_record_repository()
        record = await asyncio.to_thread(repo.get, record_id)
        if not record:
            raise HTTPException(status_code=404, detail="Record not found")
        return serialize_record(record)

    @app.patch("/api/records/{record_id}", response_model=RecordResponse)
    async def update_record(record_id: int, request: RecordUpdateRequest) -> RecordResponse:
        """Edit a record's text and/or re-file it under another day."""
        repo = get_record_repository()
        try:
            payload = request.model_dump(exclude_unset=True)
            record = await asyncio.to_thread(repo.get, record_id)
            if not record:
                raise HTTPException(status_code=404, detail="Record not found")
            if payload.get("text") is not None:
                record = await asyncio.to_thread(repo.edit_text, record_id, payload["text"])
            if payload.get("date") is not None:
                record = await asyncio.to_thread(
                    repo.refile, record_id, payload["date"].isoformat()
                )
            if not record:
                raise HTTPException(status_code=404, detail="Record not found")
            return serialize_record(record)
        except HTTPException:
            raise
        except RecordValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to update record: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to update record") from exc

    @app.delete("/api/records/{record_id}")
    async def delete_record(record_id: int) -> Dict[str, Any]:
        """Delete a record."""
        repo = get_record_repository()
        try:
            deleted = await asyncio.to_thread(repo.delete, record_id)
            if not deleted:
                raise HTTPException(status_code=404, detail="Record not found")
            return {"deleted": True}
        except HTTPException:
            raise
        except Exception as exc:
            logger.exception("Failed to delete record: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to delete record") from exc
