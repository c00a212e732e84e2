"""Pydantic schemas for the FastAPI server."""

from __future__ import annotations

import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str


class RecordResponse(BaseModel):
    """Serialized journal record."""

    id: int
    text: str
    timestamp: str
    date: str
    image_data: Optional[str] = None
    created_at: str
    updated_at: str


class RecordCreateRequest(BaseModel):
    """Request body for creating a record."""

    text: str = Field(default="", max_length=5000)
    date: Optional[datetime.date] = Field(
        default=None, description="Day to file the record under (defaults to today)"
    )
    image_data: Optional[str] = Field(
        default=None, description="Embedded image payload (data URL)"
    )


class RecordUpdateRequest(BaseModel):
    """Request body for editing or re-filing a record."""

    text: Optional[str] = Field(default=None, max_length=5000)
    date: Optional[datetime.date] = Field(default=None, description="New filing day")


class RecordImportItem(BaseModel):
    """Single record in an import payload."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    text: str = ""
    timestamp: Optional[str] = None
    date: str
    image_data: Optional[str] = Field(default=None, alias="imageData")
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class RecordImportRequest(BaseModel):
    """Request body for replacing every stored record."""

    records: List[RecordImportItem]


class DaySummaryResponse(BaseModel):
    """Summary of one day's records."""

    date: str
    summary: str
    source: str = Field(..., description="'local' or 'llm'")
    statistics: Dict[str, Any]
    error: Optional[str] = None


class CalendarCellResponse(BaseModel):
    """One day in the month grid."""

    day: int
    date: str
    has_records: bool


class MonthRef(BaseModel):
    year: int
    month: int


class CalendarResponse(BaseModel):
    """Month grid with leading None padding (Sunday first)."""

    year: int
    month: int
    label: str
    cells: List[Optional[CalendarCellResponse]]
    previous: MonthRef
    next: MonthRef


class SettingsResponse(BaseModel):
    """Current user settings (the API key itself is never returned)."""

    sort_newest_first: bool
    reminder_enabled: bool
    reminder_time: str
    composer_at_top: bool
    time_24h: bool
    show_seconds: bool
    ai_summary_enabled: bool
    theme: str
    record_color: str
    ai_enabled: bool
    ai_api_key_set: bool


class SettingsUpdateRequest(BaseModel):
    """Partial settings update; only provided fields change."""

    sort_newest_first: Optional[bool] = None
    reminder_enabled: Optional[bool] = None
    reminder_time: Optional[str] = Field(default=None, description="HH:MM")
    composer_at_top: Optional[bool] = None
    time_24h: Optional[bool] = None
    show_seconds: Optional[bool] = None
    ai_summary_enabled: Optional[bool] = None
    theme: Optional[str] = Field(default=None, description="'light' or 'dark'")
    record_color: Optional[str] = Field(default=None, description="Hex color")
    ai_enabled: Optional[bool] = None
    ai_api_key: Optional[str] = Field(
        default=None, description="Credential for the completion service; empty clears it"
    )


class AssistantChatRequest(BaseModel):
    """Request body for the assistant endpoint."""

    message: str = Field(..., min_length=1, description="User message")


class AssistantMessage(BaseModel):
    """Single message in the assistant conversation."""

    id: str
    text: str
    sender: str
    timestamp: float
    source: Optional[str] = None


class AssistantHistoryResponse(BaseModel):
    """Display history of the assistant conversation."""

    messages: List[AssistantMessage]


class ReminderNotification(BaseModel):
    """Queued reminder notification."""

    title: str
    body: str
    timestamp: float


class ReminderPendingResponse(BaseModel):
    """Pending reminder notifications plus scheduler status."""

    notifications: List[ReminderNotification]
    enabled: bool
    reminder_time: str
    next_fire: Optional[str] = None
