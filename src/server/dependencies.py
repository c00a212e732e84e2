"""Dependency helpers shared across FastAPI routes."""

from __future__ import annotations

from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Optional

from src.assistant import AssistantService
from src.journal import JournalSummarizer
from src.life_tracker.config import Config
from src.life_tracker.logger import setup_logger
from src.life_tracker.ollama_client import OllamaClient
from src.records import Record, RecordRepository
from src.reminders import ReminderScheduler
from src.settings import AppSettings, SettingsService, format_timestamp
from src.storage import SQLiteKeyValueStore

from .schemas import RecordResponse, SettingsResponse

config = Config.from_yaml()
setup_logger(log_level=config.log_level, log_file=config.log_file)


def _db_path() -> Optional[Path]:
    return Path(config.db_path) if config.db_path else None


@lru_cache(maxsize=1)
def get_settings_service() -> SettingsService:
    """Singleton SettingsService backed by the SQLite key-value store."""
    return SettingsService(SQLiteKeyValueStore(db_path=_db_path()))


def get_settings() -> AppSettings:
    """Current immutable settings value."""
    return get_settings_service().current


@lru_cache(maxsize=1)
def get_record_repository() -> RecordRepository:
    """Singleton RecordRepository; display timestamps follow the user's settings."""
    return RecordRepository(
        db_path=_db_path(),
        timestamp_formatter=lambda moment: format_timestamp(moment, get_settings()),
    )


def build_ollama_client(settings: AppSettings) -> OllamaClient:
    """Create an OllamaClient keyed by the user's credential."""
    return OllamaClient(
        host=config.ollama.host,
        model=config.ollama.model,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        api_key=settings.ai_api_key,
    )


@lru_cache(maxsize=1)
def get_journal_summarizer() -> JournalSummarizer:
    """Singleton JournalSummarizer."""
    return JournalSummarizer(
        get_record_repository(),
        settings_provider=get_settings,
        ollama_client_factory=build_ollama_client,
    )


@lru_cache(maxsize=1)
def get_assistant_service() -> AssistantService:
    """Singleton AssistantService."""
    repo = get_record_repository()
    return AssistantService(
        records_provider=repo.list_all,
        settings_provider=get_settings,
        ollama_client_factory=build_ollama_client,
    )


@lru_cache(maxsize=1)
def get_reminder_scheduler() -> ReminderScheduler:
    """Lazily create the reminder scheduler and keep it in sync with settings."""
    service = get_settings_service()
    scheduler = ReminderScheduler(max_queue_size=config.reminders.max_queue_size)
    scheduler.apply(service.current)
    service.subscribe(scheduler.apply)
    return scheduler


def clear_dependency_caches() -> None:
    """Drop every singleton (used by tests that point the app at a new database)."""
    if get_reminder_scheduler.cache_info().currsize:
        get_reminder_scheduler().stop()
    for factory in (
        get_reminder_scheduler,
        get_assistant_service,
        get_journal_summarizer,
        get_record_repository,
        get_settings_service,
    ):
        factory.cache_clear()


def display_timestamp(record: Record) -> str:
    """Render the last-edit instant with the current time display settings."""
    try:
        moment = datetime.fromisoformat(record.updated_at)
    except (TypeError, ValueError):
        return record.timestamp
    return format_timestamp(moment.astimezone(), get_settings())


def serialize_record(record: Record) -> RecordResponse:
    """Convert domain Record to API response."""
    return RecordResponse(
        id=record.id,
        text=record.text,
        timestamp=display_timestamp(record),
        date=record.date,
        image_data=record.image_data,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def serialize_settings(settings: AppSettings) -> SettingsResponse:
    """Convert AppSettings to API response (without the credential)."""
    return SettingsResponse(**settings.to_dict())
