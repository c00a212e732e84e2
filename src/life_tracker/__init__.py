"""Application-wide configuration, logging and the LLM client."""

from .config import Config, OllamaConfig, ReminderConfig
from .logger import setup_logger
from .ollama_client import OllamaClient

__all__ = ["Config", "OllamaClient", "OllamaConfig", "ReminderConfig", "setup_logger"]
