"""Rule-based activity assistant with an optional LLM backend."""

from .responder import GREETING, detect_patterns, respond
from .service import AssistantService

__all__ = ["AssistantService", "GREETING", "detect_patterns", "respond"]
