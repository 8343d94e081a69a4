"""Pydantic models and settings."""

from .chat import ConversationTurn
from .settings import AppSettings, get_settings

__all__ = [
    "AppSettings",
    "ConversationTurn",
    "get_settings",
]
