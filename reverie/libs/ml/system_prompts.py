"""Runtime system prompt overrides.

Overrides live in process memory only and shadow a model's
``default_system_prompt`` until cleared. Create one store per application
(or per test) and pass it to the components that need it.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict

from .registry import ModelRegistry

logger = logging.getLogger(__name__)


class SystemPromptStore:
    """Thread-safe mapping of model id to an overriding system prompt."""

    def __init__(self, registry: ModelRegistry) -> None:
        self._registry = registry
        self._overrides: Dict[str, str] = {}
        self._lock = threading.Lock()

    def set_system_prompt(self, model_id: str, text: str) -> None:
        """Store ``text`` for ``model_id``; the last write wins."""

        with self._lock:
            self._overrides[model_id] = text
        logger.info("System prompt override set for %s (%d chars)", model_id, len(text))

    def clear_system_prompt(self, model_id: str) -> bool:
        with self._lock:
            removed = self._overrides.pop(model_id, None) is not None
        if removed:
            logger.info("System prompt override cleared for %s", model_id)
        return removed

    def get_override(self, model_id: str) -> str | None:
        with self._lock:
            return self._overrides.get(model_id)

    def get_effective_system_prompt(self, model_id: str) -> str:
        """Return the override, else the registry default, else ``""``."""

        override = self.get_override(model_id)
        if override is not None:
            return override
        if model_id not in self._registry:
            return ""
        return self._registry.lookup_model(model_id).default_system_prompt or ""

    def overrides(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._overrides)


__all__ = ["SystemPromptStore"]
