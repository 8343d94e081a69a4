"""Abstract backend interface used by the dispatcher."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..types import BackendKind, ModelConfig


class Backend(ABC):
    """Uniform ``text -> text`` invocation over one configured model."""

    kind: BackendKind

    def __init__(self, config: ModelConfig) -> None:
        self.config = config

    @property
    def model_id(self) -> str:
        return self.config.id

    @abstractmethod
    async def invoke(self, text: str) -> str:
        """Run the model on ``text`` and return its primary output."""


__all__ = ["Backend"]
