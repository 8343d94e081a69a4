"""Shared types for the model-orchestration layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ModelTask(str, Enum):
    """Capability a model configuration serves."""

    TEXT_GENERATION = "text-generation"
    FEATURE_EXTRACTION = "feature-extraction"
    SPEECH_RECOGNITION = "speech-recognition"
    SENTIMENT_ANALYSIS = "sentiment-analysis"
    SUMMARIZATION = "summarization"
    CHAT = "chat"


class BackendKind(str, Enum):
    """Closed set of inference backends."""

    ON_DEVICE = "on-device"
    REMOTE_CHAT = "remote-chat"


class PromptUsage(str, Enum):
    SUMMARY = "summary"
    REFLECTION = "reflection"
    ANALYSIS = "analysis"
    CHAT = "chat"


class Mood(str, Enum):
    """Journal moods, most positive first."""

    HAPPY = "happy"
    NEUTRAL = "neutral"
    REFLECTIVE = "reflective"
    SAD = "sad"


@dataclass(frozen=True, slots=True)
class ModelConfig:
    """Static description of a logical model."""

    id: str
    name: str
    task: ModelTask
    backend_kind: BackendKind
    model_path: str
    max_tokens: int | None = None
    temperature: float | None = None
    default_system_prompt: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ModelConfig requires a non-empty 'id'")
        if not self.model_path:
            raise ValueError(f"ModelConfig '{self.id}' requires a 'model_path'")
        if self.max_tokens is not None and self.max_tokens <= 0:
            raise ValueError(f"ModelConfig '{self.id}': max_tokens must be positive")
        if self.temperature is not None and not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"ModelConfig '{self.id}': temperature must be within [0, 1]")


@dataclass(frozen=True, slots=True)
class PromptTemplate:
    """Reusable instruction fragment."""

    id: str
    name: str
    content: str
    usage: PromptUsage


__all__ = [
    "BackendKind",
    "ModelConfig",
    "ModelTask",
    "Mood",
    "PromptTemplate",
    "PromptUsage",
]
