"""Model orchestration: registries, pipeline cache, backends and the facade."""

from .dispatcher import BackendDispatcher
from .errors import ConfigNotFound, ModelLoadError, RemoteInferenceError, ReverieMLError
from .facade import InferenceFacade, create_inference
from .pipeline_cache import PipelineCache
from .registry import ModelRegistry, PromptStore, default_model_registry, default_prompt_store
from .system_prompts import SystemPromptStore
from .types import BackendKind, ModelConfig, ModelTask, Mood, PromptTemplate, PromptUsage

__all__ = [
    "BackendDispatcher",
    "BackendKind",
    "ConfigNotFound",
    "InferenceFacade",
    "ModelConfig",
    "ModelLoadError",
    "ModelRegistry",
    "ModelTask",
    "Mood",
    "PipelineCache",
    "PromptStore",
    "PromptTemplate",
    "PromptUsage",
    "RemoteInferenceError",
    "ReverieMLError",
    "SystemPromptStore",
    "create_inference",
    "default_model_registry",
    "default_prompt_store",
]
