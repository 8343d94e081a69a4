"""On-device inference runtime boundary (Hugging Face ``transformers``)."""

from __future__ import annotations

import logging
from typing import Any, Callable

from .types import ModelConfig

logger = logging.getLogger(__name__)

# (config, device) -> callable pipeline handle
PipelineFactory = Callable[[ModelConfig, str], Any]


def detect_device(hint: str = "auto") -> str:
    """Resolve an acceleration hint to a concrete torch device name."""

    if hint and hint != "auto":
        return hint

    import torch

    if torch.cuda.is_available():
        return "cuda"
    mps = getattr(torch.backends, "mps", None)
    if mps is not None and mps.is_available():
        return "mps"
    return "cpu"


def transformers_factory(cache_dir: str | None = None) -> PipelineFactory:
    """Return a factory that builds ``transformers.pipeline`` handles."""

    def build(config: ModelConfig, device: str) -> Any:
        # Deferred: importing transformers pulls in torch and takes seconds.
        from transformers import pipeline

        model_kwargs = {"cache_dir": cache_dir} if cache_dir else None
        logger.debug("Constructing %s pipeline for %s on %s", config.task.value, config.model_path, device)
        return pipeline(
            task=_pipeline_task(config),
            model=config.model_path,
            device=device,
            model_kwargs=model_kwargs,
        )

    return build


def _pipeline_task(config: ModelConfig) -> str:
    task = config.task.value
    if task == "speech-recognition":
        return "automatic-speech-recognition"
    if task == "chat":
        return "text-generation"
    return task


__all__ = ["PipelineFactory", "detect_device", "transformers_factory"]
