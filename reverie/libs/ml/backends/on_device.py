"""Backend wrapping a cached on-device pipeline handle."""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Any, Dict

from ..types import BackendKind, ModelConfig, ModelTask
from .base import Backend

logger = logging.getLogger(__name__)

_OUTPUT_FIELDS = ("generated_text", "summary_text", "translation_text", "text")

# tasks served by a transformers text-generation pipeline, which echoes the prompt by default
_GENERATIVE_TASKS = {ModelTask.TEXT_GENERATION, ModelTask.CHAT}


def primary_output(result: Any) -> str:
    """Pull the main text field out of a pipeline result."""

    if isinstance(result, str):
        return result
    if isinstance(result, list):
        if not result:
            return ""
        return primary_output(result[0])
    if isinstance(result, dict):
        for field in _OUTPUT_FIELDS:
            value = result.get(field)
            if isinstance(value, str):
                return value
    raise ValueError(f"Unrecognised pipeline output: {type(result).__name__}")


def generation_options(config: ModelConfig) -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    if config.max_tokens is not None:
        options["max_new_tokens"] = config.max_tokens
    if config.temperature is not None:
        options["temperature"] = config.temperature
        options["do_sample"] = config.temperature > 0
    if config.task in _GENERATIVE_TASKS:
        options["return_full_text"] = False
    return options


class OnDeviceBackend(Backend):
    """Runs a pipeline handle in the default executor."""

    kind = BackendKind.ON_DEVICE

    def __init__(self, config: ModelConfig, handle: Any) -> None:
        super().__init__(config)
        self.handle = handle

    async def run(self, payload: Any, **options: Any) -> Any:
        """Call the handle with ``payload`` and return the raw output."""

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(self.handle, payload, **options))

    async def invoke(self, text: str) -> str:
        result = await self.run(text, **generation_options(self.config))
        return primary_output(result).strip()


__all__ = ["OnDeviceBackend", "generation_options", "primary_output"]
