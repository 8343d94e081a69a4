"""Lazy, memoised construction of on-device pipeline handles."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Dict

from .errors import ModelLoadError
from .registry import ModelRegistry
from .runtime import PipelineFactory
from .types import ModelConfig

logger = logging.getLogger(__name__)


class PipelineCache:
    """Builds at most one handle per model id and hands back the same instance.

    Each build runs in the default executor inside its own task. Concurrent
    callers asking for the same uncached id await that one task through
    :func:`asyncio.shield`, so a cancelled caller neither aborts nor repeats
    the build; an abandoned build still completes and is cached. Different ids
    load independently. A failed build leaves nothing behind and the next call
    tries again.
    """

    def __init__(self, registry: ModelRegistry, factory: PipelineFactory, *, device: str = "cpu") -> None:
        self._registry = registry
        self._factory = factory
        self._device = device
        self._handles: Dict[str, Any] = {}
        self._inflight: Dict[str, asyncio.Task] = {}

    @property
    def device(self) -> str:
        return self._device

    async def get_or_create(self, model_id: str) -> Any:
        handle = self._handles.get(model_id)
        if handle is not None:
            return handle

        task = self._inflight.get(model_id)
        if task is None:
            config = self._registry.lookup_model(model_id)
            task = asyncio.get_running_loop().create_task(self._build(config))
            task.add_done_callback(_retrieve_exception)
            self._inflight[model_id] = task
        return await asyncio.shield(task)

    async def _build(self, config: ModelConfig) -> Any:
        model_id = config.id
        logger.info("Loading model %s (%s, %s) on %s", model_id, config.task.value, config.model_path, self._device)
        start = time.perf_counter()
        loop = asyncio.get_running_loop()
        try:
            try:
                handle = await loop.run_in_executor(None, self._factory, config, self._device)
            except Exception as exc:
                logger.error("Model %s failed to load: %s", model_id, exc)
                raise ModelLoadError(model_id, str(exc)) from exc
            if handle is None:
                raise ModelLoadError(model_id, "runtime returned no pipeline")

            self._handles[model_id] = handle
            logger.info("Model %s loaded in %.2fs", model_id, time.perf_counter() - start)
            return handle
        finally:
            self._inflight.pop(model_id, None)

    def invalidate(self, model_id: str) -> bool:
        return self._handles.pop(model_id, None) is not None

    def clear(self) -> None:
        self._handles.clear()

    def __contains__(self, model_id: object) -> bool:
        return model_id in self._handles

    def __len__(self) -> int:
        return len(self._handles)


def _retrieve_exception(task: asyncio.Task) -> None:
    # a build whose callers were all cancelled still reports its failure here
    if not task.cancelled() and task.exception() is not None:
        logger.debug("Abandoned build failed: %s", task.exception())


__all__ = ["PipelineCache"]
