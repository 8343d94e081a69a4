"""Resolve a model id to the backend that serves it."""

from __future__ import annotations

import logging

from .backends import Backend, OllamaChatClient, OnDeviceBackend, RemoteChatBackend
from .pipeline_cache import PipelineCache
from .registry import ModelRegistry
from .system_prompts import SystemPromptStore
from .types import BackendKind, ModelConfig

logger = logging.getLogger(__name__)


class BackendDispatcher:
    """Hands out a :class:`Backend` for a model id.

    Construction and network errors propagate unchanged; retry policy is the
    caller's concern.
    """

    def __init__(
        self,
        registry: ModelRegistry,
        pipelines: PipelineCache,
        chat_client: OllamaChatClient,
        system_prompts: SystemPromptStore,
    ) -> None:
        self.registry = registry
        self.pipelines = pipelines
        self.chat_client = chat_client
        self.system_prompts = system_prompts

    async def resolve(self, model_id: str, backend_kind: BackendKind | None = None) -> Backend:
        config = self.registry.lookup_model(model_id)
        kind = BackendKind(backend_kind) if backend_kind is not None else config.backend_kind
        logger.debug("Dispatching %s to %s backend", model_id, kind.value)
        if kind is BackendKind.REMOTE_CHAT:
            return self.remote(config)
        return await self.on_device(config)

    async def on_device(self, config: ModelConfig) -> OnDeviceBackend:
        handle = await self.pipelines.get_or_create(config.id)
        return OnDeviceBackend(config, handle)

    def remote(self, config: ModelConfig) -> RemoteChatBackend:
        return RemoteChatBackend(config, self.chat_client, self.system_prompts)

    async def resolve_remote(self, model_id: str) -> RemoteChatBackend:
        """Resolve ``model_id`` on the remote chat path regardless of its registry default."""

        return self.remote(self.registry.lookup_model(model_id))

    async def resolve_on_device(self, model_id: str) -> OnDeviceBackend:
        return await self.on_device(self.registry.lookup_model(model_id))


__all__ = ["BackendDispatcher"]
