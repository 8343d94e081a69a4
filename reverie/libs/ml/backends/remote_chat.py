"""Remote chat-completion backend speaking the Ollama ``/api/chat`` protocol."""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Sequence

import httpx

from ..errors import RemoteInferenceError
from ..system_prompts import SystemPromptStore
from ..types import BackendKind, ModelConfig
from .base import Backend

OLLAMA_DEFAULT_BASE_URL = "http://localhost:11434"

logger = logging.getLogger(__name__)


class OllamaChatClient:
    """Thin async client for a chat endpoint returning ``{"message": {"content": ...}}``."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or OLLAMA_DEFAULT_BASE_URL).rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def chat(
        self,
        *,
        model: str,
        messages: Sequence[Mapping[str, Any]],
        options: Mapping[str, Any] | None = None,
    ) -> str:
        payload: dict[str, Any] = {
            "model": model,
            "messages": [self._serialise_message(message) for message in messages],
            "stream": False,
        }
        if options:
            payload["options"] = dict(options)

        response_json = await self._post("/api/chat", payload)
        message = response_json.get("message")
        content = message.get("content") if isinstance(message, Mapping) else None
        if not isinstance(content, str):
            raise RemoteInferenceError(f"Chat response for model '{model}' has no message content")
        return content

    async def _post(self, path: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        start = time.perf_counter()
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.post(url, json=payload)
            except httpx.RequestError as exc:
                raise RemoteInferenceError(f"Chat endpoint unreachable at {url}: {exc}") from exc

        logger.debug(
            "remote_chat model=%s status=%s elapsed=%.2fs",
            payload.get("model"),
            response.status_code,
            time.perf_counter() - start,
        )
        if not response.is_success:
            raise RemoteInferenceError(
                f"Chat endpoint returned {response.status_code} on {url}. Body: {response.text[:400]}",
                status_code=response.status_code,
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise RemoteInferenceError(f"Chat endpoint returned non-JSON on {url}") from exc
        if not isinstance(data, dict):
            raise RemoteInferenceError(f"Chat endpoint returned unexpected payload on {url}")
        return data

    @staticmethod
    def _serialise_message(message: Mapping[str, Any]) -> dict[str, str]:
        if hasattr(message, "model_dump"):
            data = message.model_dump()
        else:
            data = dict(message)
        role = data.get("role")
        content = data.get("content")
        if role is None or content is None:
            raise ValueError("Chat messages must include 'role' and 'content'")
        return {"role": str(role), "content": str(content)}


class RemoteChatBackend(Backend):
    """Sends ``[system?, user]`` conversations to the remote chat endpoint."""

    kind = BackendKind.REMOTE_CHAT

    def __init__(self, config: ModelConfig, client: OllamaChatClient, system_prompts: SystemPromptStore) -> None:
        super().__init__(config)
        self._client = client
        self._system_prompts = system_prompts

    def system_prompt(self) -> str:
        return self._system_prompts.get_effective_system_prompt(self.config.id)

    def options(self) -> dict[str, Any]:
        options: dict[str, Any] = {}
        if self.config.temperature is not None:
            options["temperature"] = self.config.temperature
        if self.config.max_tokens is not None:
            options["num_predict"] = self.config.max_tokens
        return options

    async def chat(
        self,
        messages: Sequence[Mapping[str, Any]],
        *,
        system_prompt: str | None = None,
    ) -> str:
        """Send ``messages`` after the system prompt (effective one unless given)."""

        system = self.system_prompt() if system_prompt is None else system_prompt
        payload: list[Mapping[str, Any]] = []
        if system:
            payload.append({"role": "system", "content": system})
        payload.extend(messages)
        return await self._client.chat(
            model=self.config.model_path,
            messages=payload,
            options=self.options(),
        )

    async def invoke(self, text: str) -> str:
        return await self.chat([{"role": "user", "content": text}])


__all__ = ["OLLAMA_DEFAULT_BASE_URL", "OllamaChatClient", "RemoteChatBackend"]
