"""Inference backends: on-device pipelines and remote chat."""

from .base import Backend
from .on_device import OnDeviceBackend
from .remote_chat import OLLAMA_DEFAULT_BASE_URL, OllamaChatClient, RemoteChatBackend

__all__ = [
    "Backend",
    "OLLAMA_DEFAULT_BASE_URL",
    "OllamaChatClient",
    "OnDeviceBackend",
    "RemoteChatBackend",
]
