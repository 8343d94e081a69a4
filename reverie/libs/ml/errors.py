"""Error taxonomy for the model-orchestration layer."""

from __future__ import annotations


class ReverieMLError(RuntimeError):
    """Base class for inference orchestration failures."""


class ConfigNotFound(ReverieMLError, KeyError):
    """Raised when a model or prompt id is not registered."""

    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} '{key}' not found in configuration")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0])


class ModelLoadError(ReverieMLError):
    """Raised when an on-device pipeline cannot be constructed."""

    def __init__(self, model_id: str, message: str) -> None:
        self.model_id = model_id
        super().__init__(f"Failed to load model '{model_id}': {message}")


class RemoteInferenceError(ReverieMLError):
    """Raised on network or protocol failures talking to the remote chat backend."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


__all__ = ["ConfigNotFound", "ModelLoadError", "RemoteInferenceError", "ReverieMLError"]
