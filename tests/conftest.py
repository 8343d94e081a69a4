from __future__ import annotations

import threading
from typing import Any, Callable, Dict, List, Mapping, Sequence

import pytest

from reverie.libs.ml import (
    BackendDispatcher,
    BackendKind,
    InferenceFacade,
    ModelConfig,
    ModelRegistry,
    ModelTask,
    PipelineCache,
    SystemPromptStore,
    default_prompt_store,
)

TEST_MODELS = (
    ModelConfig(
        id="mood-fast",
        name="Fast Mood",
        task=ModelTask.SENTIMENT_ANALYSIS,
        backend_kind=BackendKind.ON_DEVICE,
        model_path="test/sentiment",
    ),
    ModelConfig(
        id="writer-local",
        name="Local Writer",
        task=ModelTask.TEXT_GENERATION,
        backend_kind=BackendKind.ON_DEVICE,
        model_path="test/gpt",
        max_tokens=64,
        temperature=0.5,
    ),
    ModelConfig(
        id="ears",
        name="Speech",
        task=ModelTask.SPEECH_RECOGNITION,
        backend_kind=BackendKind.ON_DEVICE,
        model_path="test/whisper",
    ),
    ModelConfig(
        id="vectors",
        name="Embeddings",
        task=ModelTask.FEATURE_EXTRACTION,
        backend_kind=BackendKind.ON_DEVICE,
        model_path="test/embed",
    ),
    ModelConfig(
        id="remote-chat",
        name="Remote Chat",
        task=ModelTask.CHAT,
        backend_kind=BackendKind.REMOTE_CHAT,
        model_path="mistral:latest",
        max_tokens=500,
        temperature=0.7,
        default_system_prompt="Be kind.",
    ),
    ModelConfig(
        id="remote-summary",
        name="Remote Summary",
        task=ModelTask.SUMMARIZATION,
        backend_kind=BackendKind.REMOTE_CHAT,
        model_path="mistral:latest",
        default_system_prompt="Summarise briefly.",
    ),
)


class FakeFactory:
    """Pipeline factory returning handles from a per-model-id table."""

    def __init__(self, handles: Mapping[str, Callable[..., Any]] | None = None) -> None:
        self.handles: Dict[str, Callable[..., Any]] = dict(handles or {})
        self.builds: List[str] = []
        self._lock = threading.Lock()

    def __call__(self, config: ModelConfig, device: str) -> Any:
        with self._lock:
            self.builds.append(config.id)
        if config.id not in self.handles:
            raise OSError(f"no weights for {config.model_path}")
        return self.handles[config.id]


class RecordingHandle:
    def __init__(self, output: Any) -> None:
        self.output = output
        self.calls: List[tuple[Any, dict]] = []

    def __call__(self, payload: Any, **options: Any) -> Any:
        self.calls.append((payload, options))
        return self.output


class FakeChatClient:
    """Stands in for the remote chat endpoint."""

    def __init__(self, reply: str = "ok", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.requests: List[dict[str, Any]] = []

    async def chat(
        self,
        *,
        model: str,
        messages: Sequence[Mapping[str, Any]],
        options: Mapping[str, Any] | None = None,
    ) -> str:
        self.requests.append({"model": model, "messages": [dict(m) for m in messages], "options": options})
        if self.error is not None:
            raise self.error
        return self.reply


def sentiment_handle(score: float, label: str = "POSITIVE") -> RecordingHandle:
    return RecordingHandle([{"label": label, "score": score}])


@pytest.fixture
def registry() -> ModelRegistry:
    return ModelRegistry(TEST_MODELS)


@pytest.fixture
def system_prompts(registry: ModelRegistry) -> SystemPromptStore:
    return SystemPromptStore(registry)


@pytest.fixture
def factory() -> FakeFactory:
    return FakeFactory()


@pytest.fixture
def chat_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def dispatcher(registry, factory, chat_client, system_prompts) -> BackendDispatcher:
    return BackendDispatcher(registry, PipelineCache(registry, factory), chat_client, system_prompts)


@pytest.fixture
def facade(dispatcher) -> InferenceFacade:
    return InferenceFacade(
        dispatcher,
        default_prompt_store(),
        chat_model_id="remote-chat",
        summary_model_id="remote-summary",
        sentiment_model_id="mood-fast",
        speech_model_id="ears",
        embedding_model_id="vectors",
    )
