"""Static model and prompt configuration.

Both registries are built once at startup and only read afterwards, so
lookups need no locking.
"""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, TypeVar

from .errors import ConfigNotFound
from .types import BackendKind, ModelConfig, ModelTask, PromptTemplate, PromptUsage

_JOURNAL_ASSISTANT_PROMPT = (
    "You are a helpful, empathetic journal assistant. "
    "Help the user reflect on their thoughts and feelings."
)

DEFAULT_MODELS: tuple[ModelConfig, ...] = (
    ModelConfig(
        id="sentiment-local",
        name="Sentiment Analysis Model",
        task=ModelTask.SENTIMENT_ANALYSIS,
        backend_kind=BackendKind.ON_DEVICE,
        model_path="distilbert/distilbert-base-uncased-finetuned-sst-2-english",
    ),
    ModelConfig(
        id="whisper-local",
        name="Whisper Speech Recognition",
        task=ModelTask.SPEECH_RECOGNITION,
        backend_kind=BackendKind.ON_DEVICE,
        model_path="openai/whisper-tiny.en",
    ),
    ModelConfig(
        id="text-gen-local",
        name="Text Generation Model",
        task=ModelTask.TEXT_GENERATION,
        backend_kind=BackendKind.ON_DEVICE,
        model_path="openai-community/gpt2",
        max_tokens=100,
        temperature=0.7,
    ),
    ModelConfig(
        id="embeddings-local",
        name="Text Embeddings Model",
        task=ModelTask.FEATURE_EXTRACTION,
        backend_kind=BackendKind.ON_DEVICE,
        model_path="mixedbread-ai/mxbai-embed-xsmall-v1",
    ),
    ModelConfig(
        id="ollama-mistral",
        name="Mistral",
        task=ModelTask.TEXT_GENERATION,
        backend_kind=BackendKind.REMOTE_CHAT,
        model_path="mistral:latest",
        max_tokens=200,
        temperature=0.7,
        default_system_prompt=_JOURNAL_ASSISTANT_PROMPT,
    ),
    ModelConfig(
        id="ollama-llama2",
        name="Llama 2",
        task=ModelTask.TEXT_GENERATION,
        backend_kind=BackendKind.REMOTE_CHAT,
        model_path="llama2:latest",
        max_tokens=250,
        temperature=0.6,
        default_system_prompt=_JOURNAL_ASSISTANT_PROMPT,
    ),
    ModelConfig(
        id="ollama-chat",
        name="Chat Assistant",
        task=ModelTask.CHAT,
        backend_kind=BackendKind.REMOTE_CHAT,
        model_path="mistral:latest",
        max_tokens=500,
        temperature=0.7,
        default_system_prompt=(
            "You are a supportive journal assistant that helps users explore their thoughts "
            "and feelings. Be empathetic, insightful, and provide thoughtful responses."
        ),
    ),
    ModelConfig(
        id="ollama-summarize",
        name="Text Summarizer",
        task=ModelTask.SUMMARIZATION,
        backend_kind=BackendKind.REMOTE_CHAT,
        model_path="mistral:latest",
        max_tokens=150,
        temperature=0.3,
        default_system_prompt=(
            "Summarize the following journal entry concisely, focusing on key emotions "
            "and events. Be brief but insightful."
        ),
    ),
)

DEFAULT_PROMPTS: tuple[PromptTemplate, ...] = (
    PromptTemplate(
        id="journal-summary",
        name="Journal Summary",
        content="Summarize this journal entry concisely, focusing on key emotions and events.",
        usage=PromptUsage.SUMMARY,
    ),
    PromptTemplate(
        id="journal-reflection",
        name="Journal Reflection",
        content=(
            "Provide a thoughtful, empathetic reflection on this journal entry, "
            "considering the author's emotional state."
        ),
        usage=PromptUsage.REFLECTION,
    ),
    PromptTemplate(
        id="mood-analysis",
        name="Mood Analysis",
        content="Analyze the emotional tone of this text and identify the primary mood.",
        usage=PromptUsage.ANALYSIS,
    ),
    PromptTemplate(
        id="chat-assistant",
        name="Chat Assistant",
        content="You are a supportive journal assistant. Help users express their thoughts and feelings clearly.",
        usage=PromptUsage.CHAT,
    ),
)

_T = TypeVar("_T", ModelConfig, PromptTemplate)


class _Registry(Generic[_T]):
    kind = "Entry"

    def __init__(self, entries: Iterable[_T]) -> None:
        self._entries: dict[str, _T] = {}
        for entry in entries:
            if entry.id in self._entries:
                raise ValueError(f"Duplicate {self.kind.lower()} id '{entry.id}'")
            self._entries[entry.id] = entry

    def lookup(self, key: str) -> _T:
        try:
            return self._entries[key]
        except KeyError:
            raise ConfigNotFound(self.kind, key) from None

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[_T]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


class ModelRegistry(_Registry[ModelConfig]):
    """Maps logical model ids to their :class:`ModelConfig`."""

    kind = "Model"

    def lookup_model(self, model_id: str) -> ModelConfig:
        return self.lookup(model_id)

    def models_for_task(self, task: ModelTask) -> list[ModelConfig]:
        return [config for config in self if config.task == task]


class PromptStore(_Registry[PromptTemplate]):
    """Maps prompt ids to reusable :class:`PromptTemplate` instructions."""

    kind = "Prompt"

    def lookup_prompt(self, prompt_id: str) -> PromptTemplate:
        return self.lookup(prompt_id)

    def prompts_for_usage(self, usage: PromptUsage) -> list[PromptTemplate]:
        return [prompt for prompt in self if prompt.usage == usage]


def default_model_registry() -> ModelRegistry:
    return ModelRegistry(DEFAULT_MODELS)


def default_prompt_store() -> PromptStore:
    return PromptStore(DEFAULT_PROMPTS)


__all__ = [
    "DEFAULT_MODELS",
    "DEFAULT_PROMPTS",
    "ModelRegistry",
    "PromptStore",
    "default_model_registry",
    "default_prompt_store",
]
