"""Single entry point for every model-backed journaling feature.

Each operation either propagates backend failures or, where the product
defines one, degrades to a fixed fallback. Fallback wiring is done once in
``__init__`` with :func:`with_fallback` so the policy stays visible in one
place.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Mapping, Sequence

from reverie.libs.schemas.settings import AppSettings, get_settings
from reverie.prompts.journal import (
    ADVANCED_MOOD_PROMPT,
    CHAT_APOLOGY,
    FALLBACK_QUESTIONS,
    PERSONALIZED_PROMPTS_REQUEST,
    PERSONALIZED_PROMPTS_SYSTEM,
    REFLECTION_REQUEST,
    SUMMARY_FAILURE,
    SUMMARY_REQUEST,
)

from .backends import OllamaChatClient, RemoteChatBackend
from .dispatcher import BackendDispatcher
from .embeddings import l2_normalize, mean_pool
from .fallback import constant, with_fallback
from .mood import MOOD_REFLECTIONS, compute_mood_trends, mood_from_score, parse_mood_label, sentiment_score
from .pipeline_cache import PipelineCache
from .registry import ModelRegistry, PromptStore, default_model_registry, default_prompt_store
from .runtime import PipelineFactory, detect_device, transformers_factory
from .system_prompts import SystemPromptStore
from .types import Mood

logger = logging.getLogger(__name__)

_QUOTE_CHARS = "\"'“”‘’`"


def strip_quotes(text: str) -> str:
    """Drop whitespace and wrapping quote characters from a model answer."""

    return text.strip().strip(_QUOTE_CHARS).strip()


def _as_message(message: Any) -> dict[str, str]:
    if hasattr(message, "model_dump"):
        message = message.model_dump()
    return {"role": str(message["role"]), "content": str(message["content"])}


def _format_entry(entry: Mapping[str, Any]) -> str:
    date = entry.get("date") or entry.get("created_at") or ""
    if hasattr(date, "strftime"):
        date = date.strftime("%Y-%m-%d")
    mood = entry.get("mood") or "unknown"
    if isinstance(mood, Mood):
        mood = mood.value
    return f"Entry Date: {date}\nMood: {mood}\nContent: {entry.get('content', '')}\n\n"


def _format_chat(history: Sequence[Any]) -> str:
    lines = []
    for message in history:
        turn = _as_message(message)
        speaker = "User" if turn["role"] == "user" else "Assistant"
        lines.append(f"{speaker}: {turn['content']}")
    return "\n".join(lines)


def _parse_questions(raw: str) -> List[str] | None:
    # models like to wrap JSON in prose or code fences
    start, end = raw.find("["), raw.rfind("]")
    if start == -1 or end <= start:
        return None
    try:
        questions = json.loads(raw[start : end + 1])
    except ValueError:
        return None
    cleaned = [q.strip() for q in questions if isinstance(q, str) and q.strip()]
    return cleaned or None


class InferenceFacade:
    """Uniform async API over on-device pipelines and the remote chat model."""

    def __init__(
        self,
        dispatcher: BackendDispatcher,
        prompts: PromptStore,
        *,
        chat_model_id: str = "ollama-chat",
        summary_model_id: str = "ollama-summarize",
        sentiment_model_id: str = "sentiment-local",
        speech_model_id: str = "whisper-local",
        embedding_model_id: str = "embeddings-local",
    ) -> None:
        self.dispatcher = dispatcher
        self.prompts = prompts
        self.chat_model_id = chat_model_id
        self.summary_model_id = summary_model_id
        self.sentiment_model_id = sentiment_model_id
        self.speech_model_id = speech_model_id
        self.embedding_model_id = embedding_model_id

        self._chat = with_fallback(self._chat_primary, constant(CHAT_APOLOGY), label="generate_chat_response")
        self._summarize = with_fallback(self._summarize_primary, constant(SUMMARY_FAILURE), label="summarize_text")
        self._mood = with_fallback(self._mood_primary, constant(Mood.NEUTRAL), label="analyze_mood")
        self._advanced_mood = with_fallback(
            self._advanced_mood_primary,
            self._advanced_mood_fallback,
            accept=lambda mood: mood is not None,
            label="analyze_advanced_mood",
        )
        self._reflection = with_fallback(
            self._reflection_primary, self._reflection_fallback, label="generate_reflection"
        )
        self._personalized = with_fallback(
            self._personalized_primary,
            constant(FALLBACK_QUESTIONS),
            accept=lambda questions: bool(questions),
            label="generate_personalized_prompts",
        )

    @property
    def system_prompts(self) -> SystemPromptStore:
        return self.dispatcher.system_prompts

    @property
    def registry(self) -> ModelRegistry:
        return self.dispatcher.registry

    def set_system_prompt(self, model_id: str, text: str) -> None:
        self.system_prompts.set_system_prompt(model_id, text)

    def get_effective_system_prompt(self, model_id: str) -> str:
        return self.system_prompts.get_effective_system_prompt(model_id)

    def compute_mood_trends(self, moods: Sequence[Mood | str]) -> List[dict[str, Any]]:
        return compute_mood_trends(moods)

    # -- propagate on failure -------------------------------------------------

    async def generate_text(self, text: str, model_id: str, prompt_id: str | None = None) -> str:
        """Generate text with ``model_id``, optionally guided by a prompt template.

        On-device models see the template prepended to ``text``; remote chat
        models get it appended to their system prompt instead.
        """

        template = self.prompts.lookup_prompt(prompt_id) if prompt_id else None
        backend = await self.dispatcher.resolve(model_id)

        if isinstance(backend, RemoteChatBackend):
            system = "\n\n".join(part for part in (backend.system_prompt(), template and template.content) if part)
            return await backend.chat([{"role": "user", "content": text}], system_prompt=system)

        full_prompt = f"{template.content}\n\n{text}" if template else text
        return await backend.invoke(full_prompt)

    async def transcribe_speech(self, audio: Any) -> str:
        backend = await self.dispatcher.resolve_on_device(self.speech_model_id)
        result = await backend.run(audio)
        text = result.get("text") if isinstance(result, Mapping) else result
        if not isinstance(text, str):
            raise ValueError("Speech recognition returned no transcript")
        return text.strip()

    async def get_embeddings(self, text: str) -> List[float]:
        """Sentence embedding: mean-pooled over tokens, L2-normalised."""

        backend = await self.dispatcher.resolve_on_device(self.embedding_model_id)
        features = await backend.run(text)
        return l2_normalize(mean_pool(features))

    async def analyze_sentiment(self, text: str) -> Any:
        backend = await self.dispatcher.resolve_on_device(self.sentiment_model_id)
        return await backend.run(text)

    # -- degrade on failure ---------------------------------------------------

    async def generate_chat_response(self, messages: Sequence[Any], model_id: str | None = None) -> str:
        return await self._chat(messages, model_id or self.chat_model_id)

    async def summarize_text(self, text: str, model_id: str | None = None) -> str:
        return await self._summarize(text, model_id or self.summary_model_id)

    async def analyze_mood(self, text: str) -> Mood:
        return await self._mood(text)

    async def analyze_advanced_mood(self, text: str, model_id: str | None = None) -> Mood:
        return await self._advanced_mood(text, model_id or self.chat_model_id)

    async def generate_reflection(self, content: str, mood: Mood | str, model_id: str | None = None) -> str:
        return await self._reflection(content, Mood(mood), model_id or self.chat_model_id)

    async def generate_personalized_prompts(
        self,
        entries: Sequence[Mapping[str, Any]],
        chat_history: Sequence[Any] = (),
        model_id: str | None = None,
    ) -> List[str]:
        questions = await self._personalized(entries, chat_history, model_id or self.chat_model_id)
        return list(questions)

    # -- strategies -----------------------------------------------------------

    async def _chat_primary(self, messages: Sequence[Any], model_id: str) -> str:
        backend = await self.dispatcher.resolve_remote(model_id)
        reply = await backend.chat([_as_message(message) for message in messages])
        return reply.strip()

    async def _summarize_primary(self, text: str, model_id: str) -> str:
        backend = await self.dispatcher.resolve_remote(model_id)
        summary = await backend.invoke(SUMMARY_REQUEST.format(text=text))
        return strip_quotes(summary)

    async def _mood_primary(self, text: str) -> Mood:
        result = await self.analyze_sentiment(text)
        score = sentiment_score(result)
        mood = mood_from_score(score)
        logger.debug("analyze_mood score=%.3f mood=%s", score, mood.value)
        return mood

    async def _advanced_mood_primary(self, text: str, model_id: str) -> Mood | None:
        backend = await self.dispatcher.resolve_remote(model_id)
        answer = await backend.chat(
            [{"role": "user", "content": text}],
            system_prompt=ADVANCED_MOOD_PROMPT.strip(),
        )
        return parse_mood_label(answer)

    async def _advanced_mood_fallback(self, text: str, model_id: str) -> Mood:
        return await self.analyze_mood(text)

    async def _reflection_primary(self, content: str, mood: Mood, model_id: str) -> str:
        backend = await self.dispatcher.resolve_remote(model_id)
        reply = await backend.invoke(REFLECTION_REQUEST.format(mood=mood.value, content=content))
        return reply.strip()

    async def _reflection_fallback(self, content: str, mood: Mood, model_id: str) -> str:
        return MOOD_REFLECTIONS[mood]

    async def _personalized_primary(
        self,
        entries: Sequence[Mapping[str, Any]],
        chat_history: Sequence[Any],
        model_id: str,
    ) -> List[str] | None:
        backend = await self.dispatcher.resolve_remote(model_id)
        request = PERSONALIZED_PROMPTS_REQUEST.format(
            entries="".join(_format_entry(entry) for entry in entries),
            chat=_format_chat(chat_history),
        )
        answer = await backend.chat(
            [{"role": "user", "content": request}],
            system_prompt=PERSONALIZED_PROMPTS_SYSTEM.strip(),
        )
        return _parse_questions(answer)


def create_inference(
    settings: AppSettings | None = None,
    *,
    registry: ModelRegistry | None = None,
    prompts: PromptStore | None = None,
    factory: PipelineFactory | None = None,
    chat_client: OllamaChatClient | None = None,
) -> InferenceFacade:
    """Wire registry, caches and clients into an :class:`InferenceFacade`."""

    settings = settings or get_settings()

    if registry is None:
        registry = default_model_registry()
    if prompts is None:
        prompts = default_prompt_store()
    system_prompts = SystemPromptStore(registry)
    device = detect_device(settings.ml_device)
    pipelines = PipelineCache(
        registry,
        factory or transformers_factory(settings.hf_cache_dir),
        device=device,
    )
    client = chat_client or OllamaChatClient(
        base_url=settings.ollama_base_url,
        timeout=settings.remote_timeout,
    )
    dispatcher = BackendDispatcher(registry, pipelines, client, system_prompts)
    logger.info("Inference facade ready (device=%s, chat endpoint=%s)", device, settings.ollama_base_url)
    return InferenceFacade(
        dispatcher,
        prompts,
        chat_model_id=settings.chat_model_id,
        summary_model_id=settings.summary_model_id,
        sentiment_model_id=settings.sentiment_model_id,
        speech_model_id=settings.speech_model_id,
        embedding_model_id=settings.embedding_model_id,
    )


__all__ = ["InferenceFacade", "create_inference", "strip_quotes"]
