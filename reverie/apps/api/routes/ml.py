from __future__ import annotations

import logging
from typing import Any, Dict, List, NoReturn, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from reverie.libs.ml import ConfigNotFound, InferenceFacade, ModelLoadError, Mood, PromptUsage, RemoteInferenceError
from reverie.libs.schemas import ConversationTurn

router = APIRouter(prefix="/ml", tags=["ml"])
logger = logging.getLogger(__name__)


class TextIn(BaseModel):
    text: str = Field(min_length=1)
    model_id: Optional[str] = None


class GenerateIn(TextIn):
    model_id: str
    prompt_id: Optional[str] = None


class ChatIn(BaseModel):
    messages: List[ConversationTurn]
    model_id: Optional[str] = None


class ReflectionIn(BaseModel):
    content: str = Field(min_length=1)
    mood: Mood
    model_id: Optional[str] = None


class MoodTrendsIn(BaseModel):
    moods: List[Mood]


class SystemPromptIn(BaseModel):
    text: str


def _get_inference(request: Request) -> InferenceFacade:
    inference = getattr(request.app.state, "inference", None)
    if inference is None:
        raise HTTPException(status_code=503, detail="Inference unavailable")
    return inference


def _raise_http(exc: Exception) -> NoReturn:
    if isinstance(exc, ConfigNotFound):
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    logger.error("Inference request failed: %s", exc)
    raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.get("/models")
async def list_models(request: Request) -> List[Dict[str, Any]]:
    inference = _get_inference(request)
    return [
        {
            "id": config.id,
            "name": config.name,
            "task": config.task.value,
            "backend": config.backend_kind.value,
            "path": config.model_path,
        }
        for config in inference.registry
    ]


@router.get("/prompts")
async def list_prompts(request: Request, usage: Optional[PromptUsage] = None) -> List[Dict[str, Any]]:
    inference = _get_inference(request)
    templates = inference.prompts.prompts_for_usage(usage) if usage else list(inference.prompts)
    return [
        {"id": template.id, "name": template.name, "usage": template.usage.value}
        for template in templates
    ]


@router.get("/system-prompts/{model_id}")
async def get_system_prompt(model_id: str, request: Request) -> dict:
    inference = _get_inference(request)
    return {
        "model_id": model_id,
        "system_prompt": inference.get_effective_system_prompt(model_id),
        "overridden": inference.system_prompts.get_override(model_id) is not None,
    }


@router.put("/system-prompts/{model_id}")
async def put_system_prompt(model_id: str, body: SystemPromptIn, request: Request) -> dict:
    inference = _get_inference(request)
    if model_id not in inference.registry:
        raise HTTPException(status_code=404, detail=f"Model '{model_id}' not found in configuration")
    inference.set_system_prompt(model_id, body.text)
    return {"model_id": model_id, "system_prompt": body.text, "overridden": True}


@router.delete("/system-prompts/{model_id}")
async def delete_system_prompt(model_id: str, request: Request) -> dict:
    inference = _get_inference(request)
    removed = inference.system_prompts.clear_system_prompt(model_id)
    return {"model_id": model_id, "removed": removed}


@router.post("/mood")
async def mood(body: TextIn, request: Request) -> dict:
    mood = await _get_inference(request).analyze_mood(body.text)
    return {"mood": mood.value}


@router.post("/mood/advanced")
async def advanced_mood(body: TextIn, request: Request) -> dict:
    mood = await _get_inference(request).analyze_advanced_mood(body.text, body.model_id)
    return {"mood": mood.value}


@router.post("/mood/trends")
async def mood_trends(body: MoodTrendsIn, request: Request) -> List[Dict[str, Any]]:
    return _get_inference(request).compute_mood_trends(body.moods)


@router.post("/summary")
async def summary(body: TextIn, request: Request) -> dict:
    text = await _get_inference(request).summarize_text(body.text, body.model_id)
    return {"summary": text}


@router.post("/chat")
async def chat(body: ChatIn, request: Request) -> dict:
    reply = await _get_inference(request).generate_chat_response(body.messages, body.model_id)
    return {"reply": reply}


@router.post("/reflection")
async def reflection(body: ReflectionIn, request: Request) -> dict:
    text = await _get_inference(request).generate_reflection(body.content, body.mood, body.model_id)
    return {"reflection": text}


@router.post("/generate")
async def generate(body: GenerateIn, request: Request) -> dict:
    inference = _get_inference(request)
    try:
        text = await inference.generate_text(body.text, body.model_id, body.prompt_id)
    except (ConfigNotFound, ModelLoadError, RemoteInferenceError, ValueError) as exc:
        _raise_http(exc)
    return {"text": text}


@router.post("/embeddings")
async def embeddings(body: TextIn, request: Request) -> dict:
    inference = _get_inference(request)
    try:
        vector = await inference.get_embeddings(body.text)
    except (ConfigNotFound, ModelLoadError, ValueError) as exc:
        _raise_http(exc)
    return {"embedding": vector, "dimensions": len(vector)}
