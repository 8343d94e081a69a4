"""Application settings management leveraging pydantic v2."""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Typed configuration sourced from environment variables."""

    app_name: str = Field(
        default="Reverie",
        validation_alias=AliasChoices("APP_NAME", "REVERIE_APP_NAME"),
    )
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENVIRONMENT", "REVERIE_ENVIRONMENT"),
    )
    ollama_base_url: str = Field(
        default="http://localhost:11434",
        validation_alias=AliasChoices("OLLAMA_BASE_URL", "REVERIE_OLLAMA_BASE_URL"),
    )
    remote_timeout: float = Field(
        default=60.0,
        gt=0,
        validation_alias=AliasChoices("REMOTE_TIMEOUT", "REVERIE_REMOTE_TIMEOUT"),
    )
    # Acceleration hint handed to the on-device runtime. "auto" probes torch.
    ml_device: str = Field(
        default="auto",
        validation_alias=AliasChoices("ML_DEVICE", "REVERIE_ML_DEVICE"),
    )
    hf_cache_dir: str | None = Field(
        default=None,
        validation_alias=AliasChoices("HF_CACHE_DIR", "REVERIE_HF_CACHE_DIR"),
    )
    chat_model_id: str = Field(
        default="ollama-chat",
        validation_alias=AliasChoices("CHAT_MODEL_ID", "REVERIE_CHAT_MODEL_ID"),
    )
    summary_model_id: str = Field(
        default="ollama-summarize",
        validation_alias=AliasChoices("SUMMARY_MODEL_ID", "REVERIE_SUMMARY_MODEL_ID"),
    )
    sentiment_model_id: str = Field(
        default="sentiment-local",
        validation_alias=AliasChoices("SENTIMENT_MODEL_ID", "REVERIE_SENTIMENT_MODEL_ID"),
    )
    speech_model_id: str = Field(
        default="whisper-local",
        validation_alias=AliasChoices("SPEECH_MODEL_ID", "REVERIE_SPEECH_MODEL_ID"),
    )
    embedding_model_id: str = Field(
        default="embeddings-local",
        validation_alias=AliasChoices("EMBEDDING_MODEL_ID", "REVERIE_EMBEDDING_MODEL_ID"),
    )

    model_config = SettingsConfigDict(
        env_file=(".env", "reverie/.env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Load environment variables and return a cached settings instance."""

    return AppSettings()


__all__ = ["AppSettings", "get_settings"]
