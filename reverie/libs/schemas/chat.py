"""Shared chat schemas for Reverie."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class ConversationTurn(BaseModel):
    """A single message in a chat request; the caller owns the history."""

    role: Literal["system", "user", "assistant"]
    content: str


__all__ = ["ConversationTurn"]
