"""Mood labelling helpers."""

from __future__ import annotations

import math
from collections import Counter
from typing import Any, Iterable, List

from .types import Mood

# Lower bounds, exclusive, checked from the top down.
MOOD_THRESHOLDS: tuple[tuple[float, Mood], ...] = (
    (0.6, Mood.HAPPY),
    (0.4, Mood.NEUTRAL),
    (0.2, Mood.REFLECTIVE),
)

_POSITIVE_LABELS = {"positive", "label_1", "pos"}

MOOD_REFLECTIONS: dict[Mood, str] = {
    Mood.HAPPY: "It's great to see you're feeling positive. Keep this momentum going!",
    Mood.NEUTRAL: "Days like these are important too. What small thing could make tomorrow a bit brighter?",
    Mood.REFLECTIVE: "Taking time to reflect shows great self-awareness. What insights will you carry forward?",
    Mood.SAD: "It's okay to have difficult days. Be gentle with yourself and remember that emotions are temporary.",
}


def mood_from_score(score: float) -> Mood:
    """Map a positivity score in [0, 1] onto the four ordered moods."""

    for bound, mood in MOOD_THRESHOLDS:
        if score > bound:
            return mood
    return Mood.SAD


def sentiment_score(result: Any) -> float:
    """Reduce sentiment pipeline output to the probability the text is positive."""

    if isinstance(result, (int, float)):
        return float(result)
    if isinstance(result, list):
        if not result:
            raise ValueError("Empty sentiment result")
        return sentiment_score(result[0])
    if isinstance(result, dict):
        score = float(result["score"])
        label = str(result.get("label", "POSITIVE")).lower()
        return score if label in _POSITIVE_LABELS else 1.0 - score
    raise ValueError(f"Unrecognised sentiment output: {type(result).__name__}")


def parse_mood_label(raw: str | None) -> Mood | None:
    """Normalise a one-word model answer; ``None`` unless it is one of the four moods."""

    if not raw:
        return None
    try:
        return Mood(raw.strip().lower())
    except ValueError:
        return None


def compute_mood_trends(moods: Iterable[Mood | str]) -> List[dict[str, Any]]:
    """Count each mood and its share, rounded half up, in first-seen order."""

    counts = Counter(Mood(mood) for mood in moods)
    total = sum(counts.values())
    if not total:
        return []
    return [
        {"mood": mood.value, "count": count, "percentage": math.floor(count * 100 / total + 0.5)}
        for mood, count in counts.items()
    ]


__all__ = [
    "MOOD_REFLECTIONS",
    "MOOD_THRESHOLDS",
    "compute_mood_trends",
    "mood_from_score",
    "parse_mood_label",
    "sentiment_score",
]
