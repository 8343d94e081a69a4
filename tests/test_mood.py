import pytest

from reverie.libs.ml import Mood
from reverie.libs.ml.mood import compute_mood_trends, mood_from_score, parse_mood_label, sentiment_score


@pytest.mark.parametrize(
    "score, expected",
    [
        (1.0, Mood.HAPPY),
        (0.61, Mood.HAPPY),
        (0.6, Mood.NEUTRAL),
        (0.55, Mood.NEUTRAL),
        (0.41, Mood.NEUTRAL),
        (0.4, Mood.REFLECTIVE),
        (0.21, Mood.REFLECTIVE),
        (0.2, Mood.SAD),
        (0.0, Mood.SAD),
    ],
)
def test_mood_thresholds(score, expected) -> None:
    assert mood_from_score(score) is expected


def test_sentiment_score_uses_positive_probability() -> None:
    assert sentiment_score([{"label": "POSITIVE", "score": 0.9}]) == pytest.approx(0.9)
    assert sentiment_score([{"label": "NEGATIVE", "score": 0.9}]) == pytest.approx(0.1)
    assert sentiment_score({"label": "LABEL_1", "score": 0.3}) == pytest.approx(0.3)
    assert sentiment_score(0.42) == pytest.approx(0.42)


def test_sentiment_score_rejects_empty_output() -> None:
    with pytest.raises(ValueError):
        sentiment_score([])


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("HAPPY ", Mood.HAPPY),
        ("\nsad", Mood.SAD),
        ("Reflective", Mood.REFLECTIVE),
        ("joyful", None),
        ("happy.", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_mood_label(raw, expected) -> None:
    assert parse_mood_label(raw) is expected


def test_compute_mood_trends() -> None:
    trends = compute_mood_trends(["happy", Mood.SAD, "happy"])

    assert trends == [
        {"mood": "happy", "count": 2, "percentage": 67},
        {"mood": "sad", "count": 1, "percentage": 33},
    ]
    assert compute_mood_trends([]) == []


def test_compute_mood_trends_rounds_halves_up() -> None:
    trends = compute_mood_trends(["sad"] + ["happy"] * 7)

    assert trends == [
        {"mood": "sad", "count": 1, "percentage": 13},
        {"mood": "happy", "count": 7, "percentage": 88},
    ]
