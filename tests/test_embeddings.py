import math

import pytest

from reverie.libs.ml.embeddings import l2_normalize, mean_pool


def test_mean_pool_over_tokens() -> None:
    features = [[[1.0, 2.0], [3.0, 4.0]]]
    assert mean_pool(features) == [2.0, 3.0]


def test_mean_pool_accepts_unbatched_and_flat_vectors() -> None:
    assert mean_pool([[1.0, 1.0], [3.0, 3.0]]) == [2.0, 2.0]
    assert mean_pool([0.5, 0.5]) == [0.5, 0.5]
    assert mean_pool([]) == []


def test_l2_normalize() -> None:
    vector = l2_normalize([3.0, 4.0])
    assert vector == pytest.approx([0.6, 0.8])
    assert math.isclose(sum(x * x for x in vector), 1.0)
    assert l2_normalize([0.0, 0.0]) == [0.0, 0.0]
