import math

import pytest

from geodirection import vec3 as v3
from geodirection.errors import DegenerateVectorError


def test_cross_product_right_handed():
    assert v3.cross((1.0, 0.0, 0.0), (0.0, 1.0, 0.0)) == (0.0, 0.0, 1.0)
    assert v3.cross((0.0, 1.0, 0.0), (1.0, 0.0, 0.0)) == (0.0, 0.0, -1.0)


def test_normalize_zero_vector_returns_zero():
    assert v3.normalize((0.0, 0.0, 0.0)) == v3.ZERO


def test_normalize_strict_zero_vector_raises():
    with pytest.raises(DegenerateVectorError):
        v3.normalize_strict((0.0, 0.0, 0.0))
    with pytest.raises(DegenerateVectorError):
        v3.normalize_strict((1e-3, 0.0, 0.0), eps=1e-2)


def test_normalize_strict_rejects_nan():
    with pytest.raises(DegenerateVectorError):
        v3.normalize_strict((math.nan, 0.0, 0.0))


def test_sign_per_axis():
    assert v3.sign((2.0, -0.1, 0.0)) == (1.0, -1.0, 0.0)


def test_centroid_and_distance():
    c = v3.centroid((0.0, 0.0, 0.0), (3.0, 0.0, 0.0), (0.0, 3.0, 0.0))
    assert c == (1.0, 1.0, 0.0)
    assert math.isclose(v3.distance(c, (1.0, 1.0, 2.0)), 2.0)


def test_vector_sum_is_exact_regardless_of_order():
    vectors = [(1e16, 1.0, 0.0), (1.0, 1e-16, 0.0), (-1e16, -1.0, 0.0)]
    assert v3.vector_sum(vectors) == v3.vector_sum(reversed(vectors))
    assert v3.vector_sum(vectors)[0] == 1.0


def test_is_unit():
    assert v3.is_unit(v3.normalize((3.0, 4.0, 0.0)))
    assert not v3.is_unit((3.0, 4.0, 0.0))
