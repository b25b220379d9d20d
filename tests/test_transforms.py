import math

import pytest

from geodirection.errors import EmptyInputError
from geodirection.transforms import (
    affine_transform,
    identity_transform,
    translation_transform,
    world_bounds_center,
)

from meshutils import CUBE_VERTICES, assert_vec_close


def test_translation_moves_points():
    move = translation_transform((1.0, -2.0, 3.0))
    assert move((0.0, 0.0, 0.0)) == (1.0, -2.0, 3.0)


def test_affine_rotation_about_z():
    c, s = math.cos(math.pi / 2), math.sin(math.pi / 2)
    rotate = affine_transform([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]], (0.0, 0.0, 5.0))
    assert_vec_close(rotate((1.0, 0.0, 0.0)), (0.0, 1.0, 5.0))


def test_affine_requires_3x3():
    with pytest.raises(ValueError):
        affine_transform([[1.0, 0.0], [0.0, 1.0]])


def test_world_bounds_center():
    assert world_bounds_center(CUBE_VERTICES) == (0.5, 0.5, 0.5)
    shifted = world_bounds_center(CUBE_VERTICES, translation_transform((2.0, 0.0, 0.0)))
    assert shifted == (2.5, 0.5, 0.5)
    scaled = world_bounds_center(
        CUBE_VERTICES, affine_transform([[2.0, 0.0, 0.0], [0.0, 2.0, 0.0], [0.0, 0.0, 2.0]])
    )
    assert scaled == (1.0, 1.0, 1.0)


def test_world_bounds_center_of_nothing_raises():
    with pytest.raises(EmptyInputError):
        world_bounds_center([], identity_transform)
