import math

import numpy as np
import pytest

from game.world.los import bresenham_line
from game.world.visibility import RayCastVisibility, ShadowcastVisibility


def _make_calculator(cls, opaque: np.ndarray, visible: np.ndarray):
    height, width = opaque.shape

    def blocks_light(x, y):
        return not (0 <= x < width and 0 <= y < height) or bool(opaque[y, x])

    def set_visible(x, y):
        if 0 <= x < width and 0 <= y < height:
            visible[y, x] = True

    return cls(
        blocks_light=blocks_light,
        set_visible=set_visible,
        get_distance=lambda dx, dy: math.hypot(dx, dy),
    )


def test_bresenham_excludes_start_and_includes_end():
    assert list(bresenham_line(0, 0, 3, 0)) == [(1, 0), (2, 0), (3, 0)]
    assert list(bresenham_line(2, 2, 0, 0)) == [(1, 1), (0, 0)]
    assert list(bresenham_line(4, 4, 4, 4)) == []


def test_bresenham_steps_one_cell_at_a_time():
    points = [(0, 0)] + list(bresenham_line(0, 0, 7, 3))
    for (ax, ay), (bx, by) in zip(points, points[1:]):
        assert max(abs(bx - ax), abs(by - ay)) == 1
    assert points[-1] == (7, 3)


@pytest.mark.parametrize("cls", [RayCastVisibility, ShadowcastVisibility])
def test_diagonals_visible_in_open_field(cls):
    opaque = np.zeros((9, 9), dtype=bool)
    visible = np.zeros_like(opaque)
    _make_calculator(cls, opaque, visible).compute(4, 4, 6)
    for d in range(1, 5):
        assert visible[4 - d, 4 - d]
        assert visible[4 + d, 4 + d]
        assert visible[4 - d, 4 + d]
        assert visible[4 + d, 4 - d]


@pytest.mark.parametrize("cls", [RayCastVisibility, ShadowcastVisibility])
def test_radius_is_circular(cls):
    opaque = np.zeros((11, 11), dtype=bool)
    visible = np.zeros_like(opaque)
    _make_calculator(cls, opaque, visible).compute(5, 5, 3)
    assert visible[5, 8]
    assert visible[2, 5]
    assert not visible[8, 8]
    assert not visible[5, 9]


@pytest.mark.parametrize("cls", [RayCastVisibility, ShadowcastVisibility])
def test_pillar_casts_shadow(cls):
    opaque = np.zeros((7, 11), dtype=bool)
    opaque[3, 5] = True
    visible = np.zeros_like(opaque)
    _make_calculator(cls, opaque, visible).compute(2, 3, 10)
    assert visible[3, 5]
    assert not visible[3, 6]
    assert not visible[3, 8]
    assert visible[0, 8]
