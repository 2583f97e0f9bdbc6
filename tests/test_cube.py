import math

import pytest

from hobbyos.cube import (
    CUBE,
    SCALE,
    SURFACES,
    Vector3D,
    drawing_order,
    project,
    rotate_cube,
    scanline_spans,
    surface_depths,
)


def test_zero_rotation_scales_cube():
    vertices = rotate_cube(0, 0, 0)
    for v, c in zip(vertices, CUBE):
        assert v.x == pytest.approx(SCALE * c.x)
        assert v.y == pytest.approx(SCALE * c.y)
        assert v.z == pytest.approx(SCALE * c.z)


@pytest.mark.parametrize("angles", [(182, 273, 364), (1000, 20000, 40000), (0xFFFF, 1, 77)])
def test_rotation_preserves_distance(angles):
    for v in rotate_cube(*angles):
        assert math.sqrt(v.x ** 2 + v.y ** 2 + v.z ** 2) == pytest.approx(SCALE * math.sqrt(3))


@pytest.mark.parametrize("angles", [(0, 0, 0), (182, 273, 364), (5000, 123, 9999)])
def test_depths_sum_to_zero(angles):
    assert sum(surface_depths(rotate_cube(*angles))) == pytest.approx(0.0, abs=1e-9)


def test_depths_of_front_and_back_at_rest():
    depths = surface_depths(rotate_cube(0, 0, 0))
    assert depths[0] == pytest.approx(4 * SCALE)
    assert depths[1] == pytest.approx(-4 * SCALE)


def test_drawing_order_at_rest_hides_back_face():
    order = drawing_order(rotate_cube(0, 0, 0))
    assert 0 not in order
    assert 1 in order


@pytest.mark.parametrize("angles", [(182, 273, 364), (7000, 3000, 100), (30000, 10, 60000)])
def test_drawing_order_is_far_to_near(angles):
    vertices = rotate_cube(*angles)
    depths = surface_depths(vertices)
    order = drawing_order(vertices)
    assert all(depths[a] >= depths[b] for a, b in zip(order, order[1:]))
    assert len(set(order)) == len(order)


def test_opposite_faces_not_both_drawn_in_general_position():
    order = set(drawing_order(rotate_cube(182 * 7, 273 * 7, 364 * 7)))
    assert not {0, 1} <= order
    assert not {2, 4} <= order
    assert not {3, 5} <= order


def test_project_centre_of_canvas():
    points = project([Vector3D(0.0, 0.0, 0.0)])
    assert (points[0].x, points[0].y) == (80, 80)


def test_scanline_spans_of_front_face_form_square():
    screen = project(rotate_cube(0, 0, 0))
    corners = [screen[i] for i in SURFACES[1]]
    xs = [p.x for p in corners]
    ys = [p.y for p in corners]
    spans = scanline_spans(screen, 1)
    assert [y for y, _, _ in spans] == list(range(min(ys), max(ys) + 1))
    assert all(left == min(xs) and right == max(xs) for _, left, right in spans)


def test_scanline_spans_are_ordered():
    screen = project(rotate_cube(182 * 3, 273 * 3, 364 * 3))
    for sur in range(len(SURFACES)):
        for _, left, right in scanline_spans(screen, sur):
            assert left <= right