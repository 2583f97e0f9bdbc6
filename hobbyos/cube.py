"""A rotating cube: rotation, perspective projection and scan-line filling."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from hobbyos.graphics import Vector2D

SCALE = 50
MARGIN = 10
CANVAS_SIZE = 3 * SCALE + MARGIN

_TO_RAD = 3.14159265358979323 / 0x8000

# Angle increments per frame, in units of 1/0x10000 of a full turn.
STEP_X = 182
STEP_Y = 273
STEP_Z = 364


@dataclass(frozen=True)
class Vector3D:
    """A point in three dimensions."""

    x: float
    y: float
    z: float


CUBE: tuple[Vector3D, ...] = tuple(
    Vector3D(*v)
    for v in (
        (1, 1, 1), (1, 1, -1), (1, -1, 1), (1, -1, -1),
        (-1, 1, 1), (-1, 1, -1), (-1, -1, 1), (-1, -1, -1),
    )
)

SURFACES: tuple[tuple[int, int, int, int], ...] = (
    (0, 4, 6, 2),
    (1, 3, 7, 5),
    (0, 2, 3, 1),
    (0, 1, 5, 4),
    (4, 5, 7, 6),
    (6, 7, 3, 2),
)

COLORS: tuple[int, ...] = (0xFF0000, 0x00FF00, 0xFFFF00, 0x0000FF, 0xFF00FF, 0x00FFFF)


def rotate_cube(thx: int, thy: int, thz: int) -> list[Vector3D]:
    """The cube's vertices after rotation about X, Y and Z (angles in 1/0x10000 turns)."""
    xp, xa = math.cos(thx * _TO_RAD), math.sin(thx * _TO_RAD)
    yp, ya = math.cos(thy * _TO_RAD), math.sin(thy * _TO_RAD)
    zp, za = math.cos(thz * _TO_RAD), math.sin(thz * _TO_RAD)
    vertices = []
    for cv in CUBE:
        zt = SCALE * cv.z * xp + SCALE * cv.y * xa
        yt = SCALE * cv.y * xp - SCALE * cv.z * xa
        xt = SCALE * cv.x * yp + zt * ya
        z = zt * yp - SCALE * cv.x * ya
        x = xt * zp - yt * za
        y = yt * zp + xt * za
        vertices.append(Vector3D(x, y, z))
    return vertices


def surface_depths(vertices: Sequence[Vector3D]) -> list[float]:
    """Four times the Z coordinate of the centre of each surface."""
    return [sum(vertices[i].z for i in surface) for surface in SURFACES]


def project(vertices: Sequence[Vector3D]) -> list[Vector2D]:
    """Screen coordinates of the vertices; larger Z is further away."""
    half = CANVAS_SIZE // 2
    points = []
    for v in vertices:
        t = 6 * SCALE / (v.z + 8 * SCALE)
        points.append(Vector2D(int(v.x * t + half), int(v.y * t + half)))
    return points


def drawing_order(vertices: Sequence[Vector3D]) -> list[int]:
    """Indices of the surfaces facing the viewer, furthest first."""
    depths = surface_depths(vertices)
    order = sorted(range(len(SURFACES)), key=lambda s: -depths[s])
    visible = []
    for sur in order:
        v0, v1, v2 = (vertices[i] for i in SURFACES[sur][:3])
        e0x, e0y = v1.x - v0.x, v1.y - v0.y
        e1x, e1y = v2.x - v1.x, v2.y - v1.y
        if e0x * e1y <= e0y * e1x:
            visible.append(sur)
    return visible


def scanline_spans(screen: Sequence[Vector2D], surface: int) -> list[tuple[int, int, int]]:
    """Horizontal spans (y, left x, right x) that fill the projected surface."""
    indices = SURFACES[surface]
    ymin, ymax = CANVAS_SIZE, 0
    up: dict[int, int] = {}
    down: dict[int, int] = {}
    for i, index in enumerate(indices):
        p0 = screen[indices[(i + 3) % 4]]
        p1 = screen[index]
        ymin = min(ymin, p1.y)
        ymax = max(ymax, p1.y)
        if p0.y == p1.y:
            continue
        if p0.y < p1.y:
            table = up
            x0, y0, y1, dx = p0.x, p0.y, p1.y, p1.x - p0.x
        else:
            table = down
            x0, y0, y1, dx = p1.x, p1.y, p0.y, p0.x - p1.x
        slope = dx / (y1 - y0)
        roundish = math.floor if dx >= 0 else math.ceil
        for y in range(y0, y1 + 1):
            table[y] = int(roundish(slope * (y - y0) + x0))

    spans = []
    for y in range(ymin, ymax + 1):
        xs = [table[y] for table in (up, down) if y in table]
        if xs:
            spans.append((y, min(xs), max(xs)))
    return spans