"""Axis-aligned bounding boxes of Solid trees.

Bounds are conservative: a ``Difference`` reports its base, a rotated
child reports the box around its rotated corners.  ``HalfSpace`` is
unbounded except along z, so it is only useful inside an
``Intersection``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import product

from .solid import (
    Box, Circle, Cylinder, Difference, Extrude, HalfSpace, Intersection,
    Minkowski, Polygon, Rect, Rotate, Solid, Sphere, Translate, Union, Vec3,
)

INF = math.inf


@dataclass(frozen=True)
class Bounds:
    min: Vec3
    max: Vec3

    @property
    def size(self) -> Vec3:
        return tuple(hi - lo for lo, hi in zip(self.min, self.max))

    @property
    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in self.min + self.max)

    def union(self, other: Bounds) -> Bounds:
        return Bounds(
            tuple(map(min, self.min, other.min)),
            tuple(map(max, self.max, other.max)),
        )

    def intersect(self, other: Bounds) -> Bounds:
        return Bounds(
            tuple(map(max, self.min, other.min)),
            tuple(map(min, self.max, other.max)),
        )

    def translated(self, offset: Vec3) -> Bounds:
        return Bounds(
            tuple(a + d for a, d in zip(self.min, offset)),
            tuple(a + d for a, d in zip(self.max, offset)),
        )

    def corners(self) -> list[Vec3]:
        return list(product(*zip(self.min, self.max)))


_UNBOUNDED = Bounds((-INF, -INF, -INF), (INF, INF, INF))


def _rotate_point(p: Vec3, angles: Vec3) -> Vec3:
    """Rotate about x, then y, then z (OpenSCAD order)."""
    x, y, z = p
    ax, ay, az = (math.radians(a) for a in angles)
    y, z = y * math.cos(ax) - z * math.sin(ax), y * math.sin(ax) + z * math.cos(ax)
    x, z = x * math.cos(ay) + z * math.sin(ay), -x * math.sin(ay) + z * math.cos(ay)
    x, y = x * math.cos(az) - y * math.sin(az), x * math.sin(az) + y * math.cos(az)
    return x, y, z


def bounds(node: Solid) -> Bounds:
    """Bounding box of *node* in its own coordinate frame."""
    if isinstance(node, Rect):
        return Bounds((0.0, 0.0, 0.0), (node.width, node.height, 0.0))
    if isinstance(node, Circle):
        r = node.radius
        return Bounds((-r, -r, 0.0), (r, r, 0.0))
    if isinstance(node, Polygon):
        xs = [p[0] for p in node.points]
        ys = [p[1] for p in node.points]
        return Bounds((min(xs), min(ys), 0.0), (max(xs), max(ys), 0.0))
    if isinstance(node, Box):
        return Bounds((0.0, 0.0, 0.0), (node.width, node.depth, node.height))
    if isinstance(node, Cylinder):
        r = node.radius
        return Bounds((-r, -r, 0.0), (r, r, node.height))
    if isinstance(node, Sphere):
        r = node.radius
        return Bounds((-r, -r, -r), (r, r, r))
    if isinstance(node, HalfSpace):
        return Bounds((-INF, -INF, node.z_min), (INF, INF, INF))
    if isinstance(node, Extrude):
        b = bounds(node.child)
        return Bounds((b.min[0], b.min[1], 0.0), (b.max[0], b.max[1], node.height))
    if isinstance(node, Translate):
        return bounds(node.child).translated(node.offset)
    if isinstance(node, Rotate):
        b = bounds(node.child)
        if not b.is_finite:
            return b if node.angles == (0.0, 0.0, 0.0) else _UNBOUNDED
        pts = [_rotate_point(c, node.angles) for c in b.corners()]
        return Bounds(
            tuple(min(p[i] for p in pts) for i in range(3)),
            tuple(max(p[i] for p in pts) for i in range(3)),
        )
    if isinstance(node, Minkowski):
        a, b = bounds(node.a), bounds(node.b)
        return Bounds(
            tuple(x + y for x, y in zip(a.min, b.min)),
            tuple(x + y for x, y in zip(a.max, b.max)),
        )
    if isinstance(node, Union):
        result = bounds(node.children[0])
        for child in node.children[1:]:
            result = result.union(bounds(child))
        return result
    if isinstance(node, Difference):
        return bounds(node.children[0])
    if isinstance(node, Intersection):
        result = bounds(node.children[0])
        for child in node.children[1:]:
            result = result.intersect(bounds(child))
        return result
    raise TypeError(f"Unknown solid node {type(node).__name__}")
