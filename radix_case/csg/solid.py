"""
Solid expression tree — immutable CSG nodes.

Every node is a frozen dataclass, so two trees built from the same
parameters compare equal with ``==`` and hash identically.  Nothing in
this module evaluates geometry: ``radix_case.scad.emit`` turns a tree
into OpenSCAD source and ``radix_case.csg.bounds`` answers bounding-box
queries.

2-D nodes (``Rect``, ``Circle``, ``Polygon``) only become solids through
``Extrude``; booleans, transforms and ``Minkowski`` accept either kind
as long as all operands share a dimension.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]


class Solid:
    """Base class for every CSG node."""

    __slots__ = ()


# ── 2-D primitives ─────────────────────────────────────────────────


@dataclass(frozen=True)
class Rect(Solid):
    """Rectangle with its bottom-left corner on the origin."""

    width: float
    height: float


@dataclass(frozen=True)
class Circle(Solid):
    radius: float
    segments: int


@dataclass(frozen=True)
class Polygon(Solid):
    """Polygon; with *paths*, the first path is the outline and the rest holes."""

    points: tuple[Vec2, ...]
    paths: tuple[tuple[int, ...], ...] = ()


# ── 3-D primitives ─────────────────────────────────────────────────


@dataclass(frozen=True)
class Box(Solid):
    """Cuboid with one corner on the origin."""

    width: float
    depth: float
    height: float


@dataclass(frozen=True)
class Cylinder(Solid):
    """Cylinder standing on the origin, axis along +z."""

    height: float
    radius: float
    segments: int


@dataclass(frozen=True)
class Sphere(Solid):
    radius: float
    segments: int


@dataclass(frozen=True)
class Extrude(Solid):
    """A 2-D profile extruded from z = 0 to z = *height*."""

    height: float
    child: Solid


@dataclass(frozen=True)
class HalfSpace(Solid):
    """Everything at or above the plane z = *z_min*.

    Only meaningful as an ``Intersection`` operand: it clips away the
    far side of a plane without an oversized box in the tree.
    """

    z_min: float = 0.0


# ── transforms ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Translate(Solid):
    offset: Vec3
    child: Solid


@dataclass(frozen=True)
class Rotate(Solid):
    """Euler rotation in degrees, applied about x, then y, then z."""

    angles: Vec3
    child: Solid


# ── booleans ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class Union(Solid):
    children: tuple[Solid, ...]
    label: str = ""


@dataclass(frozen=True)
class Difference(Solid):
    """First child minus every following child."""

    children: tuple[Solid, ...]
    label: str = ""


@dataclass(frozen=True)
class Intersection(Solid):
    children: tuple[Solid, ...]
    label: str = ""


@dataclass(frozen=True)
class Minkowski(Solid):
    a: Solid
    b: Solid


BOOLEAN_TYPES = (Union, Difference, Intersection)


# ── constructors ───────────────────────────────────────────────────


def _vec3(v) -> Vec3:
    if len(v) == 2:
        return float(v[0]), float(v[1]), 0.0
    return float(v[0]), float(v[1]), float(v[2])


def translate(offset, child: Solid) -> Translate:
    """Translate by a 2- or 3-component offset."""
    return Translate(_vec3(offset), child)


def rotate(angles, child: Solid) -> Rotate:
    return Rotate(_vec3(angles), child)


def extrude(height: float, profile: Solid) -> Extrude:
    return Extrude(float(height), profile)


def minkowski(a: Solid, b: Solid) -> Minkowski:
    return Minkowski(a, b)


def union(*children: Solid, label: str = "") -> Union:
    if not children:
        raise ValueError("union() needs at least one child")
    return Union(tuple(children), label)


def difference(base: Solid, *cuts: Solid, label: str = "") -> Difference:
    return Difference((base,) + tuple(cuts), label)


def intersection(*children: Solid, label: str = "") -> Intersection:
    if len(children) < 2:
        raise ValueError("intersection() needs at least two children")
    return Intersection(tuple(children), label)


# ── traversal ──────────────────────────────────────────────────────


def children_of(node: Solid) -> tuple[Solid, ...]:
    """Direct operands of *node* in evaluation order."""
    if isinstance(node, BOOLEAN_TYPES):
        return node.children
    if isinstance(node, (Translate, Rotate, Extrude)):
        return (node.child,)
    if isinstance(node, Minkowski):
        return (node.a, node.b)
    return ()


def iter_nodes(node: Solid) -> Iterator[Solid]:
    """Pre-order walk over every node of the tree."""
    yield node
    for child in children_of(node):
        yield from iter_nodes(child)


def iter_placed(node: Solid, offset: Vec3 = (0.0, 0.0, 0.0)) -> Iterator[tuple[Solid, Vec3]]:
    """Yield ``(node, offset)`` with the translation accumulated from the root.

    Subtrees below a ``Rotate`` are not descended: their placement is no
    longer a pure offset.
    """
    yield node, offset
    if isinstance(node, Rotate):
        return
    if isinstance(node, Translate):
        ox, oy, oz = offset
        dx, dy, dz = node.offset
        yield from iter_placed(node.child, (ox + dx, oy + dy, oz + dz))
        return
    for child in children_of(node):
        yield from iter_placed(child, offset)
