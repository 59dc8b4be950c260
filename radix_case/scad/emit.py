"""
Solid tree → OpenSCAD source.

The emitter is a straight recursive walk: every node becomes exactly one
OpenSCAD statement or block, so the text mirrors the tree.  Labelled
booleans are preceded by a ``// label`` comment and their line span is
recorded, which lets the compiler wrapper translate an OpenSCAD error
line back into the operation that caused it.
"""

from __future__ import annotations

from dataclasses import dataclass

from radix_case.csg import (
    Box, Circle, Cylinder, Difference, Extrude, HalfSpace, Intersection,
    Minkowski, Polygon, Rect, Rotate, Solid, Sphere, Translate, Union,
)

# Edge length of the cube standing in for a HalfSpace.  Far larger than
# any enclosure part.
HALF_SPACE_EXTENT = 1000.0

_INDENT = "  "


@dataclass(frozen=True)
class ScadSource:
    """Rendered OpenSCAD text plus the line span of each labelled boolean."""

    text: str
    labels: tuple[tuple[int, int, str], ...]
    """``(first_line, last_line, label)``, 1-based and inclusive."""

    def operation_at(self, line: int) -> str:
        """Label of the innermost labelled boolean covering *line* ("" if none)."""
        best = ""
        best_span = None
        for first, last, label in self.labels:
            if first <= line <= last and (best_span is None or last - first < best_span):
                best, best_span = label, last - first
        return best


def _num(v: float) -> str:
    s = f"{v:.3f}"
    return "0.000" if s == "-0.000" else s


def _vec(v) -> str:
    return "[" + ", ".join(_num(c) for c in v) + "]"


class _Writer:
    def __init__(self) -> None:
        self.lines: list[str] = []
        self.labels: list[tuple[int, int, str]] = []

    def line(self, depth: int, text: str) -> None:
        self.lines.append(_INDENT * depth + text)

    def block(self, depth: int, head: str, children: tuple[Solid, ...]) -> None:
        self.line(depth, head + " {")
        for child in children:
            self.node(child, depth + 1)
        self.line(depth, "}")

    def node(self, n: Solid, depth: int) -> None:
        if isinstance(n, Rect):
            self.line(depth, f"square({_vec((n.width, n.height))});")
        elif isinstance(n, Circle):
            self.line(depth, f"circle(r = {_num(n.radius)}, $fn = {n.segments});")
        elif isinstance(n, Polygon):
            pts = ", ".join(_vec(p) for p in n.points)
            if n.paths:
                paths = ", ".join("[" + ", ".join(str(i) for i in p) + "]" for p in n.paths)
                self.line(depth, f"polygon(points = [{pts}], paths = [{paths}]);")
            else:
                self.line(depth, f"polygon(points = [{pts}]);")
        elif isinstance(n, Box):
            self.line(depth, f"cube({_vec((n.width, n.depth, n.height))});")
        elif isinstance(n, Cylinder):
            self.line(depth, f"cylinder(h = {_num(n.height)}, r = {_num(n.radius)}, "
                             f"$fn = {n.segments});")
        elif isinstance(n, Sphere):
            self.line(depth, f"sphere(r = {_num(n.radius)}, $fn = {n.segments});")
        elif isinstance(n, HalfSpace):
            e = HALF_SPACE_EXTENT
            self.line(depth, f"translate({_vec((-e / 2, -e / 2, n.z_min))}) "
                             f"cube({_vec((e, e, e / 2))});")
        elif isinstance(n, Extrude):
            self.block(depth, f"linear_extrude(height = {_num(n.height)})", (n.child,))
        elif isinstance(n, Translate):
            self.block(depth, f"translate({_vec(n.offset)})", (n.child,))
        elif isinstance(n, Rotate):
            self.block(depth, f"rotate({_vec(n.angles)})", (n.child,))
        elif isinstance(n, Minkowski):
            self.block(depth, "minkowski()", (n.a, n.b))
        elif isinstance(n, (Union, Difference, Intersection)):
            op = {Union: "union", Difference: "difference", Intersection: "intersection"}[type(n)]
            if n.label:
                self.line(depth, f"// {n.label}")
            first = len(self.lines) + 1
            self.block(depth, f"{op}()", n.children)
            if n.label:
                self.labels.append((first, len(self.lines), n.label))
        else:
            raise TypeError(f"Cannot emit {type(n).__name__}")


def render_scad(solid: Solid, title: str = "") -> ScadSource:
    """Render *solid* as a complete OpenSCAD file."""
    w = _Writer()
    if title:
        w.line(0, f"// {title}")
    w.line(0, "// Generated by radix-case")
    w.line(0, "")
    w.node(solid, 0)
    return ScadSource("\n".join(w.lines) + "\n", tuple(w.labels))


def to_scad(solid: Solid) -> str:
    return render_scad(solid).text
