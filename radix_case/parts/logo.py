"""Δ logo — a hand-drawn triangle glyph with a triangular counter."""

from __future__ import annotations

from radix_case.config import ParameterTable
from radix_case.csg import Circle, Polygon, Solid, extrude, minkowski, translate

# Unit-size glyph centred on its centroid: outer triangle, then the
# counter as a second path.
_OUTER = ((-0.5, -0.2887), (0.5, -0.2887), (0.0, 0.5774))
_INNER = ((-0.2922, -0.1687), (0.2922, -0.1687), (0.0, 0.3374))


def logo_outline(size: float) -> tuple[list[tuple[float, float]], list[tuple[float, float]]]:
    """Outer and inner glyph paths scaled to *size* mm."""
    outer = [(x * size, y * size) for x, y in _OUTER]
    inner = [(x * size, y * size) for x, y in _INNER]
    return outer, inner


def logo_profile(t: ParameterTable) -> Solid:
    """2-D glyph with corners rounded by ``logo_rounding``."""
    outer, inner = logo_outline(t.logo_size)
    glyph = Polygon(tuple(outer + inner), ((0, 1, 2), (3, 4, 5)))
    if t.logo_rounding <= 0:
        return glyph
    return minkowski(glyph, Circle(t.logo_rounding, t.tessellation.logo))


def build_logo_indent(t: ParameterTable) -> Solid:
    """The indent as a positive solid, ``logo_depth`` tall, centred on the origin."""
    return extrude(t.logo_depth, logo_profile(t))


def logo_cutter(t: ParameterTable, overshoot: float) -> Solid:
    """Indent cutter for the z = 0 face, reaching *overshoot* below it."""
    cx, cy = t.logo_center
    return translate(
        (cx, cy, -overshoot),
        extrude(t.logo_depth + overshoot, logo_profile(t)),
    )
