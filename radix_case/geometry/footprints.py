"""
2-D footprint helpers backed by Shapely.

All coordinates in mm.  Used by parameter validation (containment and
overlap of cutouts inside the shell outline) and by the degenerate
profile pre-check that runs before a tree is handed to OpenSCAD.
"""

from __future__ import annotations

from shapely import affinity
from shapely.geometry import Point, Polygon as ShapelyPolygon, box as shapely_box
from shapely.validation import explain_validity

# Containment tolerance: a cutout touching the outline edge still counts as inside.
_EPS = 1e-6


# ── shape constructors ─────────────────────────────────────────────


def rect(x0: float, y0: float, x1: float, y1: float) -> ShapelyPolygon:
    """Axis-aligned rectangle from two corners."""
    return shapely_box(min(x0, x1), min(y0, y1), max(x0, x1), max(y0, y1))


def circle(cx: float, cy: float, r: float, n: int = 32) -> ShapelyPolygon:
    """Circle approximated with *n* segments."""
    return Point(cx, cy).buffer(r, quad_segs=max(n // 4, 1))


def rotated_rect(
    cx: float, cy: float,
    width: float, length: float,
    angle_deg: float,
) -> ShapelyPolygon:
    """Rectangle centred on *(cx, cy)* rotated CCW by *angle_deg*."""
    r = shapely_box(cx - width / 2, cy - length / 2, cx + width / 2, cy + length / 2)
    return affinity.rotate(r, angle_deg, origin=(cx, cy))


def rounded_rect(width: float, height: float, radius: float) -> ShapelyPolygon:
    """Rounded rectangle with its bottom-left corner on the origin."""
    if radius <= 0:
        return shapely_box(0, 0, width, height)
    core = shapely_box(radius, radius, width - radius, height - radius)
    return core.buffer(radius, quad_segs=16)


# ── predicates ─────────────────────────────────────────────────────


def contains(outer: ShapelyPolygon, inner: ShapelyPolygon) -> bool:
    """True when *inner* lies within *outer* (edges may touch)."""
    return outer.buffer(_EPS).contains(inner)


def overlaps(a: ShapelyPolygon, b: ShapelyPolygon) -> bool:
    """True when *a* and *b* share a non-zero area."""
    return a.intersection(b).area > _EPS


# ── polygon sanity ─────────────────────────────────────────────────


def polygon_problems(
    points: list[tuple[float, float]] | tuple[tuple[float, float], ...],
    paths: tuple[tuple[int, ...], ...] = (),
) -> list[str]:
    """Check a polygon (optionally with hole paths) for OpenSCAD use.

    The first path is the outline, the rest are holes.  Returns error
    strings (empty = usable).
    """
    errors: list[str] = []
    pts = [tuple(p) for p in points]
    if not paths:
        paths = (tuple(range(len(pts))),)

    rings = []
    for i, path in enumerate(paths):
        if len(path) < 3:
            errors.append(f"Path {i} has only {len(path)} vertices — need at least 3.")
            continue
        if any(idx < 0 or idx >= len(pts) for idx in path):
            errors.append(f"Path {i} references a vertex outside the point list.")
            continue
        rings.append([pts[idx] for idx in path])
    if errors or not rings:
        return errors

    poly = ShapelyPolygon(rings[0], rings[1:])
    if poly.area <= _EPS:
        errors.append(f"Polygon area is {poly.area:.6f}mm² — degenerate outline.")
    elif not poly.is_valid:
        errors.append(f"Polygon is invalid: {explain_validity(poly)}.")
    return errors


def inradius(outline: list[tuple[float, float]]) -> float:
    """Distance from the outline's centroid to its nearest edge.

    Exact for regular polygons; used to check how much rounding a
    glyph's counter (inner hole) can absorb.
    """
    poly = ShapelyPolygon(outline)
    c = poly.centroid
    return poly.exterior.distance(c) if poly.contains(c) else 0.0
