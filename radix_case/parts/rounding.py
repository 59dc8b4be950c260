"""
Rounding primitives for axis-aligned rectangular outlines.

``rounded_rect`` is the one place outline rounding is built; both shells
take their outer silhouette from it so the mating profiles cannot drift
apart.  The fillet cutters round the horizontal edges and corners of one
face of a ``width × height`` rectangle.  Only axis-aligned rectangles
are supported; there is no general polygon fillet.
"""

from __future__ import annotations

from radix_case.csg import (
    Box, Circle, Rect, Solid, Sphere,
    difference, extrude, minkowski, rotate, translate, union,
)


def rounded_rect(width: float, height: float, radius: float, segments: int) -> Solid:
    """2-D rectangle with rounded corners, bottom-left corner on the origin.

    Built as the minkowski sum of the rectangle shrunk by *radius* and a
    disc of *radius*, so the outer extent stays exactly ``width × height``.
    """
    if radius <= 0:
        return Rect(width, height)
    if 2 * radius >= min(width, height):
        raise ValueError(
            f"Rounding radius {radius}mm does not fit a {width}×{height}mm rectangle"
        )
    core = translate((radius, radius), Rect(width - 2 * radius, height - 2 * radius))
    return minkowski(core, Circle(radius, segments))


def edge_fillet(radius: float, length: float, segments: int) -> Solid:
    """Quarter-round cutter lying along +x from the origin.

    Profile: a square of side *radius* minus a quarter disc centred on
    its far corner.  The material removed hugs the x axis at y = z = 0.
    """
    profile = difference(
        Rect(radius, radius),
        translate((radius, radius), Circle(radius, segments)),
    )
    # (u, v, s) -> (s, u, v): profile in the yz plane, extruded along x
    return rotate((90, 0, 90), extrude(length, profile))


def corner_fillet(radius: float, segments: int) -> Solid:
    """Cube of side *radius* minus an octant sphere; removes the origin corner."""
    return difference(
        Box(radius, radius, radius),
        translate((radius, radius, radius), Sphere(radius, segments)),
    )


def round_all_edges_and_corners(
    width: float,
    height: float,
    radius: float,
    segments: int,
) -> Solid:
    """Cutters rounding every edge and corner of the z = 0 face.

    The rectangle spans ``[0, width] × [0, height]``; its vertical corners
    are expected to be rounded with the same *radius* (see
    ``rounded_rect``), which makes each corner cutter meet the edge
    cutters on a sphere.
    """
    if radius <= 0 or 2 * radius >= min(width, height):
        raise ValueError(
            f"Fillet radius {radius}mm does not fit a {width}×{height}mm rectangle"
        )
    r = radius
    edges = (
        (0.0, (r, 0.0), width - 2 * r),          # front
        (90.0, (width, r), height - 2 * r),      # right
        (180.0, (width - r, height), width - 2 * r),  # back
        (270.0, (0.0, height - r), height - 2 * r),   # left
    )
    corners = (
        (0.0, (0.0, 0.0)),
        (90.0, (width, 0.0)),
        (180.0, (width, height)),
        (270.0, (0.0, height)),
    )

    cutters: list[Solid] = []
    for angle, pos, length in edges:
        cutters.append(translate(pos, rotate((0, 0, angle), edge_fillet(r, length, segments))))
    for angle, pos in corners:
        cutters.append(translate(pos, rotate((0, 0, angle), corner_fillet(r, segments))))
    return union(*cutters, label="edge and corner rounding")
