"""Cutters shared by both shells.

Each takes its position from ``ParameterTable`` properties so the bottom
and top shell open the same holes and the same port.
"""

from __future__ import annotations

from radix_case.config import HoleSpec, ParameterTable
from radix_case.csg import Box, Cylinder, Rect, Solid, rotate, translate, union

# Cutters extend this far past the faces they open so no boolean leaves
# a coplanar skin.
OVERSHOOT = 0.5


def mounting_hole_cutters(holes: tuple[HoleSpec, ...], depth: float, segments: int) -> Solid:
    """Through-holes at every HoleSpec, spanning a part of *depth*."""
    return union(
        *(
            translate(
                (h.position[0], h.position[1], -OVERSHOOT),
                Cylinder(depth + 2 * OVERSHOOT, h.diameter / 2, segments),
            )
            for h in holes
        ),
        label="mounting holes",
    )


def counterbore_cutters(holes: tuple[HoleSpec, ...], diameter: float, segments: int) -> Solid:
    """Wider, shallow bores from the z = 0 face, ``hole.depth`` deep."""
    return union(
        *(
            translate(
                (h.position[0], h.position[1], -OVERSHOOT),
                Cylinder(h.depth + OVERSHOOT, diameter / 2, segments),
            )
            for h in holes
        ),
        label="counterbores",
    )


def port_cutout(t: ParameterTable, z_min: float, z_max: float) -> Solid:
    """Rectangular opening through the front wall between *z_min* and *z_max*.

    Runs from the outer face (y = 0) into the cavity; never past the
    outer footprint.
    """
    x0, x1 = t.port_span
    return translate(
        (t.border + x0, 0.0, z_min),
        Box(x1 - x0, t.border + OVERSHOOT, z_max - z_min),
    )


def button_slot(t: ParameterTable) -> Solid:
    """2-D slot for the push button, rotated to its actuation direction."""
    w, l = t.button_slot_size
    return translate(
        (t.border + t.button_x, t.border + t.button_y),
        rotate((0, 0, t.button_angle), translate((-w / 2, -l / 2), Rect(w, l))),
    )
