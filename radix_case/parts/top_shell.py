"""
Top shell — hollow rim, key-surround deck and the display mount.

Local frame: shell frame in x/y, ``z = 0`` on the mating face and
``z = rim_depth`` on the outer face.  The deck is flush with the outer
face; the key-surround strips hang from it down to ``key_spacing``
above the mating plane.
"""

from __future__ import annotations

import logging

from radix_case.config import ParameterTable
from radix_case.csg import (
    Circle, Rect, Solid,
    difference, extrude, rotate, translate, union,
)

from .display_frame import build_display_frame
from .features import OVERSHOOT, button_slot, mounting_hole_cutters, port_cutout
from .rounding import round_all_edges_and_corners, rounded_rect

log = logging.getLogger(__name__)


def _inner_outline(t: ParameterTable) -> Solid:
    return translate(
        (t.border, t.border),
        rounded_rect(t.inner_width, t.inner_height, t.inner_radius, t.tessellation.outline),
    )


def _rim(t: ParameterTable) -> Solid:
    outer = rounded_rect(t.outer_width, t.outer_height, t.fillet_radius, t.tessellation.outline)
    return extrude(t.rim_depth, difference(outer, _inner_outline(t), label="rim outline"))


def _deck_profile(t: ParameterTable) -> Solid:
    b = t.border
    kx0, ky0, kx1, ky1 = t.key_footprint
    keys = translate((b + kx0, b + ky0), Rect(kx1 - kx0, ky1 - ky0))
    cx0, cy0, cx1, cy1 = t.cable_window
    cable = translate((b + cx0, b + cy0), Rect(cx1 - cx0, cy1 - cy0))
    rotary = translate(
        (b + t.rotary_x, b + t.rotary_y),
        Circle(t.rotary_diameter / 2, t.tessellation.rotary),
    )
    return difference(
        _inner_outline(t), keys, cable, rotary, button_slot(t), label="deck cutouts",
    )


def _key_surround(t: ParameterTable) -> Solid:
    b = t.border
    kx0, ky0, kx1, ky1 = t.key_footprint
    sw = t.key_strip_width
    deck = translate(
        (0, 0, t.rim_depth - t.deck_thickness),
        extrude(t.deck_thickness, _deck_profile(t)),
    )
    strip_h = t.rim_depth - t.key_spacing
    # Left and right strips cover the corners; bottom and top fit between them.
    strips = [
        translate((b + kx0 - sw, b + ky0 - sw, t.key_spacing),
                  extrude(strip_h, Rect(sw, ky1 - ky0 + 2 * sw))),
        translate((b + kx1, b + ky0 - sw, t.key_spacing),
                  extrude(strip_h, Rect(sw, ky1 - ky0 + 2 * sw))),
        translate((b + kx0, b + ky0 - sw, t.key_spacing),
                  extrude(strip_h, Rect(kx1 - kx0, sw))),
        translate((b + kx0, b + ky1, t.key_spacing),
                  extrude(strip_h, Rect(kx1 - kx0, sw))),
    ]
    return union(deck, *strips, label="key surround")


def _outer_face_rounding(t: ParameterTable) -> Solid:
    cutters = round_all_edges_and_corners(
        t.outer_width, t.outer_height, t.fillet_radius, t.tessellation.fillet,
    )
    # Flip about x so the cutters sit on the z = rim_depth face.
    return translate((0, t.outer_height, t.rim_depth), rotate((180, 0, 0), cutters))


def build_top_shell(t: ParameterTable) -> Solid:
    body = difference(
        union(_rim(t), _key_surround(t), label="rim and deck"),
        # Upper half of the port opening, from the mating face.
        port_cutout(t, -OVERSHOOT, t.port_height / 2),
        _outer_face_rounding(t),
        label="top shell body",
    )
    mx, my = t.display_mount
    frame = translate((mx, my, t.rim_depth), build_display_frame(t))
    assembled = union(body, frame, label="top shell with display frame")

    log.info("Top shell %.2f×%.2f×%.2fmm, display tilted %.1f°",
             t.outer_width, t.outer_height, t.rim_depth, t.display_tilt)
    # The frame stands over the rear holes; drill through its full height.
    return difference(
        assembled,
        mounting_hole_cutters(t.mounting_holes, t.top_shell_height, t.tessellation.hole),
        label="top shell",
    )
