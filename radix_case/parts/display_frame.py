"""
Tilted mount for the 4×20 character LCD (HD44780 2004 module).

Local frame: origin at the near-left corner of the display board's
footprint, ``z = 0`` on the plane the frame stands on.  The board
footprint (mounting holes, viewing window, connector slot) is extruded
downwards, tipped back by ``display_tilt`` about the x axis, lifted by
``display_min_height`` and then clipped flat at ``z = 0``.  The near
edge therefore stands ``display_min_height`` tall and the frame rises
towards the back.
"""

from __future__ import annotations

import math

from radix_case.config import ParameterTable
from radix_case.csg import (
    Circle, HalfSpace, Rect, Solid,
    difference, extrude, intersection, rotate, translate,
)

from .features import OVERSHOOT

# Corner hole pattern around the board centre.
_HOLE_SIGNS = ((1, 1), (-1, 1), (1, -1), (-1, -1))


def display_footprint(t: ParameterTable) -> Solid:
    """2-D display board outline minus holes, window and connector slot."""
    w, h = t.display_width, t.display_height
    r = t.display_hole_diameter / 2
    dx, dy = t.display_hole_spacing_x / 2, t.display_hole_spacing_y / 2
    holes = [
        translate((w / 2 + sx * dx, h / 2 + sy * dy),
                  Circle(r, t.tessellation.display_hole))
        for sx, sy in _HOLE_SIGNS
    ]
    ww, wh = t.display_window_width, t.display_window_height
    window = translate(((w - ww) / 2, (h - wh) / 2), Rect(ww, wh))
    cw = t.display_connector_width
    # Open past the near edge so the slot does not leave a skin.
    slot = translate(
        (t.display_connector_center - cw / 2, -OVERSHOOT),
        Rect(cw, t.display_connector_depth + OVERSHOOT),
    )
    return difference(Rect(w, h), *holes, window, slot, label="display footprint")


def build_display_frame(t: ParameterTable) -> Solid:
    tilt = math.radians(t.display_tilt)
    # Enough material that after tilting, every point of the footprint
    # reaches down past z = 0.
    extent = (t.display_min_height + t.display_height * math.sin(tilt)) / math.cos(tilt)
    extent += OVERSHOOT
    slab = translate((0, 0, -extent), extrude(extent, display_footprint(t)))
    tipped = translate((0, 0, t.display_min_height), rotate((t.display_tilt, 0, 0), slab))
    return intersection(tipped, HalfSpace(0.0), label="display frame clip")
