"""PCB cavity — the negative solid the bottom shell subtracts.

Board frame, ``z = 0`` at the top of the shell floor.  The block of air
is interrupted at every mounting-hole location by a standoff post and,
above it, a square pad that the board rests on.  Being subtracted from
the shell, those two leave material behind: the posts hold the board at
``standoff_depth``; the clearance layer between ``post_height`` and
``standoff_depth`` stays solid only under the pads.
"""

from __future__ import annotations

import logging

from radix_case.config import ParameterTable
from radix_case.csg import Box, Cylinder, Solid, difference, translate

from .features import OVERSHOOT

log = logging.getLogger(__name__)


def build_cavity(t: ParameterTable) -> Solid:
    air = Box(
        t.board_width,
        t.board_height,
        t.standoff_depth + t.board_thickness + OVERSHOOT,
    )
    side = t.standoff_diameter
    supports: list[Solid] = []
    for x, y in t.hole_locations:
        # Square pad in the clearance layer, directly under the board.
        supports.append(translate(
            (x - side / 2, y - side / 2, t.post_height),
            Box(side, side, t.standoff_clearance),
        ))
        supports.append(translate(
            (x, y, 0.0),
            Cylinder(t.post_height, side / 2, t.tessellation.standoff),
        ))
    log.debug("Cavity %.2f×%.2fmm with %d standoffs", t.board_width, t.board_height,
              len(t.hole_locations))
    return difference(air, *supports, label="pcb cavity")
