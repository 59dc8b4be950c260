"""
Bottom shell — the tray the PCB is screwed into.

Shell frame, ``z = 0`` on the outer (bottom) face, ``z = case_depth`` on
the mating face.  Every subtraction is a separate, labelled operand of a
single ``difference`` so an evaluation failure can name it.
"""

from __future__ import annotations

import logging

from radix_case.config import ParameterTable
from radix_case.csg import Solid, difference, extrude, translate

from .cavity import build_cavity
from .features import OVERSHOOT, counterbore_cutters, mounting_hole_cutters, port_cutout
from .logo import logo_cutter
from .rounding import round_all_edges_and_corners, rounded_rect

log = logging.getLogger(__name__)


def build_bottom_shell(t: ParameterTable) -> Solid:
    tess = t.tessellation
    body = extrude(
        t.case_depth,
        rounded_rect(t.outer_width, t.outer_height, t.fillet_radius, tess.outline),
    )
    cavity = translate((t.border, t.border, t.floor_thickness), build_cavity(t))
    holes = mounting_hole_cutters(t.mounting_holes, t.case_depth, tess.hole)
    bores = counterbore_cutters(t.mounting_holes, t.counterbore_diameter, tess.counterbore)
    # Lower half of the port opening; the top shell cuts the rest.
    port = port_cutout(t, t.case_depth - t.port_height / 2, t.case_depth + OVERSHOOT)
    logo = logo_cutter(t, OVERSHOOT)
    rounding = round_all_edges_and_corners(
        t.outer_width, t.outer_height, t.fillet_radius, tess.fillet,
    )

    log.info("Bottom shell %.2f×%.2f×%.2fmm, floor %.2fmm",
             t.outer_width, t.outer_height, t.case_depth, t.floor_thickness)
    return difference(body, cavity, holes, bores, port, logo, rounding, label="bottom shell")
