"""
Cap for the angled push button.

Printed flange-down: the flange sits under the deck and keeps the cap
captive, the stem passes through ``button_slot`` with
``button_clearance`` on every side and stands ``button_cap_height``
proud of the deck.  Local origin: flange centre on ``z = 0``.  The cap
is modelled unrotated; it drops into the slot at ``button_angle``.
"""

from __future__ import annotations

from radix_case.config import ParameterTable
from radix_case.csg import Box, Solid, translate, union


def build_button_cap(t: ParameterTable) -> Solid:
    w, l = t.button_slot_size
    f = t.button_flange
    flange_w, flange_l = w + 2 * f, l + 2 * f
    flange = translate(
        (-flange_w / 2, -flange_l / 2, 0.0),
        Box(flange_w, flange_l, t.button_flange_thickness),
    )

    c = t.button_clearance
    stem_w, stem_l = w - 2 * c, l - 2 * c
    stem = translate(
        (-stem_w / 2, -stem_l / 2, t.button_flange_thickness),
        Box(stem_w, stem_l, t.deck_thickness + t.button_cap_height),
    )
    return union(flange, stem, label="button cap")
