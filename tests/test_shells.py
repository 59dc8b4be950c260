"""Tests for the assembled parts.

Validates:
  - Both shells drill the mounting holes at identical coordinates
  - Top-shell holes run through the display frame standing over them
  - Counterbores and standoffs are coaxial with the holes
  - Outer footprints match the parameter table
  - Port cutout and button slot stay inside the outer footprint
  - Every part builds deterministically
"""

from __future__ import annotations

import unittest

import pytest

from radix_case.csg import Cylinder, Difference, bounds, iter_nodes, iter_placed
from radix_case.parts import PARTS, build_part
from radix_case.parts.bottom_shell import build_bottom_shell
from radix_case.parts.button_cap import build_button_cap
from radix_case.parts.features import OVERSHOOT, button_slot, port_cutout
from radix_case.parts.logo import build_logo_indent
from radix_case.parts.top_shell import build_top_shell
from radix_case.scad import render_scad
from tests.calculator_fixture import make_table


def _cylinder_axes(solid, radius: float) -> set[tuple[float, float]]:
    """xy of every unrotated cylinder of *radius* in *solid*."""
    return {
        (round(off[0], 6), round(off[1], 6))
        for node, off in iter_placed(solid)
        if isinstance(node, Cylinder) and node.radius == pytest.approx(radius)
    }


def _labels(solid) -> set[str]:
    return {getattr(n, "label", "") for n in iter_nodes(solid)} - {""}


class TestMatingFeatures(unittest.TestCase):

    def setUp(self):
        self.t = make_table()
        self.bottom = build_bottom_shell(self.t)
        self.top = build_top_shell(self.t)
        self.holes = {
            (round(h.position[0], 6), round(h.position[1], 6)) for h in self.t.mounting_holes
        }

    def test_holes_coaxial_between_shells(self):
        r = self.t.hole_diameter / 2
        self.assertEqual(_cylinder_axes(self.bottom, r), self.holes)
        self.assertEqual(_cylinder_axes(self.top, r), self.holes)

    def test_counterbores_coaxial(self):
        r = self.t.counterbore_diameter / 2
        self.assertEqual(_cylinder_axes(self.bottom, r), self.holes)

    def test_standoffs_coaxial(self):
        r = self.t.standoff_diameter / 2
        self.assertEqual(_cylinder_axes(self.bottom, r), self.holes)

    def test_holes_follow_overrides(self):
        t = make_table(hole_offset=7.0)
        r = t.hole_diameter / 2
        expected = {(round(h.position[0], 6), round(h.position[1], 6)) for h in t.mounting_holes}
        self.assertEqual(_cylinder_axes(build_bottom_shell(t), r), expected)
        self.assertEqual(_cylinder_axes(build_top_shell(t), r), expected)

    def test_hole_tessellation_shared(self):
        segs = {n.segments for n, _ in iter_placed(self.top)
                if isinstance(n, Cylinder) and n.radius == self.t.hole_diameter / 2}
        self.assertEqual(segs, {self.t.tessellation.hole})

    def test_rear_holes_drill_through_display_frame(self):
        t = self.t
        mx, my = t.display_mount
        under_frame = [
            h for h in t.mounting_holes
            if mx <= h.position[0] <= mx + t.display_width
            and my <= h.position[1] <= my + t.display_frame_depth
        ]
        self.assertEqual(len(under_frame), 2)
        self.assertIsInstance(self.top, Difference)
        assembled, cutters = self.top.children
        self.assertEqual(cutters.label, "mounting holes")
        self.assertIn("display frame clip", _labels(assembled))
        self.assertGreaterEqual(bounds(cutters).max[2], bounds(assembled).max[2])
        self.assertLessEqual(bounds(cutters).min[2], 0.0)


class TestFootprints(unittest.TestCase):

    def setUp(self):
        self.t = make_table()

    def test_bottom_shell_extent(self):
        b = bounds(build_bottom_shell(self.t))
        self.assertEqual(b.min, pytest.approx((0, 0, 0)))
        self.assertEqual(b.max, pytest.approx((self.t.outer_width, self.t.outer_height,
                                               self.t.case_depth)))

    def test_top_shell_carries_display_above_rim(self):
        b = bounds(build_top_shell(self.t))
        self.assertAlmostEqual(b.min[2], 0.0)
        self.assertGreater(b.max[2], self.t.rim_depth)
        self.assertAlmostEqual(b.max[0], self.t.outer_width)

    def test_port_cutout_within_footprint(self):
        for z0, z1 in ((-OVERSHOOT, 3.5), (6.5, 10.5)):
            b = bounds(port_cutout(self.t, z0, z1))
            self.assertGreaterEqual(b.min[0], 0.0)
            self.assertLessEqual(b.max[0], self.t.outer_width)
            self.assertGreaterEqual(b.min[1], 0.0)
            self.assertLessEqual(b.max[1], self.t.outer_height)

    def test_port_cutout_within_footprint_across_range(self):
        for center in (6.0, 50.0, 94.95):
            t = make_table(port_center=center)
            b = bounds(port_cutout(t, 0.0, 1.0))
            self.assertGreaterEqual(b.min[0], t.border)
            self.assertLessEqual(b.max[0], t.border + t.board_width + 1e-9)

    def test_button_slot_within_footprint(self):
        for angle in (0.0, 30.0, 45.0, 90.0):
            t = make_table(button_angle=angle)
            b = bounds(button_slot(t))
            self.assertGreaterEqual(b.min[0], 0.0)
            self.assertGreaterEqual(b.min[1], 0.0)
            self.assertLessEqual(b.max[0], t.outer_width)
            self.assertLessEqual(b.max[1], t.outer_height)

    def test_button_cap_fits_slot(self):
        t = self.t
        b = bounds(build_button_cap(t))
        self.assertAlmostEqual(b.max[0] - b.min[0], t.button_width + 2 * t.button_flange)
        self.assertAlmostEqual(
            b.max[2],
            t.button_flange_thickness + t.deck_thickness + t.button_cap_height,
        )

    def test_logo_indent_depth(self):
        b = bounds(build_logo_indent(self.t))
        self.assertAlmostEqual(b.max[2], self.t.logo_depth)
        self.assertAlmostEqual(b.max[0] - b.min[0], self.t.logo_size + 2 * self.t.logo_rounding,
                               places=3)


class TestStructure(unittest.TestCase):

    def test_bottom_shell_operations_labelled(self):
        labels = _labels(build_bottom_shell(make_table()))
        for expected in ("bottom shell", "pcb cavity", "mounting holes", "counterbores",
                         "edge and corner rounding"):
            self.assertIn(expected, labels)

    def test_top_shell_operations_labelled(self):
        labels = _labels(build_top_shell(make_table()))
        for expected in ("top shell", "rim and deck", "key surround", "deck cutouts",
                         "mounting holes", "display frame clip"):
            self.assertIn(expected, labels)


@pytest.mark.parametrize("name", list(PARTS))
def test_parts_are_deterministic(name):
    t = make_table()
    a = build_part(name, t)
    b = build_part(name, make_table())
    assert a == b
    assert hash(a) == hash(b)
    assert render_scad(a).text == render_scad(b).text


def test_builds_are_fresh_trees():
    t = make_table()
    assert build_part("top-shell", t) is not build_part("top-shell", t)
