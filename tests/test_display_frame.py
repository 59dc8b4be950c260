"""Tests for the tilted display frame."""

from __future__ import annotations

import unittest

import pytest

from radix_case.csg import Circle, HalfSpace, Intersection, Rect, bounds, iter_placed
from radix_case.parts.display_frame import build_display_frame, display_footprint
from tests.calculator_fixture import make_table


class TestFlatFrame(unittest.TestCase):
    """At zero tilt the frame is a plate exactly display_min_height thick."""

    def setUp(self):
        self.t = make_table(display_tilt=0)
        self.b = bounds(build_display_frame(self.t))

    def test_z_extent(self):
        self.assertAlmostEqual(self.b.min[2], 0.0)
        self.assertAlmostEqual(self.b.max[2], self.t.display_min_height)

    def test_xy_extent(self):
        self.assertAlmostEqual(self.b.min[0], 0.0)
        self.assertAlmostEqual(self.b.max[0], self.t.display_width)
        self.assertAlmostEqual(self.b.min[1], 0.0)
        self.assertAlmostEqual(self.b.max[1], self.t.display_height)

    def test_flat_frames_vary_with_min_height(self):
        t = make_table(display_tilt=0, display_min_height=5.0)
        self.assertAlmostEqual(bounds(build_display_frame(t)).max[2], 5.0)


class TestTiltedFrame(unittest.TestCase):

    def setUp(self):
        self.t = make_table()
        self.frame = build_display_frame(self.t)

    def test_clipped_at_floor(self):
        self.assertIsInstance(self.frame, Intersection)
        self.assertEqual(self.frame.label, "display frame clip")
        self.assertIn(HalfSpace(0.0), self.frame.children)
        self.assertAlmostEqual(bounds(self.frame).min[2], 0.0)

    def test_back_edge_rises(self):
        self.assertGreater(bounds(self.frame).max[2], self.t.display_min_height)


def test_footprint_holes_on_spacing():
    t = make_table()
    holes = [(n, off) for n, off in iter_placed(display_footprint(t)) if isinstance(n, Circle)]
    assert len(holes) == 4
    cx, cy = t.display_width / 2, t.display_height / 2
    xs = sorted({round(off[0] - cx, 6) for _, off in holes})
    ys = sorted({round(off[1] - cy, 6) for _, off in holes})
    assert xs == pytest.approx([-t.display_hole_spacing_x / 2, t.display_hole_spacing_x / 2])
    assert ys == pytest.approx([-t.display_hole_spacing_y / 2, t.display_hole_spacing_y / 2])
    for hole, _ in holes:
        assert hole.radius == pytest.approx(t.display_hole_diameter / 2)


def test_footprint_window_centred():
    t = make_table()
    rects = [(n, off) for n, off in iter_placed(display_footprint(t)) if isinstance(n, Rect)]
    window = [(n, off) for n, off in rects if n.width == t.display_window_width]
    assert len(window) == 1
    rect, off = window[0]
    assert off[0] * 2 + rect.width == pytest.approx(t.display_width)
    assert off[1] * 2 + rect.height == pytest.approx(t.display_height)
