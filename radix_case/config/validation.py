"""Parameter validation — reject inconsistent tables before any Solid is built.

``validate_parameters`` returns every problem it finds (empty = valid);
``require_valid`` raises them together as one ``ConfigurationError``.
Containment and overlap checks run on 2-D shell-frame footprints with
Shapely.
"""

from __future__ import annotations

import math
from dataclasses import fields

from shapely import affinity
from shapely.geometry import Polygon as ShapelyPolygon

from radix_case.geometry import (
    circle, contains, inradius, overlaps, rect, rotated_rect, rounded_rect,
)

from .parameters import ConfigurationError, ParameterTable, Tessellation

# Angles and positions that may legitimately be zero or negative.
_SIGNED = {"button_angle"}
_NON_NEGATIVE = {"display_tilt", "display_offset"}

# Below this a mating circle shows visible facets against its partner.
MIN_MATING_SEGMENTS = 32


def validate_parameters(t: ParameterTable) -> list[str]:
    """Validate a ParameterTable. Returns error messages (empty = valid)."""
    errors: list[str] = []

    # ── Primary measurements ──
    for f in fields(ParameterTable):
        if f.name == "tessellation" or f.name in _SIGNED:
            continue
        value = getattr(t, f.name)
        if not math.isfinite(value):
            errors.append(f"{f.name} = {value} is not a finite number")
        elif f.name in _NON_NEGATIVE:
            if value < 0:
                errors.append(f"{f.name} = {value} must not be negative")
        elif value <= 0:
            errors.append(f"{f.name} = {value} must be positive")
    for f in fields(Tessellation):
        n = getattr(t.tessellation, f.name)
        if n < 3:
            errors.append(f"tessellation.{f.name} = {n}: need at least 3 segments")
    if errors:
        # Derived checks would only repeat these in a less direct form.
        return errors

    _check_stack(t, errors)
    _check_holes(t, errors)
    _check_port(t, errors)
    _check_top_shell(t, errors)
    _check_display(t, errors)
    _check_logo(t, errors)
    return errors


def require_valid(t: ParameterTable) -> ParameterTable:
    """Return *t* unchanged, or raise ConfigurationError listing every problem."""
    errors = validate_parameters(t)
    if errors:
        raise ConfigurationError(errors)
    return t


def tessellation_warnings(t: ParameterTable) -> list[str]:
    """Non-fatal quality concerns about segment counts on mating features."""
    warnings: list[str] = []
    for name in ("hole", "counterbore", "standoff"):
        n = getattr(t.tessellation, name)
        if n < MIN_MATING_SEGMENTS:
            warnings.append(
                f"tessellation.{name} = {n} is coarse for a mating feature "
                f"(recommend ≥{MIN_MATING_SEGMENTS}); expect slivers between parts"
            )
    return warnings


# ── Individual checks ──────────────────────────────────────────────


def _check_stack(t: ParameterTable, errors: list[str]) -> None:
    if t.board_height > t.case_height:
        errors.append(
            f"Cavity ({t.board_height}mm) is longer than the case interior "
            f"({t.case_height}mm)"
        )
    if t.floor_thickness <= 0:
        errors.append(
            f"Floor thickness {t.floor_thickness:.2f}mm: standoff_depth + "
            f"board_thickness ({t.standoff_depth + t.board_thickness:.2f}mm) must "
            f"stay below case_depth ({t.case_depth}mm)"
        )
    if t.post_height <= 0:
        errors.append(
            f"Standoff post height {t.post_height:.2f}mm: standoff_clearance must "
            f"be smaller than standoff_depth"
        )
    if t.fillet_radius > t.border:
        errors.append(
            f"fillet_radius ({t.fillet_radius}mm) exceeds the border ({t.border}mm); "
            f"the rounding would cut into the cavity wall"
        )
    if 2 * t.fillet_radius >= min(t.case_depth, t.rim_depth):
        errors.append(
            f"fillet_radius ({t.fillet_radius}mm) is too large for a "
            f"{min(t.case_depth, t.rim_depth)}mm deep shell"
        )
    if t.counterbore_diameter <= t.hole_diameter:
        errors.append("counterbore_diameter must be larger than hole_diameter")
    if t.standoff_diameter <= t.counterbore_diameter:
        errors.append("standoff_diameter must be larger than counterbore_diameter")
    if t.hole_depth >= t.floor_thickness + t.post_height:
        errors.append(
            f"Counterbore depth {t.hole_depth}mm breaks through the standoff "
            f"(floor + post = {t.floor_thickness + t.post_height:.2f}mm)"
        )


def _check_holes(t: ParameterTable, errors: list[str]) -> None:
    if t.hole_margin <= 0:
        errors.append(
            f"Mounting holes overlap the board edge (margin {t.hole_margin:.2f}mm)"
        )
    board = rect(0, 0, t.board_width, t.board_height)
    seen: set[tuple[float, float]] = set()
    for i, (x, y) in enumerate(t.hole_locations):
        key = (round(x, 6), round(y, 6))
        if key in seen:
            errors.append(f"Mounting hole {i} at ({x:.2f}, {y:.2f}) duplicates another hole")
        seen.add(key)
        pad = t.standoff_diameter / 2
        if not contains(board, rect(x - pad, y - pad, x + pad, y + pad)):
            errors.append(
                f"Standoff {i} at ({x:.2f}, {y:.2f}) extends outside the board"
            )
    if t.standoff_diameter >= min(t.board_width, t.board_height) - 2 * t.hole_offset:
        errors.append("Standoffs on opposite corners overlap")


def _check_port(t: ParameterTable, errors: list[str]) -> None:
    x0, x1 = t.port_span
    if x0 < 0 or x1 > t.board_width:
        errors.append(
            f"Port span [{x0:.2f}, {x1:.2f}] leaves the cavity width "
            f"[0, {t.board_width}]"
        )
    half = t.port_height / 2
    if t.case_depth - half <= t.floor_thickness:
        errors.append("Port cutout reaches through the bottom shell floor")
    if half >= t.rim_depth - t.deck_thickness:
        errors.append("Port cutout reaches the top shell deck")


def _inner_outline(t: ParameterTable):
    return affinity.translate(
        rounded_rect(t.inner_width, t.inner_height, t.inner_radius), t.border, t.border
    )


def _check_top_shell(t: ParameterTable, errors: list[str]) -> None:
    b = t.border
    if t.deck_thickness >= t.rim_depth:
        errors.append("deck_thickness must be smaller than rim_depth")
    if t.key_spacing >= t.rim_depth - t.deck_thickness:
        errors.append("key_spacing leaves no room for the key-surround strips")

    inner = _inner_outline(t)
    kx0, ky0, kx1, ky1 = t.key_footprint
    if kx1 <= kx0 or ky1 <= ky0:
        errors.append("Key paddings leave no key footprint")
        return
    sw = t.key_strip_width
    keys = rect(b + kx0 - sw, b + ky0 - sw, b + kx1 + sw, b + ky1 + sw)
    if not contains(inner, keys):
        errors.append("Key-surround strips extend outside the case interior")

    cx0, cy0, cx1, cy1 = t.cable_window
    cable = rect(b + cx0, b + cy0, b + cx1, b + cy1)
    rotary = circle(b + t.rotary_x, b + t.rotary_y, t.rotary_diameter / 2)
    slot = rotated_rect(
        b + t.button_x, b + t.button_y, t.button_width, t.button_length, t.button_angle
    )
    mx, my = t.display_mount
    display = rect(mx, my, mx + t.display_width, my + t.display_frame_depth)
    cutouts = {"cable window": cable, "rotary control": rotary, "button slot": slot}
    for name, shape in cutouts.items():
        if not contains(inner, shape):
            errors.append(f"The {name} extends outside the case interior")
        if overlaps(shape, keys):
            errors.append(f"The {name} overlaps the key surround")
    if overlaps(display, keys):
        errors.append("The display frame overlaps the key surround")
    for name in ("rotary control", "button slot"):
        if overlaps(cutouts[name], display):
            errors.append(f"The {name} sits under the display frame")
    names = list(cutouts)
    for i, a in enumerate(names):
        for other in names[i + 1:]:
            if overlaps(cutouts[a], cutouts[other]):
                errors.append(f"The {a} overlaps the {other}")

    if t.button_width <= 2 * t.button_clearance or t.button_length <= 2 * t.button_clearance:
        errors.append("button_clearance leaves no button cap stem")


def _check_display(t: ParameterTable, errors: list[str]) -> None:
    if t.display_tilt >= 90:
        errors.append(f"display_tilt {t.display_tilt}° must be below 90°")
        return
    if t.display_x < 0:
        errors.append(
            f"Display ({t.display_width}mm) is wider than the cavity ({t.board_width}mm)"
        )
    if t.display_offset + t.display_frame_depth > t.case_height:
        errors.append(
            f"Tilted display frame ends at {t.display_offset + t.display_frame_depth:.2f}mm, "
            f"beyond the case interior ({t.case_height}mm)"
        )

    # Footprint in the display's own frame.
    w, h = t.display_width, t.display_height
    plate = rect(0, 0, w, h)
    r = t.display_hole_diameter / 2
    dx, dy = t.display_hole_spacing_x / 2, t.display_hole_spacing_y / 2
    holes = [circle(w / 2 + sx * dx, h / 2 + sy * dy, r) for sx in (1, -1) for sy in (1, -1)]
    window = rect(
        (w - t.display_window_width) / 2, (h - t.display_window_height) / 2,
        (w + t.display_window_width) / 2, (h + t.display_window_height) / 2,
    )
    c0 = t.display_connector_center - t.display_connector_width / 2
    slot = rect(c0, 0, c0 + t.display_connector_width, t.display_connector_depth)

    if not all(contains(plate, hole) for hole in holes):
        errors.append("Display mounting holes fall outside the display board")
    if not contains(plate, window):
        errors.append("Display window is larger than the display board")
    if not contains(plate, slot):
        errors.append("Display connector slot falls outside the display board")
    for shape, name in ((window, "window"), (slot, "connector slot")):
        if any(overlaps(shape, hole) for hole in holes):
            errors.append(f"Display {name} cuts into a mounting hole")
    if overlaps(window, slot):
        errors.append("Display window overlaps the connector slot")


def _check_logo(t: ParameterTable, errors: list[str]) -> None:
    from radix_case.parts.logo import logo_outline

    if t.logo_depth >= t.floor_thickness:
        errors.append(
            f"Logo indent ({t.logo_depth}mm) would cut through the "
            f"{t.floor_thickness:.2f}mm floor"
        )
    outer, inner = logo_outline(t.logo_size)
    if t.logo_rounding >= inradius(inner):
        errors.append("logo_rounding closes the logo's inner counter")

    cx, cy = t.logo_center
    glyph = affinity.translate(ShapelyPolygon(outer).buffer(t.logo_rounding), cx, cy)
    face = affinity.translate(
        rect(0, 0, t.outer_width - 2 * t.fillet_radius, t.outer_height - 2 * t.fillet_radius),
        t.fillet_radius, t.fillet_radius,
    )
    if not contains(face, glyph):
        errors.append("Logo does not fit on the flat part of the bottom face")
