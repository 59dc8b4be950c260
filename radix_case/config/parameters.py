"""
Parameter table — single source of truth for every enclosure dimension.

Loads ``delta_radix.json`` (or a user-supplied file with the same
sections) into a frozen ``ParameterTable``.  Primary measurements are
dataclass fields; every secondary measurement is a read-only property
computed here and nowhere else, so two builders that need the same
coordinate always read the same name.

Coordinate frames:
  board frame   origin at the PCB cavity's bottom-left corner
  shell frame   origin at the outer footprint's bottom-left corner;
                shell = board + ``border`` on both axes
"""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, fields
from functools import lru_cache
from pathlib import Path


_CONFIG_PATH = Path(__file__).resolve().parent / "delta_radix.json"

# JSON sections holding flat ParameterTable fields.
_SECTIONS = ("board", "port", "enclosure", "display", "keys", "controls", "logo")


class ConfigurationError(Exception):
    """Raised when the parameter table cannot produce consistent parts."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = list(messages)
        super().__init__(
            "Invalid enclosure configuration:\n  " + "\n  ".join(self.messages)
        )


# ── Value types ────────────────────────────────────────────────────


@dataclass(frozen=True)
class HoleSpec:
    """One corner mounting hole, in shell-frame millimetres."""

    position: tuple[float, float]
    diameter: float
    depth: float
    """Counterbore depth measured from the bottom shell's outer face."""


@dataclass(frozen=True)
class Tessellation:
    """Segment count per curved feature.

    Mating features (holes, counterbores, standoffs) want more segments
    than purely decorative curves: coarse circles leave slivers where
    two parts meet.
    """

    hole: int
    counterbore: int
    standoff: int
    outline: int
    fillet: int
    rotary: int
    display_hole: int
    logo: int


# ── Parameter table ────────────────────────────────────────────────


@dataclass(frozen=True)
class ParameterTable:
    """Primary measurements (mm / degrees) plus derived properties."""

    # board
    board_width: float
    board_height: float
    board_thickness: float
    hole_offset: float
    """Distance from each board edge to the nearest mounting-hole centre."""
    hole_diameter: float
    hole_depth: float
    counterbore_diameter: float
    standoff_depth: float
    """Elevation of the board's underside above the shell floor."""
    standoff_clearance: float
    """Thickness of the air layer directly under the board."""
    standoff_diameter: float

    # port (front wall, split across the mating plane)
    port_center: float
    port_width: float
    port_height: float

    # enclosure
    case_height: float
    """Inner footprint length; the board occupies the lower part of it."""
    case_depth: float
    """Total depth of the bottom shell."""
    rim_depth: float
    """Total depth of the top shell."""
    border: float
    fillet_radius: float
    """Outline rounding and edge fillet radius, shared by both shells."""
    deck_thickness: float

    # display module
    display_width: float
    display_height: float
    display_hole_spacing_x: float
    display_hole_spacing_y: float
    display_hole_diameter: float
    display_window_width: float
    display_window_height: float
    display_connector_center: float
    display_connector_width: float
    display_connector_depth: float
    display_tilt: float
    display_min_height: float
    display_offset: float
    """Board-frame y of the display frame's near edge."""

    # key matrix
    key_padding_left: float
    key_padding_right: float
    key_padding_bottom: float
    key_padding_top: float
    key_spacing: float
    """Height above the mating plane where the key-surround strips start."""
    key_strip_width: float

    # controls
    rotary_x: float
    rotary_y: float
    rotary_diameter: float
    button_x: float
    button_y: float
    button_width: float
    button_length: float
    button_angle: float
    button_clearance: float
    button_cap_height: float
    button_flange: float
    button_flange_thickness: float

    # logo
    logo_size: float
    logo_depth: float
    logo_rounding: float

    tessellation: Tessellation

    # ── outer / inner footprint ────────────────────────────────────

    @property
    def outer_width(self) -> float:
        return self.board_width + 2 * self.border

    @property
    def outer_height(self) -> float:
        return self.case_height + 2 * self.border

    @property
    def inner_width(self) -> float:
        return self.board_width

    @property
    def inner_height(self) -> float:
        return self.case_height

    @property
    def inner_radius(self) -> float:
        """Rounding left on the inner outline after insetting by ``border``."""
        return max(self.fillet_radius - self.border, 0.0)

    # ── vertical stack ─────────────────────────────────────────────

    @property
    def floor_thickness(self) -> float:
        """Material left beneath the cavity in the bottom shell."""
        return self.case_depth - self.standoff_depth - self.board_thickness

    @property
    def post_height(self) -> float:
        return self.standoff_depth - self.standoff_clearance

    # ── mounting holes ─────────────────────────────────────────────

    @property
    def hole_margin(self) -> float:
        """Material between a mounting hole and the nearest board edge."""
        return self.hole_offset - self.hole_diameter / 2

    @property
    def hole_locations(self) -> tuple[tuple[float, float], ...]:
        """Canonical board-frame hole centres, bottom row first."""
        xs = (self.hole_offset, self.board_width - self.hole_offset)
        ys = (self.hole_offset, self.board_height - self.hole_offset)
        return tuple((x, y) for y in ys for x in xs)

    @property
    def mounting_holes(self) -> tuple[HoleSpec, ...]:
        """The hole list both shells consume, in shell-frame coordinates."""
        return tuple(
            HoleSpec(
                position=(self.border + x, self.border + y),
                diameter=self.hole_diameter,
                depth=self.hole_depth,
            )
            for x, y in self.hole_locations
        )

    # ── port ───────────────────────────────────────────────────────

    @property
    def port_span(self) -> tuple[float, float]:
        """Board-frame x range of the port opening on the front wall."""
        half = self.port_width / 2
        return self.port_center - half, self.port_center + half

    # ── top-shell features (board frame) ───────────────────────────

    @property
    def key_footprint(self) -> tuple[float, float, float, float]:
        """(x0, y0, x1, y1) of the key-switch window."""
        return (
            self.key_padding_left,
            self.key_padding_bottom,
            self.board_width - self.key_padding_right,
            self.board_height - self.key_padding_top,
        )

    @property
    def display_x(self) -> float:
        """Board-frame x of the display frame; the module is centred."""
        return (self.board_width - self.display_width) / 2

    @property
    def display_frame_depth(self) -> float:
        """Footprint length of the tilted, floor-clipped display frame."""
        t = math.radians(self.display_tilt)
        return self.display_height / math.cos(t) + self.display_min_height * math.tan(t)

    @property
    def top_shell_height(self) -> float:
        """Height of the top shell's highest point, the display frame's back edge."""
        t = math.radians(self.display_tilt)
        return self.rim_depth + self.display_min_height + self.display_height * math.sin(t)

    @property
    def display_mount(self) -> tuple[float, float]:
        """Shell-frame position of the display frame's near-left corner."""
        return self.border + self.display_x, self.border + self.display_offset

    @property
    def cable_window(self) -> tuple[float, float, float, float]:
        """(x0, y0, x1, y1) of the deck opening under the connector slot.

        The slot runs ``display_connector_depth`` along the tilted plate;
        its far end lands on the deck ``depth / cos(tilt)`` further back,
        shifted by the same floor offset as the rest of the frame.
        """
        t = math.radians(self.display_tilt)
        depth = self.display_connector_depth / math.cos(t) + self.display_min_height * math.tan(t)
        x0 = self.display_x + self.display_connector_center - self.display_connector_width / 2
        y0 = self.display_offset
        return x0, y0, x0 + self.display_connector_width, y0 + depth

    @property
    def button_slot_size(self) -> tuple[float, float]:
        return self.button_width, self.button_length

    # ── bottom face ────────────────────────────────────────────────

    @property
    def logo_center(self) -> tuple[float, float]:
        return self.outer_width / 2, self.outer_height / 2


# ── Loading ────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def _load_default() -> dict:
    return json.loads(_CONFIG_PATH.read_text(encoding="utf-8"))


def load_parameters(
    path: str | Path | None = None,
    overrides: dict | None = None,
) -> ParameterTable:
    """Load a parameter table from *path* (default: the bundled config).

    *overrides* maps field names to values; tessellation counts are
    addressed as ``"tessellation.<feature>"``.
    """
    if path is None:
        raw = _load_default()
    else:
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError([f"Cannot read {path}: {e}"]) from e
    return parameters_from_dict(raw, overrides)


def parameters_from_dict(raw: dict, overrides: dict | None = None) -> ParameterTable:
    """Build a ParameterTable from a sectioned config dict."""
    table_names = [f.name for f in fields(ParameterTable) if f.name != "tessellation"]
    tess_names = [f.name for f in fields(Tessellation)]
    errors: list[str] = []

    if not isinstance(raw, dict):
        raise ConfigurationError(
            [f"Config must be a JSON object of sections, not {type(raw).__name__}"]
        )
    for section in (*_SECTIONS, "tessellation"):
        if not isinstance(raw.get(section, {}), dict):
            errors.append(
                f"Section '{section}' must be a JSON object, not {type(raw[section]).__name__}"
            )
    if errors:
        raise ConfigurationError(errors)

    values: dict = {}
    for section in _SECTIONS:
        for key, value in raw.get(section, {}).items():
            if key not in table_names:
                errors.append(f"Unknown measurement '{section}.{key}'")
            values[key] = value
    tess: dict = {}
    for key, value in raw.get("tessellation", {}).items():
        if key not in tess_names:
            errors.append(f"Unknown tessellation feature '{key}'")
        tess[key] = value

    for key, value in (overrides or {}).items():
        if key.startswith("tessellation."):
            feature = key.split(".", 1)[1]
            if feature not in tess_names:
                errors.append(f"Unknown tessellation feature '{feature}'")
            tess[feature] = value
        elif key in table_names:
            values[key] = value
        else:
            errors.append(f"Unknown measurement '{key}'")

    errors += [f"Missing measurement '{n}'" for n in table_names if n not in values]
    errors += [f"Missing tessellation feature '{n}'" for n in tess_names if n not in tess]
    if errors:
        raise ConfigurationError(errors)

    try:
        tessellation = Tessellation(**{n: int(tess[n]) for n in tess_names})
        measurements = {n: float(values[n]) for n in table_names}
    except (TypeError, ValueError) as e:
        raise ConfigurationError([f"Non-numeric value: {e}"]) from e

    return ParameterTable(tessellation=tessellation, **measurements)


def parameters_to_dict(table: ParameterTable) -> dict:
    """Serialize primary and derived measurements to a JSON-safe dict."""
    return {
        "primary": asdict(table),
        "derived": {
            "outer_width": table.outer_width,
            "outer_height": table.outer_height,
            "inner_radius": table.inner_radius,
            "floor_thickness": table.floor_thickness,
            "post_height": table.post_height,
            "hole_margin": table.hole_margin,
            "mounting_holes": [
                {"position": list(h.position), "diameter": h.diameter, "depth": h.depth}
                for h in table.mounting_holes
            ],
            "port_span": list(table.port_span),
            "key_footprint": list(table.key_footprint),
            "display_mount": list(table.display_mount),
            "display_frame_depth": table.display_frame_depth,
            "top_shell_height": table.top_shell_height,
            "cable_window": list(table.cable_window),
            "logo_center": list(table.logo_center),
        },
    }
