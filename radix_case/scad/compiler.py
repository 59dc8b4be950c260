"""
OpenSCAD compiler wrapper — writes part sources, runs the openscad CLI for
syntax checking and STL rendering, and turns its diagnostics into
``GeometryError``.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
import subprocess
import sys
from pathlib import Path

from radix_case.csg import Solid
from radix_case.geometry import degenerate_profiles

from .emit import ScadSource, render_scad

log = logging.getLogger(__name__)

# OpenSCAD reports the offending source line as "..., line 42".
_LINE_RE = re.compile(r"line (\d+)")
# "WARNING: Object may not be a valid 2-manifold and may need repair!"
_FAILURE_MARKERS = ("ERROR:", "2-manifold", "self-intersect")

_CHECK_TIMEOUT_S = 30
_RENDER_TIMEOUT_S = 600

# Install locations probed when the binary is not on PATH.
_KNOWN_LOCATIONS = (
    r"C:\Program Files\OpenSCAD\openscad.exe",
    r"C:\Program Files (x86)\OpenSCAD\openscad.exe",
    "/Applications/OpenSCAD.app/Contents/MacOS/OpenSCAD",
)


class OpenScadNotFound(RuntimeError):
    """The openscad binary is not installed or not on PATH."""


class GeometryError(Exception):
    """A part whose geometry cannot be evaluated into a watertight mesh."""

    def __init__(self, part: str, operation: str, detail: str) -> None:
        self.part = part
        self.operation = operation
        self.detail = detail
        where = f" in '{operation}'" if operation else ""
        super().__init__(f"{part}: geometry error{where}: {detail}")


def _find_openscad() -> str | None:
    """Locate the openscad binary; ``$OPENSCAD`` wins over PATH."""
    override = os.environ.get("OPENSCAD")
    if override and Path(override).exists():
        return override
    found = shutil.which("openscad")
    if found:
        return found
    return next((c for c in _KNOWN_LOCATIONS if Path(c).exists()), None)


def _null_device() -> str:
    return "NUL" if sys.platform == "win32" else "/dev/null"


def _failed(stderr: str) -> bool:
    return any(marker in stderr for marker in _FAILURE_MARKERS)


def _run_openscad(output: str, scad_path: Path, timeout: int) -> tuple[bool, str]:
    """Run openscad once, writing *output*.  Returns (ok, stderr-or-reason)."""
    exe = _find_openscad()
    if not exe:
        return False, "OpenSCAD not found on PATH."
    try:
        result = subprocess.run(
            [exe, "-o", output, str(scad_path)],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return False, f"OpenSCAD timed out ({timeout}s)."
    stderr = result.stderr.strip()
    if result.returncode != 0:
        return False, stderr or f"OpenSCAD exited with code {result.returncode}"
    if _failed(stderr):
        return False, stderr
    return True, stderr or "OK"


def check_scad(scad_path: Path) -> tuple[bool, str]:
    """Parse and evaluate *scad_path* without keeping any output.

    Returns (ok, message).
    """
    return _run_openscad(_null_device(), scad_path, _CHECK_TIMEOUT_S)


def compile_scad(scad_path: Path, stl_path: Path | None = None) -> tuple[bool, str, Path | None]:
    """
    Compile an OpenSCAD file to STL.

    Returns (ok, message, stl_path_or_none).  A render that finishes but
    reports a non-manifold result counts as a failure.
    """
    if stl_path is None:
        stl_path = scad_path.with_suffix(".stl")
    ok, msg = _run_openscad(str(stl_path), scad_path, _RENDER_TIMEOUT_S)
    if ok and not stl_path.exists():
        return False, "OpenSCAD exited cleanly but wrote no STL.", None
    return ok, msg, stl_path if ok else None


def failing_operation(source: ScadSource, message: str) -> str:
    """Map the first line number in an OpenSCAD *message* to a labelled operation."""
    for match in _LINE_RE.finditer(message):
        label = source.operation_at(int(match.group(1)))
        if label:
            return label
    return ""


def _first_failure(message: str) -> str:
    for line in message.splitlines():
        if _failed(line):
            return line.strip()
    return message.strip().splitlines()[0] if message.strip() else "unknown failure"


def export_part(
    name: str,
    solid: Solid,
    out_dir: Path,
    *,
    stl: bool = False,
) -> tuple[Path, Path | None]:
    """Write ``<name>.scad`` to *out_dir*, and ``<name>.stl`` when *stl* is set.

    Degenerate 2-D profiles are rejected before anything is written.
    Raises ``GeometryError`` naming the failing operation, or
    ``OpenScadNotFound`` when an STL is requested without openscad.
    """
    source = render_scad(solid, title=name)
    problems = degenerate_profiles(solid, root_label=name)
    if problems:
        operation, detail = problems[0]
        raise GeometryError(name, operation, detail)

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    scad_path = out_dir / f"{name}.scad"
    scad_path.write_text(source.text, encoding="utf-8")
    log.info("Wrote %s (%d lines)", scad_path, source.text.count("\n"))

    if not stl:
        return scad_path, None

    if not _find_openscad():
        raise OpenScadNotFound("OpenSCAD not found on PATH; cannot render STL.")
    # Fail fast on evaluation errors before the (slow) CGAL render.
    ok, msg = check_scad(scad_path)
    if not ok:
        raise GeometryError(name, failing_operation(source, msg), _first_failure(msg))
    ok, msg, stl_path = compile_scad(scad_path)
    if not ok:
        raise GeometryError(name, failing_operation(source, msg), _first_failure(msg))
    print(f"  ✅ {name}.stl")
    log.info("Rendered %s", stl_path)
    return scad_path, stl_path
