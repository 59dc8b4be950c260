"""Tests for the OpenSCAD wrapper.  The openscad binary is never invoked."""

from __future__ import annotations

import subprocess

import pytest

from radix_case.csg import Box, Polygon, Rect, difference, extrude, union
from radix_case.parts import build_part
from radix_case.scad import GeometryError, OpenScadNotFound, compiler, export_part, render_scad
from tests.calculator_fixture import make_table


def _fake_openscad(monkeypatch, stderr: str = "", returncode: int = 0, write_stl: bool = True,
                   render_only: bool = False):
    """Route subprocess.run to a stub that mimics the openscad CLI.

    With *render_only* the stub reports *stderr* and *returncode* only for
    the STL render, so the syntax check passes.
    """
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        rendering = cmd[2].endswith(".stl")
        if render_only and not rendering:
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")
        if rendering and write_stl and returncode == 0:
            with open(cmd[2], "w", encoding="utf-8") as f:
                f.write("solid stub\nendsolid stub\n")
        return subprocess.CompletedProcess(cmd, returncode, stdout="", stderr=stderr)

    monkeypatch.setattr(compiler, "_find_openscad", lambda: "/usr/bin/openscad")
    monkeypatch.setattr(compiler.subprocess, "run", fake_run)
    return calls


def test_export_writes_scad_only(tmp_path):
    solid = build_part("button-cap", make_table())
    scad_path, stl_path = export_part("button-cap", solid, tmp_path)
    assert stl_path is None
    assert scad_path == tmp_path / "button-cap.scad"
    text = scad_path.read_text(encoding="utf-8")
    assert text == render_scad(solid, title="button-cap").text
    assert text.startswith("// button-cap\n")


def test_export_creates_output_dir(tmp_path):
    out = tmp_path / "nested" / "build"
    export_part("logo-indent", build_part("logo-indent", make_table()), out)
    assert (out / "logo-indent.scad").exists()


def test_degenerate_polygon_names_operation(tmp_path):
    flat = Polygon(((0, 0), (5, 0), (10, 0)))
    solid = difference(Box(10, 10, 2), extrude(1, flat), label="logo cut")
    with pytest.raises(GeometryError) as exc:
        export_part("bottom-shell", solid, tmp_path)
    assert exc.value.part == "bottom-shell"
    assert exc.value.operation == "logo cut"
    assert "degenerate" in exc.value.detail
    assert not (tmp_path / "bottom-shell.scad").exists()


def test_zero_area_rect_falls_back_to_part_name(tmp_path):
    with pytest.raises(GeometryError) as exc:
        export_part("display-frame", extrude(2, Rect(0, 5)), tmp_path)
    assert exc.value.operation == "display-frame"


def test_stl_without_openscad(tmp_path, monkeypatch):
    monkeypatch.setattr(compiler, "_find_openscad", lambda: None)
    with pytest.raises(OpenScadNotFound):
        export_part("button-cap", build_part("button-cap", make_table()), tmp_path, stl=True)


def test_stl_success(tmp_path, monkeypatch):
    calls = _fake_openscad(monkeypatch)
    scad_path, stl_path = export_part(
        "button-cap", build_part("button-cap", make_table()), tmp_path, stl=True,
    )
    assert stl_path == tmp_path / "button-cap.stl"
    assert stl_path.exists()
    assert len(calls) == 2
    assert calls[0][:2] == ["/usr/bin/openscad", "-o"]
    assert calls[0][3] == str(scad_path)
    assert calls[1] == ["/usr/bin/openscad", "-o", str(stl_path), str(scad_path)]


def test_non_manifold_maps_line_to_operation(tmp_path, monkeypatch):
    inner = difference(Box(4, 4, 4), Box(1, 1, 1), label="counterbores")
    solid = union(inner, Box(1, 1, 8), label="bottom shell")
    source = render_scad(solid, title="bottom-shell")
    line = source.text.splitlines().index("    cube([1.000, 1.000, 1.000]);") + 1
    _fake_openscad(
        monkeypatch,
        stderr=f"WARNING: Object may not be a valid 2-manifold, in file bottom-shell.scad, line {line}",
        write_stl=True,
    )
    with pytest.raises(GeometryError) as exc:
        export_part("bottom-shell", solid, tmp_path, stl=True)
    assert exc.value.operation == "counterbores"
    assert "2-manifold" in exc.value.detail


def test_cgal_error_without_line(tmp_path, monkeypatch):
    _fake_openscad(monkeypatch, stderr="ERROR: CGAL error in CGAL_Nef_polyhedron3()", returncode=1)
    with pytest.raises(GeometryError) as exc:
        export_part("top-shell", union(Box(1, 1, 1), label="top shell"), tmp_path, stl=True)
    assert exc.value.operation == ""
    assert exc.value.detail.startswith("ERROR: CGAL error")


def test_compile_timeout(tmp_path, monkeypatch):
    def slow_run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs.get("timeout"))

    monkeypatch.setattr(compiler, "_find_openscad", lambda: "/usr/bin/openscad")
    monkeypatch.setattr(compiler.subprocess, "run", slow_run)
    scad = tmp_path / "part.scad"
    scad.write_text("cube(1);", encoding="utf-8")
    ok, msg, path = compiler.compile_scad(scad)
    assert not ok
    assert "timed out" in msg
    assert path is None


def test_check_scad_without_openscad(tmp_path, monkeypatch):
    monkeypatch.setattr(compiler, "_find_openscad", lambda: None)
    ok, msg = compiler.check_scad(tmp_path / "part.scad")
    assert not ok
    assert "not found" in msg


def test_check_scad_ok(tmp_path, monkeypatch):
    _fake_openscad(monkeypatch, write_stl=False)
    ok, msg = compiler.check_scad(tmp_path / "part.scad")
    assert ok
    assert msg == "OK"


def test_compile_rejects_repairable_mesh(tmp_path, monkeypatch):
    _fake_openscad(monkeypatch, stderr="WARNING: Object may not be a valid 2-manifold and may need repair!")
    scad = tmp_path / "part.scad"
    scad.write_text("cube(1);", encoding="utf-8")
    ok, msg, path = compiler.compile_scad(scad)
    assert not ok
    assert "2-manifold" in msg
    assert path is None


def test_render_warning_after_clean_check(tmp_path, monkeypatch):
    calls = _fake_openscad(
        monkeypatch,
        stderr="WARNING: Object may not be a valid 2-manifold and may need repair!",
        render_only=True,
    )
    with pytest.raises(GeometryError) as exc:
        export_part("top-shell", build_part("button-cap", make_table()), tmp_path, stl=True)
    assert len(calls) == 2
    assert exc.value.detail.startswith("WARNING: Object may not be a valid 2-manifold")


def test_check_failure_skips_render(tmp_path, monkeypatch):
    calls = _fake_openscad(monkeypatch, stderr="ERROR: Parser error in file part.scad, line 1", returncode=1)
    with pytest.raises(GeometryError):
        export_part("button-cap", build_part("button-cap", make_table()), tmp_path, stl=True)
    assert len(calls) == 1
    assert not (tmp_path / "button-cap.stl").exists()


def test_openscad_env_var_wins(tmp_path, monkeypatch):
    exe = tmp_path / "openscad-nightly"
    exe.write_text("", encoding="utf-8")
    monkeypatch.setenv("OPENSCAD", str(exe))
    assert compiler._find_openscad() == str(exe)


def test_openscad_env_var_ignored_when_missing(tmp_path, monkeypatch):
    monkeypatch.setenv("OPENSCAD", str(tmp_path / "nowhere"))
    monkeypatch.setattr(compiler.shutil, "which", lambda name: "/usr/bin/openscad")
    assert compiler._find_openscad() == "/usr/bin/openscad"
