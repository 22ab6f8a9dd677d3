"""
PCBCase - OpenSCAD output, compiler wrapper and component importer.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
import trimesh

from pcbcase.engine.generator import generate_enclosure
from pcbcase.engine.importers import load_component_bbox
from pcbcase.engine.models import EnclosureConfig
from pcbcase.render import compiler, scad


@pytest.fixture
def parts():
    return generate_enclosure(EnclosureConfig(pcb_dimensions=(30, 20, 1.6)), assembled=False)


def test_render_parts(parts):
    sources = scad.render_parts(parts, header="// test")
    assert set(sources) == {"top", "bottom"}
    assert "// test" in sources["top"]
    assert "hull()" in sources["bottom"]


def test_write_scad(parts, tmp_path):
    paths = scad.write_scad(parts, str(tmp_path), prefix="case")
    assert set(paths) == {"top", "bottom"}
    for path in paths.values():
        assert os.path.exists(path)
        assert path.endswith(".scad")
    assert os.path.basename(paths["top"]) == "case_top.scad"


def test_compile_without_openscad(monkeypatch, tmp_path):
    monkeypatch.delenv("OPENSCAD", raising=False)
    monkeypatch.setattr(compiler.shutil, "which", lambda name: None)
    with pytest.raises(compiler.OpenSCADError, match="not found"):
        compiler.compile_scad(tmp_path / "x.scad")


@pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell")
def test_compile_reports_openscad_error(monkeypatch, tmp_path):
    script = tmp_path / "openscad"
    script.write_text("#!/bin/sh\necho \"ERROR: Parser error in line 3\" >&2\nexit 1\n")
    script.chmod(0o755)
    monkeypatch.setenv("OPENSCAD", str(script))
    with pytest.raises(compiler.OpenSCADError, match="Parser error"):
        compiler.compile_scad(tmp_path / "x.scad")


def test_export_stl_skips_failed_parts(parts, monkeypatch, tmp_path):
    def fake_compile(scad_path, stl_path=None, timeout=600):
        if "top" in scad_path.name:
            out = scad_path.with_suffix(".stl")
            out.write_text("solid top\nendsolid top\n")
            return out
        raise compiler.OpenSCADError("boom")

    monkeypatch.setattr(scad, "compile_scad", fake_compile)
    result = scad.export_stl(parts, str(tmp_path))
    assert set(result) == {"top"}
    assert result["top"].endswith("enclosure_top.stl")


def test_load_component_bbox_from_stl(tmp_path):
    path = tmp_path / "board.stl"
    trimesh.creation.box(extents=(2, 4, 6)).export(str(path))

    lo, hi = load_component_bbox(str(path), position=(1, 2, 3))
    assert lo == pytest.approx((0, 0, 0))
    assert hi == pytest.approx((2, 4, 6))

    # result plugs straight into the config
    config = EnclosureConfig(pcb_dimensions=(1, 1, 1), pcb_components_bb=(lo, hi))
    assert "top" in generate_enclosure(config)


def test_load_component_bbox_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_component_bbox(str(tmp_path / "nope.stl"))


def test_load_component_bbox_unknown_format(tmp_path):
    path = tmp_path / "board.obj"
    path.write_text("")
    with pytest.raises(ValueError):
        load_component_bbox(str(path))
