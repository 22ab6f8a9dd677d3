"""
PCBCase - OpenSCAD output: render part trees to .scad and, when OpenSCAD is
installed, compile them to STL.
"""
import logging
from pathlib import Path

from solid import scad_render

from .compiler import OpenSCADError, compile_scad

log = logging.getLogger(__name__)


def render_parts(parts: dict, header: str = "") -> dict:
    """{name: tree} -> {name: OpenSCAD source}."""
    return {name: scad_render(tree, file_header=header) for name, tree in parts.items()}


def write_scad(parts: dict, output_dir: str = "./output", prefix: str = "enclosure") -> dict:
    """Write one ``<prefix>_<name>.scad`` per part. Returns {name: path}."""
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    result = {}
    for name, source in render_parts(parts).items():
        path = output_path / f"{prefix}_{name}.scad"
        path.write_text(source)
        result[name] = str(path)
    return result


def export_stl(parts: dict, output_dir: str = "./output", prefix: str = "enclosure") -> dict:
    """
    Write .scad files and compile each with the openscad CLI.

    Returns {name: stl_path} for the parts that compiled; a part openscad
    cannot build is logged and left out.
    """
    result = {}
    for name, scad_path in write_scad(parts, output_dir, prefix).items():
        try:
            result[name] = str(compile_scad(Path(scad_path)))
        except OpenSCADError as e:
            log.warning("[WARN] %s not compiled: %s", name, e)
    log.info("[OK] Output: %s", result)
    return result
