"""
PCBCase - Run the openscad CLI on a rendered part.

The binary is taken from the OPENSCAD environment variable, else from PATH.
"""
import os
import shutil
import subprocess
from pathlib import Path
from typing import Optional


class OpenSCADError(RuntimeError):
    """openscad is missing or failed to produce a mesh."""


def openscad_binary() -> Optional[str]:
    return os.environ.get("OPENSCAD") or shutil.which("openscad")


def compile_scad(scad_path: Path, stl_path: Optional[Path] = None, timeout: int = 600) -> Path:
    """Compile *scad_path* to STL next to it (or to *stl_path*) and return the STL path."""
    binary = openscad_binary()
    if binary is None:
        raise OpenSCADError("openscad not found; install it or set OPENSCAD")

    stl_path = Path(stl_path) if stl_path else Path(scad_path).with_suffix(".stl")
    try:
        proc = subprocess.run(
            [binary, "-o", str(stl_path), str(scad_path)],
            capture_output=True, text=True, timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise OpenSCADError(f"{Path(scad_path).name}: no result after {timeout}s") from e

    if proc.returncode != 0 or not stl_path.exists():
        lines = proc.stderr.strip().splitlines()
        raise OpenSCADError(lines[-1] if lines else f"openscad returned {proc.returncode}")
    return stl_path
