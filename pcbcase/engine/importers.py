"""
PCBCase - Component volume from a 3D model of the populated board.

The enclosure only needs the bounding box of everything mounted on the PCB;
a STEP or STL export from the ECAD tool gives it directly.
"""
from pathlib import Path


def load_component_bbox(file_path: str, position=(0.0, 0.0, 0.0)) -> tuple:
    """
    Load a 3D model (STEP or STL) and return its bounding box corners.

    *position* is added to both corners, for models whose origin is not the
    PCB's lower-left corner. The result can be passed straight to
    ``EnclosureConfig(pcb_components_bb=...)``.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Component file not found: {file_path}")

    ext = path.suffix.lower()

    if ext == ".stl":
        import trimesh
        mesh = trimesh.load(str(path), force="mesh")
        (xmin, ymin, zmin), (xmax, ymax, zmax) = mesh.bounds
    elif ext in (".step", ".stp"):
        import cadquery as cq
        bb = cq.importers.importStep(str(path)).val().BoundingBox()
        xmin, ymin, zmin, xmax, ymax, zmax = bb.xmin, bb.ymin, bb.zmin, bb.xmax, bb.ymax, bb.zmax
    else:
        raise ValueError(f"Unsupported file format: {ext}. Use STEP (.step/.stp) or STL (.stl)")

    px, py, pz = position
    return (
        (float(xmin) + px, float(ymin) + py, float(zmin) + pz),
        (float(xmax) + px, float(ymax) + py, float(zmax) + pz),
    )
