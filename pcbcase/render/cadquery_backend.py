"""
PCBCase - CadQuery backend: evaluate part trees into CadQuery solids and export them.

3-D nodes map onto CadQuery operations. 2-D sub-trees (profiles under
linear_extrude) are evaluated with shapely, then extruded from polylines.
hull() is supported over spheres only, which is how rounded boxes are built:
the hull of eight equal spheres is a box with every edge filleted.
"""
import logging
from pathlib import Path
from typing import Optional

import cadquery as cq
from shapely.affinity import affine_transform, rotate as shapely_rotate, translate as shapely_translate
from shapely.geometry import Point, Polygon, box as shapely_box
from shapely.ops import unary_union

from ..engine.geometry import bounding_box_of, vadd, vsub

log = logging.getLogger(__name__)

TWO_D = {"square", "circle", "polygon", "text", "offset"}
THREE_D = {"cube", "sphere", "cylinder", "linear_extrude"}

DEFAULT_SEGMENTS = 32

_VALIGN = {"baseline": "bottom"}


def _is_2d(obj) -> bool:
    if obj.name in TWO_D:
        return True
    if obj.name in THREE_D:
        return False
    return bool(obj.children) and _is_2d(obj.children[0])


def _vec(v, n: int = 3) -> tuple:
    if isinstance(v, (int, float)):
        v = [v] * n
    v = [float(x) for x in v]
    return tuple(v + [0.0] * (n - len(v)))


def _segments(params: dict) -> int:
    return int(params.get("segments") or params.get("$fn") or DEFAULT_SEGMENTS)


# ── 2-D evaluation (shapely) ────────────────────────────────────────


def _text_shape(params: dict):
    """Glyph outlines from CadQuery's font engine, as a shapely geometry."""
    font = (params.get("font") or "Arial").split(":")[0]
    valign = params.get("valign") or "baseline"
    glyphs = cq.Compound.makeText(
        params["text"],
        params.get("size") or 10.0,
        1.0,
        font=font,
        halign=params.get("halign") or "left",
        valign=_VALIGN.get(valign, valign),
    )
    triangles = []
    for face in cq.Workplane("XY").add(glyphs).faces("<Z").vals():
        vertices, tris = face.tessellate(0.01)
        for tri in tris:
            poly = Polygon([(vertices[i].x, vertices[i].y) for i in tri])
            if poly.area > 0:
                triangles.append(poly)
    return unary_union(triangles)


def _children_2d(obj):
    return unary_union([_shape2d(c) for c in obj.children])


def _shape2d(obj):
    name, params = obj.name, obj.params

    if name == "square":
        w, h = _vec(params.get("size") or 1, 2)
        if params.get("center"):
            return shapely_box(-w / 2, -h / 2, w / 2, h / 2)
        return shapely_box(0, 0, w, h)

    if name == "circle":
        return Point(0, 0).buffer(float(params["r"]), max(_segments(params) // 4, 1))

    if name == "polygon":
        points = [tuple(p) for p in params["points"]]
        paths = params.get("paths")
        if not paths:
            return Polygon(points)
        outer, *holes = [[points[i] for i in path] for path in paths]
        return Polygon(outer, holes)

    if name == "text":
        return _text_shape(params)

    if name == "offset":
        shape = _children_2d(obj)
        quad = max(_segments(params) // 4, 1)
        if params.get("r") is not None:
            return shape.buffer(float(params["r"]), quad, join_style="round")
        return shape.buffer(float(params["delta"]), quad, join_style="mitre")

    if name == "translate":
        dx, dy, _ = _vec(params["v"])
        return shapely_translate(_children_2d(obj), dx, dy)

    if name == "rotate":
        a = params.get("a") or 0
        if isinstance(a, (int, float)):
            angle = a
        else:
            ax, ay, angle = _vec(a)
            if ax or ay:
                raise ValueError("2-D rotate() only supports rotation about Z")
        return shapely_rotate(_children_2d(obj), angle, origin=(0, 0))

    if name == "mirror":
        nx, ny, _ = _vec(params["v"])
        k = nx * nx + ny * ny
        m = [1 - 2 * nx * nx / k, -2 * nx * ny / k, -2 * nx * ny / k, 1 - 2 * ny * ny / k, 0, 0]
        return affine_transform(_children_2d(obj), m)

    if name == "union":
        return _children_2d(obj)

    if name == "difference":
        first, *rest = [_shape2d(c) for c in obj.children]
        return first.difference(unary_union(rest)) if rest else first

    if name == "intersection":
        result = None
        for c in obj.children:
            shape = _shape2d(c)
            result = shape if result is None else result.intersection(shape)
        return result

    if name == "hull":
        return _children_2d(obj).convex_hull

    raise ValueError(f"Unsupported 2-D node: {name}()")


# ── 3-D evaluation (CadQuery) ───────────────────────────────────────


def _ring_wire(ring) -> cq.Workplane:
    """Closed CadQuery wire from a shapely ring."""
    coords = list(ring.coords)[:-1]
    if len(coords) < 3:
        raise ValueError("Polygon has too few points")
    pts = [(float(x), float(y)) for x, y in coords]
    return cq.Workplane("XY").polyline(pts).close()


def _extrude(shape, height: float) -> Optional[cq.Workplane]:
    polys = [shape] if isinstance(shape, Polygon) else list(getattr(shape, "geoms", []))
    result = None
    for poly in polys:
        if not isinstance(poly, Polygon) or poly.is_empty:
            continue
        solid = _ring_wire(poly.exterior).extrude(height)
        for interior in poly.interiors:
            solid = solid.cut(_ring_wire(interior).extrude(height))
        result = solid if result is None else result.union(solid)
    return result


def _sphere_hull(obj) -> cq.Workplane:
    centers = []
    radii = set()
    for child in obj.children:
        offset = (0.0, 0.0, 0.0)
        node = child
        while node.name == "translate" and len(node.children) == 1:
            offset = vadd(offset, _vec(node.params["v"]))
            node = node.children[0]
        if node.name != "sphere":
            raise ValueError(f"hull() is only supported over spheres, got {node.name}()")
        centers.append(offset)
        radii.add(float(node.params["r"]))
    if len(radii) != 1:
        raise ValueError("hull() needs spheres of a single radius")

    r = radii.pop()
    span = bounding_box_of(centers)
    if min(span.size) <= 0:
        raise ValueError("hull() of spheres must span all three axes")
    size = vadd(span.size, 2 * r)
    return (
        cq.Workplane("XY")
        .box(*size, centered=False)
        .translate(vsub(span.origin, r))
        .edges()
        .fillet(r)
    )


def _union(shapes) -> Optional[cq.Workplane]:
    result = None
    for shape in shapes:
        if shape is None:
            continue
        result = shape if result is None else result.union(shape)
    return result


def _solid(obj) -> Optional[cq.Workplane]:
    name, params = obj.name, obj.params

    if name == "cube":
        size = _vec(params.get("size") or 1)
        return cq.Workplane("XY").box(*size, centered=bool(params.get("center")))

    if name == "sphere":
        return cq.Workplane("XY").sphere(float(params["r"]))

    if name == "cylinder":
        h = float(params["h"])
        r1 = params.get("r1") if params.get("r1") is not None else params["r"]
        r2 = params.get("r2") if params.get("r2") is not None else params["r"]
        if r1 == r2:
            solid = cq.Workplane("XY").circle(float(r1)).extrude(h)
        else:
            solid = cq.Workplane("XY").add(cq.Solid.makeCone(float(r1), float(r2), h))
        if params.get("center"):
            solid = solid.translate((0, 0, -h / 2))
        return solid

    if name == "linear_extrude":
        h = float(params["height"])
        solid = _extrude(_children_2d(obj), h)
        if solid is not None and params.get("center"):
            solid = solid.translate((0, 0, -h / 2))
        return solid

    if name == "hull":
        return _sphere_hull(obj)

    children = [_solid(c) for c in obj.children]

    if name == "union":
        return _union(children)

    if name == "difference":
        if not children or children[0] is None:
            return None
        result = children[0]
        for c in children[1:]:
            if c is not None:
                result = result.cut(c)
        return result

    if name == "intersection":
        if not children or any(c is None for c in children):
            return None
        result = children[0]
        for c in children[1:]:
            result = result.intersect(c)
        return result

    shape = _union(children)
    if shape is None:
        return None

    if name == "translate":
        return shape.translate(_vec(params["v"]))

    if name == "rotate":
        a = params.get("a") or 0
        v = params.get("v")
        if v is not None:
            return shape.rotate((0, 0, 0), _vec(v), float(a))
        ax, ay, az = (0.0, 0.0, float(a)) if isinstance(a, (int, float)) else _vec(a)
        # OpenSCAD order: X, then Y, then Z
        for axis, angle in (((1, 0, 0), ax), ((0, 1, 0), ay), ((0, 0, 1), az)):
            if angle:
                shape = shape.rotate((0, 0, 0), axis, angle)
        return shape

    if name == "mirror":
        return shape.mirror(_vec(params["v"]))

    raise ValueError(f"Unsupported 3-D node: {name}()")


def to_workplane(tree) -> Optional[cq.Workplane]:
    """Evaluate a SolidPython tree; None when it describes no solid."""
    if _is_2d(tree):
        raise ValueError(f"Top-level {tree.name}() is a 2-D shape; extrude it first")
    return _solid(tree)


def export_parts(parts: dict, output_dir: str = "./output", prefix: str = "enclosure") -> dict:
    """
    Evaluate and export every part as STL.

    Returns paths to generated STL files:
    {
        "top": "path/to/enclosure_top.stl",
        "bottom": "path/to/enclosure_bottom.stl",
    }
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    result = {}
    for name, tree in parts.items():
        shape = to_workplane(tree)
        if shape is None:
            log.warning("[WARN] %s is empty, not exported", name)
            continue
        path = output_path / f"{prefix}_{name}.stl"
        cq.exporters.export(shape, str(path))
        result[name] = str(path)

    log.info("[OK] Output: %s", result)
    return result
