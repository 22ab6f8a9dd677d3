"""
PCBCase - Shell builder: rounded hollow box forming the enclosure wall.
"""
from solid import cube, difference, hull, offset, sphere, square, translate
from solid.solidpython import OpenSCADObject

from .geometry import BoundingBox
from .layout import LayoutFrame
from .models import EnclosureConfig


def box_solid(box: BoundingBox) -> OpenSCADObject:
    return translate(list(box.origin))(cube(list(box.size)))


def rounded_box(size, radius: float, segments: int = 32) -> OpenSCADObject:
    """
    Box of *size* at the origin with every edge filleted by *radius*.

    Hull of eight spheres inset by the radius from the cube corners; valid
    for radius < min(size) / 2.
    """
    if radius <= 0:
        return cube(list(size))
    corners = [
        translate([x, y, z])(sphere(r=radius, segments=segments))
        for x in (radius, size[0] - radius)
        for y in (radius, size[1] - radius)
        for z in (radius, size[2] - radius)
    ]
    return hull()(*corners)


def rounded_rect(size, radius: float, segments: int = 32) -> OpenSCADObject:
    """2-D rectangle of *size* at the origin with rounded corners."""
    if radius <= 0:
        return square(list(size[:2]))
    core = translate([radius, radius])(
        square([size[0] - 2 * radius, size[1] - 2 * radius])
    )
    return offset(r=radius, segments=segments)(core)


def build_shell(frame: LayoutFrame, config: EnclosureConfig) -> OpenSCADObject:
    """Outer rounded box minus the inner rounded box."""
    wall = frame.wall_thickness
    outer = rounded_box(frame.outer_dim, config.outer_corner_radius, config.segments)
    inner = translate([wall, wall, wall])(
        rounded_box(frame.inner_dim, config.inner_corner_radius, config.segments)
    )
    return difference()(outer, inner)
