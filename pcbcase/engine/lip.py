"""
PCBCase - Split of the shell into Top/Bottom halves and the snap-fit lip.

The Bottom half carries a lip: a thin ring standing on the split plane along
the inner face of the wall, with one snap tab per side. The Top half has the
matching cavity cut into the inner half of its wall, grown by the tolerance.

            Top wall  | gap |  lip (Bottom)  | cavity
    outer face ------ |     | -------------- | inner face
                 wall/2+tol/2   wall/2-tol/2
"""
import logging

from solid import cube, cylinder, difference, linear_extrude, offset, rotate, translate, union
from solid.solidpython import OpenSCADObject

from .geometry import EPSILON
from .layout import LayoutFrame
from .models import EnclosureConfig
from .shell import rounded_rect

log = logging.getLogger(__name__)


def lip_offsets(config: EnclosureConfig) -> tuple:
    """
    Outward distance of the lip face and of the cavity face from the inner wall.

    The clearance between them is exactly ``tolerance``.
    """
    half = config.wall_thickness / 2
    return half - config.tolerance / 2, half + config.tolerance / 2


def snap_tab_radius(config: EnclosureConfig) -> float:
    return config.wall_thickness / 4


def top_half_volume(frame: LayoutFrame) -> OpenSCADObject:
    ox, oy, oz = frame.outer_dim
    split = frame.split_z
    return translate([-EPSILON, -EPSILON, split])(
        cube([ox + 2 * EPSILON, oy + 2 * EPSILON, oz - split + EPSILON])
    )


def bottom_half_volume(frame: LayoutFrame) -> OpenSCADObject:
    ox, oy, _ = frame.outer_dim
    return translate([-EPSILON, -EPSILON, -EPSILON])(
        cube([ox + 2 * EPSILON, oy + 2 * EPSILON, frame.split_z + EPSILON])
    )


def _ring(frame: LayoutFrame, config: EnclosureConfig, outward: float, z0: float, height: float,
          inset: float = 0.0):
    """Vertical ring from the inner wall face (moved in by *inset*) outward by *outward*."""
    wall = frame.wall_thickness
    inner = rounded_rect(frame.inner_dim, config.inner_corner_radius, config.segments)
    hole = offset(delta=-inset)(inner) if inset else inner
    profile = difference()(
        offset(r=outward, segments=config.segments)(inner),
        hole,
    )
    return translate([wall, wall, z0])(linear_extrude(height=height)(profile))


def snap_tabs(frame: LayoutFrame, config: EnclosureConfig, grow: float = 0.0) -> list:
    """
    Four horizontal cylinders centred on the lip's outer face near its top.

    *grow* enlarges radius and length; the Top half uses it for the grooves.
    """
    wall = frame.wall_thickness
    ix, iy, _ = frame.inner_dim
    lip_out, _ = lip_offsets(config)
    radius = snap_tab_radius(config)
    z = frame.split_z + config.lip_height - radius
    r_in = config.inner_corner_radius

    tabs = []
    # (length, center, rotation) for front, rear, left, right
    placements = [
        (ix - 4 * r_in, (wall + ix / 2, wall - lip_out, z), [0, 90, 0]),
        (ix - 4 * r_in, (wall + ix / 2, wall + iy + lip_out, z), [0, 90, 0]),
        (iy - 4 * r_in, (wall - lip_out, wall + iy / 2, z), [90, 0, 0]),
        (iy - 4 * r_in, (wall + ix + lip_out, wall + iy / 2, z), [90, 0, 0]),
    ]
    for length, center, angles in placements:
        if length <= 0:
            log.warning("Snap tab skipped: side too short for corner radius %.2f", r_in)
            continue
        tabs.append(
            translate(list(center))(
                rotate(angles)(
                    cylinder(r=radius + grow, h=length + 2 * grow, center=True, segments=config.segments)
                )
            )
        )
    return tabs


def build_lip(frame: LayoutFrame, config: EnclosureConfig) -> OpenSCADObject:
    """Lip and snap tabs added to the Bottom half. Sinks EPSILON into the wall below."""
    lip_out, _ = lip_offsets(config)
    ring = _ring(
        frame, config, lip_out,
        frame.split_z - EPSILON, config.lip_height + EPSILON,
    )
    return union()(ring, *snap_tabs(frame, config))


def build_lip_cavity(frame: LayoutFrame, config: EnclosureConfig) -> OpenSCADObject:
    """Space cut from the Top half so the lip slides in with ``tolerance`` clearance."""
    _, cavity_out = lip_offsets(config)
    clearance = config.tolerance / 2
    ring = _ring(
        frame, config, cavity_out,
        frame.split_z - EPSILON, config.lip_height + clearance + EPSILON,
        inset=EPSILON,
    )
    return union()(ring, *snap_tabs(frame, config, grow=clearance))
