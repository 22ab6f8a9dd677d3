"""
PCBCase - Mounting posts.

Bottom half: a base stand-off from the floor up to the PCB plane plus a
thinner pin reaching through the board's mounting hole up to the lip top.
Top half: a boss from the ceiling down onto the PCB, drilled so the pin
slides in. Restriction boxes are subtracted from every post, so a post
crossing one is truncated rather than dropped.
"""
import logging

from solid import cylinder, difference, translate, union
from solid.solidpython import OpenSCADObject

from .geometry import EPSILON, BoundingBox
from .layout import LayoutFrame
from .models import EnclosureConfig, Half, MountPost
from .shell import box_solid

log = logging.getLogger(__name__)


def _column(center, r: float, z0: float, z1: float, segments: int) -> OpenSCADObject:
    return translate([center[0], center[1], z0])(
        cylinder(r=r, h=z1 - z0, segments=segments)
    )


def restriction_solids(frame: LayoutFrame, config: EnclosureConfig) -> list:
    return [
        box_solid(frame.box_to_enclosure(BoundingBox.from_corners(r.corner_a, r.corner_b)))
        for r in config.mount_post_restrictions
    ]


def bottom_post(post: MountPost, frame: LayoutFrame, config: EnclosureConfig) -> OpenSCADObject:
    center = frame.to_enclosure(tuple(post.center))
    floor_z = frame.wall_thickness / 2
    split = frame.split_z
    base_r = post.diameter / 2 + config.mount_posts_base_thickness_offset
    pin_r = (post.diameter - config.tolerance) / 2
    return union()(
        _column(center, base_r, floor_z, split, config.segments),
        _column(center, pin_r, floor_z, split + config.lip_height, config.segments),
    )


def top_post(post: MountPost, frame: LayoutFrame, config: EnclosureConfig):
    """Boss pressing the PCB down; None when the board leaves no room for it."""
    center = frame.to_enclosure(tuple(post.center))
    pcb_top = frame.split_z + config.pcb_dimensions[2]
    ceiling_z = frame.outer_dim[2] - frame.wall_thickness / 2
    if ceiling_z <= pcb_top:
        log.warning("Top post at %s skipped: no room above the PCB", tuple(post.center))
        return None
    boss_r = post.diameter / 2 + config.mount_posts_base_thickness_offset
    hole_r = (post.diameter + config.tolerance) / 2
    hole_top = min(frame.split_z + config.lip_height + config.tolerance, ceiling_z)
    return difference()(
        _column(center, boss_r, pcb_top, ceiling_z, config.segments),
        _column(center, hole_r, pcb_top - EPSILON, hole_top, config.segments),
    )


def build_posts(frame: LayoutFrame, config: EnclosureConfig, half: Half):
    """All posts of *half* minus the restriction boxes; None without posts."""
    if half == Half.TOP:
        posts = [top_post(p, frame, config) for p in config.mount_posts]
    else:
        posts = [bottom_post(p, frame, config) for p in config.mount_posts]
    posts = [p for p in posts if p is not None]
    if not posts:
        return None
    return difference()(union()(*posts), *restriction_solids(frame, config))
