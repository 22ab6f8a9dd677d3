"""
PCBCase - Hinged push buttons cut into the Top half.

A button is a flap separated from the lid by a ``button_tolerance`` wide slit
around a circle and a hinge tongue; the tongue end stays attached and a
groove under it thins the lid so the flap can flex. An actuator column hangs
from the flap down to the on-board button.

Profile in button-local coordinates, hinge along +X:

      slit         tongue (hinge_length x hinge_width)
     ( cap ) =====================|  attached end
"""
import logging

from solid import (
    circle, cylinder, difference, linear_extrude, offset, rotate, square, translate, union,
)
from solid.solidpython import OpenSCADObject

from .geometry import EPSILON
from .layout import LayoutFrame
from .models import Button, EnclosureConfig

log = logging.getLogger(__name__)


def cap_shift(config: EnclosureConfig) -> float:
    """Distance from the actuator axis to the cap centre, along the hinge."""
    return (config.button_diameter - config.button_actuator_diameter) / 2 - config.button_tolerance


def button_profile(config: EnclosureConfig, extra_length: float = 0.0) -> OpenSCADObject:
    """Cap circle plus hinge tongue; *extra_length* prolongs the tongue."""
    radius = config.button_diameter / 2
    length, width = config.button_hinge_dimensions
    return union()(
        circle(r=radius, segments=config.segments),
        translate([0, -width / 2])(square([radius + length + extra_length, width])),
    )


def button_slit(config: EnclosureConfig) -> OpenSCADObject:
    """2-D slit around the flap, open everywhere except at the tongue end."""
    tol = config.button_tolerance
    return difference()(
        offset(r=tol, segments=config.segments)(button_profile(config)),
        button_profile(config, extra_length=tol + EPSILON),
    )


def _place(button: Button, frame: LayoutFrame, config: EnclosureConfig, obj: OpenSCADObject):
    x, y = frame.to_enclosure(tuple(button.position))
    return translate([x, y, 0])(
        rotate([0, 0, button.rotation])(
            translate([cap_shift(config), 0, 0])(obj)
        )
    )


def button_cutout(button: Button, frame: LayoutFrame, config: EnclosureConfig) -> OpenSCADObject:
    wall = frame.wall_thickness
    ceiling = frame.outer_dim[2] - wall
    radius = config.button_diameter / 2
    length, width = config.button_hinge_dimensions

    slit = translate([0, 0, ceiling - EPSILON])(
        linear_extrude(height=wall + 2 * EPSILON)(button_slit(config))
    )
    groove = translate([radius + length, 0, ceiling])(
        rotate([90, 0, 0])(
            cylinder(r=wall / 2, h=width + 2 * config.button_tolerance,
                     center=True, segments=config.segments)
        )
    )
    return _place(button, frame, config, union()(slit, groove))


def button_actuator(button: Button, frame: LayoutFrame, config: EnclosureConfig):
    """Column from the released button height into the flap; None if it has no height."""
    x, y = frame.to_enclosure(tuple(button.position))
    z0 = frame.split_z + button.released_height
    z1 = frame.outer_dim[2] - frame.wall_thickness / 2
    if z1 <= z0:
        log.warning("Button at %s skipped: released height above the lid", tuple(button.position))
        return None
    return translate([x, y, z0])(
        cylinder(r=config.button_actuator_diameter / 2, h=z1 - z0, segments=config.segments)
    )


def button_cutouts(frame: LayoutFrame, config: EnclosureConfig) -> list:
    return [button_cutout(b, frame, config) for b in config.buttons]


def button_actuators(frame: LayoutFrame, config: EnclosureConfig) -> list:
    actuators = [button_actuator(b, frame, config) for b in config.buttons]
    return [a for a in actuators if a is not None]
