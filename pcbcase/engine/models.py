"""
PCBCase - Data models for the PCB, its openings and the enclosure configuration.

All positions are expressed in PCB-local millimetres: the board footprint spans
[0, 0, 0] - pcb_dimensions. Every model is frozen; one EnclosureConfig drives
one generation run.
"""
from dataclasses import dataclass
from typing import Optional
from enum import Enum


class InvalidConfiguration(ValueError):
    """Raised when enclosure parameters cannot describe any enclosure."""


class Side(str, Enum):
    LEFT = "left"       # -X
    RIGHT = "right"     # +X
    FRONT = "front"     # -Y
    REAR = "rear"       # +Y
    TOP = "top"         # +Z
    BOTTOM = "bottom"   # -Z


class Half(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"


class ExportMode(str, Enum):
    ALL = "all"
    TOP = "top"
    BOTTOM = "bottom"
    TEXTS = "texts"


class HAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VAlign(str, Enum):
    TOP = "top"
    CENTER = "center"
    BASELINE = "baseline"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class Slot:
    """A rectangular opening through one enclosure face.

    The two corners live in the plane of the face:
    left/right -> (y, z), front/rear -> (x, z), top/bottom -> (x, y).
    """
    side: Side
    corner1: tuple
    corner2: tuple
    label: str = ""


@dataclass(frozen=True)
class MountPost:
    center: tuple            # (x, y) of the PCB mounting hole
    diameter: float          # must not exceed the hole diameter


@dataclass(frozen=True)
class MountPostRestriction:
    """Keep-out volume; no post material is generated inside it."""
    corner_a: tuple
    corner_b: tuple


@dataclass(frozen=True)
class Button:
    position: tuple          # (x, y) of the on-board push button
    released_height: float   # z of the button top, PCB-local
    rotation: float = 0.0    # hinge direction in degrees, 0 = +X


@dataclass(frozen=True)
class TextDef:
    position: tuple
    text: str
    font: str = "Liberation Sans"
    size: float = 5.0
    halign: HAlign = HAlign.CENTER
    valign: VAlign = VAlign.CENTER
    rotation: float = 0.0


@dataclass(frozen=True)
class EnclosureConfig:
    """Configuration for generating the enclosure."""
    # PCB size (x, y, thickness), the only mandatory field
    pcb_dimensions: tuple

    # Points spanning the volume of all mounted components, PCB-local
    pcb_components_bb: Optional[tuple] = None

    # Features
    mount_posts: tuple = ()
    mount_post_restrictions: tuple = ()
    slots: tuple = ()
    buttons: tuple = ()
    texts: tuple = ()

    # Mounting posts
    mount_posts_base_thickness_offset: float = 1.0

    # Gap between board bounding box and inner wall (mm)
    pcb_offset: float = 1.0

    # Walls
    wall_thickness: float = 2.0
    outer_corner_radius: float = 2.0
    inner_corner_radius: float = 1.0

    # Fit between printed parts
    tolerance: float = 0.4
    button_tolerance: float = 0.2

    # Lip / snap fit
    lip_height: float = 2.4

    # Text plates
    text_depth: float = 0.4

    # Buttons
    button_diameter: float = 10.0
    button_hinge_dimensions: tuple = (3.0, 2.0)   # (length, width)
    button_actuator_diameter: float = 3.0

    # Circle resolution handed to the modeller ($fn)
    segments: int = 32
