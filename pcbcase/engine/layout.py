"""
PCBCase - Layout resolver.

Derives the shared frame every feature is placed in: the board bounding box
(PCB footprint + component volume + slot extents), inner/outer enclosure
dimensions, the PCB placement inside the enclosure and the per-side slot
reference planes.

Enclosure-local coordinates put the enclosure's minimum corner at the origin.
Features are declared in PCB-local coordinates and moved with ``pcb_loc``.
"""
import logging
from dataclasses import dataclass

from .models import EnclosureConfig, Slot, Side
from .geometry import (
    BoundingBox, BoxBuilder, bounding_box_of, merge_boxes, vadd, vsub, vneg,
)

log = logging.getLogger(__name__)

# (plane axes, thickness axis) for each side
SIDE_AXES = {
    Side.LEFT: ((1, 2), 0),
    Side.RIGHT: ((1, 2), 0),
    Side.FRONT: ((0, 2), 1),
    Side.REAR: ((0, 2), 1),
    Side.TOP: ((0, 1), 2),
    Side.BOTTOM: ((0, 1), 2),
}

LOW_SIDES = (Side.LEFT, Side.FRONT, Side.BOTTOM)

ZERO_OFFSETS = ((0.0, 0.0, 0.0), (0.0, 0.0, 0.0))


@dataclass(frozen=True)
class LayoutFrame:
    board_bb: BoundingBox
    board_dim: tuple
    inner_dim: tuple
    outer_dim: tuple
    pcb_loc: tuple
    # [0]: outer face of the left/front/bottom walls
    # [1]: inner face of the right/rear/top walls
    slot_offsets: tuple
    wall_thickness: float
    pcb_offset: float

    @property
    def split_z(self) -> float:
        """Height of the PCB's lower face; Top and Bottom meet here."""
        return self.pcb_loc[2]

    def to_enclosure(self, point) -> tuple:
        """PCB-local point (2-D or 3-D) -> enclosure-local."""
        return vadd(point, self.pcb_loc[:len(point)])

    def box_to_enclosure(self, box: BoundingBox) -> BoundingBox:
        return box.translated(self.pcb_loc)


def slot_extent(slot: Slot, slot_offsets=ZERO_OFFSETS, thickness: float = 0.0) -> BoundingBox:
    """
    3-D box of *slot* in PCB-local coordinates.

    The in-plane axes come from the slot corners; the through-wall axis
    starts at the side's reference plane and spans *thickness*.
    """
    plane, t = SIDE_AXES[Side(slot.side)]
    p1 = [0.0, 0.0, 0.0]
    p2 = [0.0, 0.0, 0.0]
    for axis, a, b in zip(plane, slot.corner1, slot.corner2):
        p1[axis] = a
        p2[axis] = b

    ref = 0 if Side(slot.side) in LOW_SIDES else 1
    base = slot_offsets[ref][t]
    return (
        BoxBuilder.from_axes([bounding_box_of([p1, p2])], plane)
        .override_low(t, base)
        .override_high(t, base + thickness)
        .build()
    )


def resolve_layout(config: EnclosureConfig) -> LayoutFrame:
    """Compute the LayoutFrame for *config*. Pure; call it as often as needed."""
    wall = config.wall_thickness
    offset = config.pcb_offset

    # --- 1. Component volume (a point at the origin when absent) ---
    comp_bb = bounding_box_of(config.pcb_components_bb or [(0.0, 0.0, 0.0)])

    # --- 2. Slots in the zero-offset frame ---
    slot_boxes = [slot_extent(s) for s in config.slots]

    # --- 3. Board bounding box ---
    pcb_bb = BoundingBox((0.0, 0.0, 0.0), tuple(config.pcb_dimensions))
    board_bb = merge_boxes([pcb_bb, comp_bb, *slot_boxes])

    # --- 4. Dimensions ---
    board_dim = board_bb.size
    inner_dim = vadd(board_dim, 2 * offset)
    outer_dim = vadd(inner_dim, 2 * wall)

    # --- 5. PCB placement ---
    pcb_loc = vadd(vneg(board_bb.origin), offset + wall)

    # --- 6. Slot reference planes ---
    # For a board starting at x = y = 0 these reduce to
    # low = (0, 0, origin.z) - (wall + offset) and high = inner_dim - offset
    # with z taken from the board top.
    low = vsub(board_bb.origin, wall + offset)
    high = vadd(board_bb.max, offset)

    frame = LayoutFrame(
        board_bb=board_bb,
        board_dim=board_dim,
        inner_dim=inner_dim,
        outer_dim=outer_dim,
        pcb_loc=pcb_loc,
        slot_offsets=(low, high),
        wall_thickness=wall,
        pcb_offset=offset,
    )
    log.debug("Layout resolved: board=%s outer=%s pcb_loc=%s", board_dim, outer_dim, pcb_loc)
    return frame
