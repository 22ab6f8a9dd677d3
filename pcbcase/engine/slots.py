"""
PCBCase - Slot cutter.

Each slot becomes an axis-aligned box through its wall. Both halves are cut,
each only within its own z-range. Side-wall slots that cross the lip band
(split plane up to the lip top) would otherwise expose the lip clearance
inside the opening, so around such a slot the Bottom half gets a
full-thickness collar filling the band and the Top half a matching notch.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from solid import difference, intersection
from solid.solidpython import OpenSCADObject

from .geometry import EPSILON, BoundingBox, BoxBuilder
from .layout import LayoutFrame, SIDE_AXES, slot_extent
from .models import EnclosureConfig, Half, Side, Slot
from .shell import box_solid

log = logging.getLogger(__name__)

SIDE_WALLS = (Side.LEFT, Side.RIGHT, Side.FRONT, Side.REAR)


@dataclass(frozen=True)
class SlotGeometry:
    """Boxes derived from one slot, all enclosure-local."""
    slot: Slot
    box: BoundingBox                      # the opening through the wall, exact
    cutout: BoundingBox                   # the opening, reaching past both wall faces
    top_cut: Optional[BoundingBox]        # part of cutout inside the Top half
    bottom_cut: Optional[BoundingBox]     # part of cutout inside the Bottom half
    fill: Optional[BoundingBox] = None    # collar added to Bottom across the lip band
    notch: Optional[BoundingBox] = None   # collar clearance cut from Top


def slot_box(slot: Slot, frame: LayoutFrame) -> BoundingBox:
    """Exact wall-thickness box of *slot*, enclosure-local."""
    box = slot_extent(slot, frame.slot_offsets, frame.wall_thickness)
    return frame.box_to_enclosure(box)


def _horizontal_axis(side: Side) -> int:
    plane, _ = SIDE_AXES[side]
    return plane[0]


def slot_geometry(slot: Slot, frame: LayoutFrame, config: EnclosureConfig) -> SlotGeometry:
    side = Side(slot.side)
    _, t = SIDE_AXES[side]
    box = slot_box(slot, frame)
    cutout = (
        BoxBuilder.from_axes([box])
        .delta_low(t, -EPSILON)
        .delta_high(t, EPSILON)
        .build()
    )

    split = frame.split_z
    band_top = split + config.lip_height
    cavity_top = band_top + config.tolerance / 2
    outer_z = frame.outer_dim[2]

    top_cut = cutout.clip_axis(2, split - EPSILON, outer_z + EPSILON)
    bottom_cut = cutout.clip_axis(2, -EPSILON, cavity_top + EPSILON)

    fill = notch = None
    crosses_band = box.origin[2] < band_top and box.max[2] > split
    if side in SIDE_WALLS and crosses_band:
        h = _horizontal_axis(side)
        margin = frame.wall_thickness
        trimmed = margin - config.tolerance / 2
        fill = (
            BoxBuilder.from_axes([box])
            .delta_low(h, -trimmed)
            .delta_high(h, trimmed)
            .override_low(2, split - EPSILON)
            .override_high(2, band_top)
            .build()
        )
        notch = (
            BoxBuilder.from_axes([cutout])
            .delta_low(h, -margin)
            .delta_high(h, margin)
            .override_low(2, split - EPSILON)
            .override_high(2, cavity_top)
            .build()
        )

    return SlotGeometry(slot, box, cutout, top_cut, bottom_cut, fill, notch)


def plan_slots(frame: LayoutFrame, config: EnclosureConfig) -> list:
    return [slot_geometry(s, frame, config) for s in config.slots]


def slot_cutouts(frame: LayoutFrame, config: EnclosureConfig, half: Half) -> list:
    """Solids to subtract from *half*."""
    cuts = []
    for geo in plan_slots(frame, config):
        if half == Half.TOP:
            if geo.notch is not None:
                cuts.append(box_solid(geo.notch))
            if geo.top_cut is not None:
                cuts.append(box_solid(geo.top_cut))
        elif geo.bottom_cut is not None:
            cuts.append(box_solid(geo.bottom_cut))
    log.debug("%d slot cutout(s) for %s half", len(cuts), Half(half).value)
    return cuts


def slot_fills(frame: LayoutFrame, config: EnclosureConfig, half: Half,
               shell: OpenSCADObject) -> list:
    """Solids to add to *half* after cutting; clipped to the shell, opening kept clear."""
    if half != Half.BOTTOM:
        return []
    fills = []
    for geo in plan_slots(frame, config):
        if geo.fill is None:
            continue
        fills.append(
            difference()(
                intersection()(box_solid(geo.fill), shell),
                box_solid(geo.cutout),
            )
        )
    return fills
