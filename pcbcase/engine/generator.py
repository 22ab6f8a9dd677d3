"""
PCBCase - Core enclosure generator.

Composes shell, lip, slots, posts, buttons and texts into the Top and Bottom
solids and arranges them either assembled (preview) or separated on the
print bed. The result is a dict of named SolidPython trees; rendering and
file export are left to pcbcase.render.
"""
import logging
from typing import Optional

from solid import cube, difference, intersection, rotate, translate, union
from solid.solidpython import OpenSCADObject

from .buttons import button_actuators, button_cutouts
from .geometry import bounding_box_of
from .layout import LayoutFrame
from .lip import build_lip, build_lip_cavity, bottom_half_volume, top_half_volume
from .models import EnclosureConfig, ExportMode, Half
from .posts import build_posts
from .shell import build_shell
from .slots import slot_cutouts, slot_fills
from .texts import text_inserts, text_recesses
from .validation import validate_config

log = logging.getLogger(__name__)

# Space left between separated parts on the print bed (mm)
PRINT_GAP = 5.0


def build_top(frame: LayoutFrame, config: EnclosureConfig,
              shell: Optional[OpenSCADObject] = None) -> OpenSCADObject:
    """Top = ((Shell & TopVol) - lip cavity - slots - texts - buttons) + fills + posts + actuators."""
    shell = shell or build_shell(frame, config)
    body = difference()(
        intersection()(shell, top_half_volume(frame)),
        build_lip_cavity(frame, config),
        *slot_cutouts(frame, config, Half.TOP),
        *text_recesses(frame, config),
        *button_cutouts(frame, config),
    )
    additions = [
        *slot_fills(frame, config, Half.TOP, shell),
        build_posts(frame, config, Half.TOP),
        *button_actuators(frame, config),
    ]
    return union()(body, *[a for a in additions if a is not None])


def build_bottom(frame: LayoutFrame, config: EnclosureConfig,
                 shell: Optional[OpenSCADObject] = None) -> OpenSCADObject:
    """Bottom = (((Shell & BottomVol) + lip) - slots) + fills + posts."""
    shell = shell or build_shell(frame, config)
    body = difference()(
        union()(
            intersection()(shell, bottom_half_volume(frame)),
            build_lip(frame, config),
        ),
        *slot_cutouts(frame, config, Half.BOTTOM),
    )
    additions = [
        *slot_fills(frame, config, Half.BOTTOM, shell),
        build_posts(frame, config, Half.BOTTOM),
    ]
    return union()(body, *[a for a in additions if a is not None])


def build_pcb_ghost(frame: LayoutFrame, config: EnclosureConfig) -> OpenSCADObject:
    """Board and component volume in assembled position, for previews."""
    board = translate(list(frame.pcb_loc))(cube(list(config.pcb_dimensions)))
    if not config.pcb_components_bb:
        return board
    comp = frame.box_to_enclosure(bounding_box_of(config.pcb_components_bb))
    return union()(board, translate(list(comp.origin))(cube(list(comp.size))))


def _print_layout(parts: dict, frame: LayoutFrame, config: EnclosureConfig) -> dict:
    """Move parts from assembled position onto the print bed."""
    ox, oy, oz = frame.outer_dim
    laid_out = {}
    if "bottom" in parts:
        laid_out["bottom"] = parts["bottom"]
    if "top" in parts:
        # Flipped onto its outer face, beside the Bottom when both are printed
        dx = ox + PRINT_GAP if "bottom" in parts else 0.0
        laid_out["top"] = translate([dx, oy, oz])(rotate([180, 0, 0])(parts["top"]))
    if "texts" in parts:
        laid_out["texts"] = translate([0, -(oy + PRINT_GAP), -(oz - config.text_depth)])(
            parts["texts"]
        )
    return {name: laid_out[name] for name in ("top", "bottom", "texts") if name in laid_out}


def generate_enclosure(
    config: EnclosureConfig,
    assembled: bool = True,
    export: ExportMode = ExportMode.ALL,
) -> dict:
    """
    Main function: build the enclosure solids for *config*.

    Returns {"top": tree, "bottom": tree, "texts": tree, "pcb": tree}
    restricted to what *export* selects. "texts" is present only when the
    config declares texts, "pcb" only for an assembled preview of all parts.
    """
    export = ExportMode(export)
    frame = validate_config(config)
    shell = build_shell(frame, config)

    wanted = {
        ExportMode.ALL: ("top", "bottom", "texts"),
        ExportMode.TOP: ("top",),
        ExportMode.BOTTOM: ("bottom",),
        ExportMode.TEXTS: ("texts",),
    }[export]

    parts = {}
    if "top" in wanted:
        parts["top"] = build_top(frame, config, shell)
    if "bottom" in wanted:
        parts["bottom"] = build_bottom(frame, config, shell)
    if "texts" in wanted and config.texts:
        parts["texts"] = union()(*text_inserts(frame, config))

    if assembled:
        if export == ExportMode.ALL:
            parts["pcb"] = build_pcb_ghost(frame, config)
    else:
        parts = _print_layout(parts, frame, config)

    ox, oy, oz = frame.outer_dim
    log.info("[OK] Enclosure generated: %s", ", ".join(parts) or "nothing")
    log.info("   Inner: %.1f x %.1f x %.1f mm", *frame.inner_dim)
    log.info("   Outer: %.1f x %.1f x %.1f mm", ox, oy, oz)
    return parts
