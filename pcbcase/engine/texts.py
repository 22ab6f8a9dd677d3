"""
PCBCase - Text plates: recesses in the top surface and the matching inserts.

Inserts are printed separately (another colour or material) and pressed into
the recesses, which are grown by half the tolerance for the fit.
"""
from solid import linear_extrude, offset, rotate, text, translate
from solid.solidpython import OpenSCADObject

from .geometry import EPSILON
from .layout import LayoutFrame
from .models import EnclosureConfig, HAlign, TextDef, VAlign


def glyphs(entry: TextDef, config: EnclosureConfig) -> OpenSCADObject:
    """2-D text of *entry*, rotated about its anchor."""
    return rotate([0, 0, entry.rotation])(
        text(
            entry.text,
            size=entry.size,
            font=entry.font,
            halign=HAlign(entry.halign).value,
            valign=VAlign(entry.valign).value,
            segments=config.segments,
        )
    )


def _anchor(entry: TextDef, frame: LayoutFrame, config: EnclosureConfig) -> list:
    x, y = frame.to_enclosure(tuple(entry.position))
    return [x, y, frame.outer_dim[2] - config.text_depth]


def text_recess(entry: TextDef, frame: LayoutFrame, config: EnclosureConfig) -> OpenSCADObject:
    profile = offset(r=config.tolerance / 2, segments=config.segments)(glyphs(entry, config))
    return translate(_anchor(entry, frame, config))(
        linear_extrude(height=config.text_depth + EPSILON)(profile)
    )


def text_insert(entry: TextDef, frame: LayoutFrame, config: EnclosureConfig) -> OpenSCADObject:
    """Insert sitting in its recess (assembled position)."""
    return translate(_anchor(entry, frame, config))(
        linear_extrude(height=config.text_depth)(glyphs(entry, config))
    )


def text_recesses(frame: LayoutFrame, config: EnclosureConfig) -> list:
    return [text_recess(t, frame, config) for t in config.texts]


def text_inserts(frame: LayoutFrame, config: EnclosureConfig) -> list:
    return [text_insert(t, frame, config) for t in config.texts]
