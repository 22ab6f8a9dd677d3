"""
PCBCase - CadQuery backend: evaluated solids match the CSG trees.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

cq = pytest.importorskip("cadquery")

from solid import circle, cube, cylinder, difference, linear_extrude, offset, rotate, square, translate

from pcbcase.engine.generator import build_bottom, build_top, generate_enclosure
from pcbcase.engine.layout import resolve_layout
from pcbcase.engine.models import Button, EnclosureConfig, MountPost, Side, Slot, TextDef
from pcbcase.engine.shell import build_shell, rounded_box
from pcbcase.engine.slots import slot_box
from pcbcase.render.cadquery_backend import export_parts, to_workplane


def _bounds(workplane):
    bb = workplane.val().BoundingBox()
    return (bb.xmin, bb.ymin, bb.zmin), (bb.xmax, bb.ymax, bb.zmax)


def test_translated_cube():
    lo, hi = _bounds(to_workplane(translate([1, 2, 3])(cube([4, 5, 6]))))
    assert lo == pytest.approx((1, 2, 3), abs=1e-3)
    assert hi == pytest.approx((5, 7, 9), abs=1e-3)


def test_rounded_box_keeps_its_size():
    lo, hi = _bounds(to_workplane(rounded_box((20, 10, 6), 2)))
    assert lo == pytest.approx((0, 0, 0), abs=0.1)
    assert hi == pytest.approx((20, 10, 6), abs=0.1)


def test_shell_matches_outer_dimensions():
    config = EnclosureConfig(pcb_dimensions=(50, 30, 1.6))
    frame = resolve_layout(config)
    shell = to_workplane(build_shell(frame, config))
    lo, hi = _bounds(shell)
    assert lo == pytest.approx((0, 0, 0), abs=0.1)
    assert hi == pytest.approx(frame.outer_dim, abs=0.1)
    # hollow: far less volume than the outer box
    ox, oy, oz = frame.outer_dim
    assert 0 < shell.val().Volume() < 0.8 * ox * oy * oz


def test_rotation_about_x():
    solid = to_workplane(rotate([90, 0, 0])(cube([1, 2, 3])))
    lo, hi = _bounds(solid)
    assert hi[1] - lo[1] == pytest.approx(3, abs=1e-3)
    assert hi[2] - lo[2] == pytest.approx(2, abs=1e-3)


def test_extruded_ring():
    ring = difference()(offset(r=1)(square([10, 10])), square([10, 10]))
    solid = to_workplane(linear_extrude(height=2)(ring))
    lo, hi = _bounds(solid)
    assert lo == pytest.approx((-1, -1, 0), abs=0.05)
    assert hi == pytest.approx((11, 11, 2), abs=0.05)
    assert solid.val().Volume() < 12 * 12 * 2 - 10 * 10 * 2 + 1e-6


def test_centered_cylinder():
    lo, hi = _bounds(to_workplane(cylinder(r=1, h=4, center=True)))
    assert lo[2] == pytest.approx(-2, abs=1e-3)
    assert hi[2] == pytest.approx(2, abs=1e-3)


def test_two_d_tree_is_rejected():
    with pytest.raises(ValueError):
        to_workplane(circle(r=2))


def test_export_parts(tmp_path):
    result = export_parts({"block": cube([2, 2, 2])}, str(tmp_path), prefix="t")
    assert os.path.basename(result["block"]) == "t_block.stl"
    assert os.path.exists(result["block"])


def test_full_enclosure_exports(tmp_path):
    config = EnclosureConfig(pcb_dimensions=(40, 25, 1.6))
    parts = generate_enclosure(config, assembled=False, export="bottom")
    result = export_parts(parts, str(tmp_path))
    assert os.path.getsize(result["bottom"]) > 0


# ── full enclosures ──────────────────────────────────────────────


def _featured_config(**kwargs):
    kwargs.setdefault("mount_posts", (MountPost((3.5, 3.5), 3.0),))
    kwargs.setdefault("slots", (Slot(Side.LEFT, (5, 0), (10, 2)),))
    kwargs.setdefault("buttons", (Button((40, 15), 4.0),))
    kwargs.setdefault("pcb_components_bb", ((0, 0, 0), (50, 30, 8)))
    return EnclosureConfig(
        pcb_dimensions=(50, 30, 1.6),
        **kwargs,
    )


def _volume(tree):
    return to_workplane(tree).val().Volume()


def _halves(config):
    frame = resolve_layout(config)
    return frame, to_workplane(build_top(frame, config)), to_workplane(build_bottom(frame, config))


def test_text_parts_evaluate():
    config = _featured_config(texts=(TextDef((20, 15), "ESP32"),))
    parts = generate_enclosure(config, assembled=False)

    texts = to_workplane(parts["texts"])
    lo, hi = _bounds(texts)
    assert lo[2] == pytest.approx(0, abs=1e-3)
    assert hi[2] == pytest.approx(config.text_depth, abs=1e-3)
    assert texts.val().Volume() > 0

    plain = generate_enclosure(_featured_config(), assembled=False)
    # the recess removes material from the lid
    assert _volume(parts["top"]) < _volume(plain["top"])


@pytest.mark.parametrize("features", [
    {"mount_posts": (), "slots": (), "buttons": ()},
    {},
])
def test_halves_do_not_overlap(features):
    _, top, bottom = _halves(_featured_config(**features))
    top_v = top.val().Volume()
    bottom_v = bottom.val().Volume()
    assert top_v > 0 and bottom_v > 0
    assert top.union(bottom).val().Volume() == pytest.approx(top_v + bottom_v, abs=0.5)


def test_halves_fill_the_shell_outline():
    config = _featured_config(mount_posts=(), slots=(), buttons=())
    frame, top, bottom = _halves(config)
    lo, hi = _bounds(top.union(bottom))
    assert lo == pytest.approx((0, 0, 0), abs=0.1)
    assert hi == pytest.approx(frame.outer_dim, abs=0.1)


def test_slot_in_top_leaves_bottom_untouched():
    # components cover the slot height so the layout does not change
    base = _featured_config(mount_posts=(), buttons=(), slots=())
    slotted = _featured_config(mount_posts=(), buttons=(), slots=(Slot(Side.RIGHT, (5, 5), (10, 7)),))
    assert resolve_layout(base) == resolve_layout(slotted)

    _, top, bottom = _halves(base)
    _, top_slotted, bottom_slotted = _halves(slotted)
    assert bottom_slotted.val().Volume() == pytest.approx(bottom.val().Volume(), rel=1e-6)
    assert top_slotted.val().Volume() < top.val().Volume()


def test_slot_in_bottom_leaves_top_untouched():
    comps = ((0, 0, -3), (50, 30, 8))
    base = _featured_config(mount_posts=(), buttons=(), slots=(), pcb_components_bb=comps)
    slotted = _featured_config(
        mount_posts=(), buttons=(), slots=(Slot(Side.FRONT, (10, -2), (20, -1)),),
        pcb_components_bb=comps,
    )
    assert resolve_layout(base) == resolve_layout(slotted)

    _, top, bottom = _halves(base)
    _, top_slotted, bottom_slotted = _halves(slotted)
    assert top_slotted.val().Volume() == pytest.approx(top.val().Volume(), rel=1e-6)
    assert bottom_slotted.val().Volume() < bottom.val().Volume()


def test_slot_across_the_split_is_open_in_both_halves():
    config = _featured_config(mount_posts=(), buttons=())
    frame, top, bottom = _halves(config)
    box = slot_box(config.slots[0], frame)
    x, y, _ = box.center
    for z in (box.origin[2] + 0.2, box.center[2], box.max[2] - 0.2):
        point = cq.Vector(x, y, z)
        assert not top.val().isInside(point)
        assert not bottom.val().isInside(point)
