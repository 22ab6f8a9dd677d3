"""
PCBCase - End-to-end generation: part selection, layouts and parameter checks.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from solid import scad_render

from pcbcase.engine.generator import PRINT_GAP, build_bottom, build_top, generate_enclosure
from pcbcase.engine.layout import resolve_layout
from pcbcase.engine.models import (
    Button, EnclosureConfig, ExportMode, InvalidConfiguration, MountPost, Side, Slot, TextDef,
)


def _full_config(**kwargs):
    """An ESP32-sized board with one of every feature."""
    return EnclosureConfig(
        pcb_dimensions=(50, 30, 1.6),
        pcb_components_bb=((0, 0, 0), (50, 30, 8)),
        mount_posts=(MountPost((3.5, 3.5), 3.0), MountPost((46.5, 26.5), 3.0)),
        slots=(Slot(Side.FRONT, (20, 0), (29.3, 3.8), "USB-C"),),
        buttons=(Button((40, 15), 4.0),),
        texts=(TextDef((20, 15), "ESP32"),),
        **kwargs,
    )


def test_all_parts_assembled():
    parts = generate_enclosure(_full_config())
    assert set(parts) == {"top", "bottom", "texts", "pcb"}


def test_no_texts_part_without_texts():
    parts = generate_enclosure(EnclosureConfig(pcb_dimensions=(50, 30, 1.6)))
    assert set(parts) == {"top", "bottom", "pcb"}


@pytest.mark.parametrize("mode, expected", [
    (ExportMode.TOP, {"top"}),
    (ExportMode.BOTTOM, {"bottom"}),
    (ExportMode.TEXTS, {"texts"}),
    ("top", {"top"}),
])
def test_export_selects_parts(mode, expected):
    assert set(generate_enclosure(_full_config(), export=mode)) == expected


def test_separated_layout_has_no_ghost():
    parts = generate_enclosure(_full_config(), assembled=False)
    assert set(parts) == {"top", "bottom", "texts"}


def test_separated_top_is_flipped_beside_bottom():
    config = _full_config()
    frame = resolve_layout(config)
    ox, oy, oz = frame.outer_dim

    parts = generate_enclosure(config, assembled=False)
    top = parts["top"]
    assert top.params["v"] == pytest.approx([ox + PRINT_GAP, oy, oz])
    assert top.children[0].params["a"] == [180, 0, 0]

    alone = generate_enclosure(config, assembled=False, export=ExportMode.TOP)["top"]
    assert alone.params["v"] == pytest.approx([0.0, oy, oz])


def test_separated_texts_lie_on_the_bed():
    config = _full_config()
    frame = resolve_layout(config)
    _, oy, oz = frame.outer_dim
    texts = generate_enclosure(config, assembled=False)["texts"]
    assert texts.params["v"] == pytest.approx([0, -(oy + PRINT_GAP), -(oz - config.text_depth)])


def test_generation_is_deterministic():
    config = _full_config()
    first = {k: scad_render(v) for k, v in generate_enclosure(config).items()}
    second = {k: scad_render(v) for k, v in generate_enclosure(config).items()}
    assert first == second


def test_top_and_bottom_structure():
    config = _full_config()
    frame = resolve_layout(config)
    top = build_top(frame, config)
    bottom = build_bottom(frame, config)

    assert top.name == "union"
    body = top.children[0]
    assert body.name == "difference"
    assert body.children[0].name == "intersection"
    # posts and actuator added after cutting
    assert len(top.children) == 3

    assert bottom.name == "union"
    assert bottom.children[0].children[0].name == "union"


def test_scad_output_mentions_features():
    source = scad_render(generate_enclosure(_full_config())["top"])
    for keyword in ("difference", "hull", "linear_extrude", "text", "cylinder"):
        assert keyword in source
    assert "$fn = 32" in source


@pytest.mark.parametrize("kwargs", [
    {"pcb_dimensions": (50, 30)},
    {"pcb_dimensions": (50, 0, 1.6)},
    {"pcb_dimensions": (50, 30, 1.6), "wall_thickness": -1.0},
    {"pcb_dimensions": (50, 30, 1.6), "tolerance": -0.1},
    {"pcb_dimensions": (50, 30, 1.6), "button_tolerance": -0.1},
    {"pcb_dimensions": (50, 30, 1.6), "button_actuator_diameter": 10.0},
    {"pcb_dimensions": (50, 30, 1.6), "outer_corner_radius": 4.0},
    {"pcb_dimensions": (50, 30, 1.6), "inner_corner_radius": -1.0},
    # below half the outer height (3.8) but the cavity is only 3.6 high
    {"pcb_dimensions": (50, 30, 1.6), "inner_corner_radius": 2.0},
    {"pcb_dimensions": (50, 30, 1.6), "inner_corner_radius": 3.7},
])
def test_invalid_configuration(kwargs):
    with pytest.raises(InvalidConfiguration):
        generate_enclosure(EnclosureConfig(**kwargs))


def test_invalid_configuration_is_a_value_error():
    with pytest.raises(ValueError):
        generate_enclosure(EnclosureConfig(pcb_dimensions=()))


def test_degenerate_but_valid_input_is_accepted():
    # post wider than a typical hole and a zero-size slot still generate
    config = EnclosureConfig(
        pcb_dimensions=(50, 30, 1.6),
        mount_posts=(MountPost((10, 10), 8.0),),
        slots=(Slot(Side.REAR, (5, 0), (5, 0)),),
        tolerance=0.0,
    )
    parts = generate_enclosure(config)
    assert "top" in parts and "bottom" in parts
