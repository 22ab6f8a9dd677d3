"""
PCBCase - Parameter schemas (Pydantic models).

These define exactly what a parameter set may contain and convert it into
the engine's EnclosureConfig.
"""
from pydantic import BaseModel, Field
from typing import Optional

from .engine.models import (
    Button, EnclosureConfig, HAlign, MountPost, MountPostRestriction, Side, Slot, TextDef, VAlign,
)


class SlotSchema(BaseModel):
    """A rectangular wall opening; corners lie in the plane of the side."""
    side: Side = Field(..., examples=["front"])
    corner1: tuple[float, float] = Field(..., examples=[(5.0, 0.0)])
    corner2: tuple[float, float] = Field(..., examples=[(14.3, 3.8)])
    label: str = ""


class MountPostSchema(BaseModel):
    center: tuple[float, float]
    diameter: float = Field(..., gt=0, description="Post diameter (mm), at most the hole diameter")


class MountPostRestrictionSchema(BaseModel):
    corner_a: tuple[float, float, float]
    corner_b: tuple[float, float, float]


class ButtonSchema(BaseModel):
    position: tuple[float, float]
    released_height: float = Field(..., description="Height of the released button top, PCB-local (mm)")
    rotation: float = Field(0.0, description="Hinge direction in degrees")


class TextSchema(BaseModel):
    position: tuple[float, float]
    text: str = Field(..., min_length=1)
    font: str = "Liberation Sans"
    size: float = Field(5.0, gt=0)
    halign: HAlign = HAlign.CENTER
    valign: VAlign = VAlign.CENTER
    rotation: float = 0.0


class EnclosureRequestSchema(BaseModel):
    """Full parameter set for one enclosure."""
    pcb_dimensions: tuple[float, float, float] = Field(..., examples=[(50.0, 30.0, 1.6)])
    pcb_components_bb: Optional[list[tuple[float, float, float]]] = Field(
        None, description="Points spanning the mounted components, PCB-local"
    )

    mount_posts: list[MountPostSchema] = Field(default=[])
    mount_post_restrictions: list[MountPostRestrictionSchema] = Field(default=[])
    slots: list[SlotSchema] = Field(default=[])
    buttons: list[ButtonSchema] = Field(default=[])
    texts: list[TextSchema] = Field(default=[])

    mount_posts_base_thickness_offset: float = Field(1.0, ge=0)
    pcb_offset: float = Field(1.0, ge=0, description="Gap between board and inner wall (mm)")
    wall_thickness: float = Field(2.0, ge=0)
    outer_corner_radius: float = Field(2.0, ge=0)
    inner_corner_radius: float = Field(1.0, ge=0)
    tolerance: float = Field(0.4, ge=0)
    button_tolerance: float = Field(0.2, ge=0)
    lip_height: float = Field(2.4, ge=0)
    text_depth: float = Field(0.4, ge=0)
    button_diameter: float = Field(10.0, gt=0)
    button_hinge_dimensions: tuple[float, float] = (3.0, 2.0)
    button_actuator_diameter: float = Field(3.0, gt=0)
    segments: int = Field(32, ge=3, le=256)


def config_from_schema(request: EnclosureRequestSchema) -> EnclosureConfig:
    """Build the engine configuration from a validated parameter set."""
    return EnclosureConfig(
        pcb_dimensions=tuple(request.pcb_dimensions),
        pcb_components_bb=(
            tuple(tuple(p) for p in request.pcb_components_bb)
            if request.pcb_components_bb else None
        ),
        mount_posts=tuple(
            MountPost(center=tuple(p.center), diameter=p.diameter) for p in request.mount_posts
        ),
        mount_post_restrictions=tuple(
            MountPostRestriction(corner_a=tuple(r.corner_a), corner_b=tuple(r.corner_b))
            for r in request.mount_post_restrictions
        ),
        slots=tuple(
            Slot(side=s.side, corner1=tuple(s.corner1), corner2=tuple(s.corner2), label=s.label)
            for s in request.slots
        ),
        buttons=tuple(
            Button(position=tuple(b.position), released_height=b.released_height, rotation=b.rotation)
            for b in request.buttons
        ),
        texts=tuple(
            TextDef(
                position=tuple(t.position), text=t.text, font=t.font, size=t.size,
                halign=t.halign, valign=t.valign, rotation=t.rotation,
            )
            for t in request.texts
        ),
        mount_posts_base_thickness_offset=request.mount_posts_base_thickness_offset,
        pcb_offset=request.pcb_offset,
        wall_thickness=request.wall_thickness,
        outer_corner_radius=request.outer_corner_radius,
        inner_corner_radius=request.inner_corner_radius,
        tolerance=request.tolerance,
        button_tolerance=request.button_tolerance,
        lip_height=request.lip_height,
        text_depth=request.text_depth,
        button_diameter=request.button_diameter,
        button_hinge_dimensions=tuple(request.button_hinge_dimensions),
        button_actuator_diameter=request.button_actuator_diameter,
        segments=request.segments,
    )
