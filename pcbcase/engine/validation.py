"""
PCBCase - Fail-fast checks for parameter sets that cannot describe an enclosure.

Only clearly nonsensical input is rejected. Physically infeasible but
well-formed input (posts wider than their holes, slots of zero extent,
restrictions swallowing whole posts) is accepted and simply produces
degenerate geometry.
"""
from .models import EnclosureConfig, InvalidConfiguration
from .layout import LayoutFrame, resolve_layout


def validate_config(config: EnclosureConfig, frame: LayoutFrame = None) -> LayoutFrame:
    """Raise InvalidConfiguration for unusable *config*; return its LayoutFrame."""
    dims = config.pcb_dimensions
    if not dims or len(dims) != 3:
        raise InvalidConfiguration(f"pcb_dimensions must be (x, y, z), got {dims!r}")
    if any(d <= 0 for d in dims):
        raise InvalidConfiguration(f"pcb_dimensions must be positive, got {tuple(dims)}")

    if config.wall_thickness < 0:
        raise InvalidConfiguration(f"wall_thickness must not be negative ({config.wall_thickness})")
    # Negative clearances are rejected rather than clamped.
    if config.tolerance < 0:
        raise InvalidConfiguration(f"tolerance must not be negative ({config.tolerance})")
    if config.button_tolerance < 0:
        raise InvalidConfiguration(f"button_tolerance must not be negative ({config.button_tolerance})")

    if config.button_actuator_diameter >= config.button_diameter:
        raise InvalidConfiguration(
            f"button_actuator_diameter ({config.button_actuator_diameter}) must be smaller "
            f"than button_diameter ({config.button_diameter})"
        )

    frame = frame or resolve_layout(config)
    # each rounded box must keep a flat core on every axis
    for name, dims, which in (
        ("outer_corner_radius", frame.outer_dim, "outer"),
        ("inner_corner_radius", frame.inner_dim, "inner"),
    ):
        radius = getattr(config, name)
        limit = min(dims) / 2
        if radius < 0:
            raise InvalidConfiguration(f"{name} must not be negative ({radius})")
        if radius >= limit:
            raise InvalidConfiguration(
                f"{name} ({radius}) must be below half the smallest {which} dimension ({limit:.3f})"
            )
    return frame
