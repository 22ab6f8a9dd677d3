"""
PCBCase - Standard connector openings (width x height in mm).

All measurements include a small tolerance (0.3mm) for printability. Round
connectors get a square opening of their diameter.
"""
from ..engine.models import Side, Slot

CONNECTOR_PROFILES = {
    "usb_a": {"width": 13.0, "height": 6.5, "label": "USB Type-A"},
    "usb_c": {"width": 9.3, "height": 3.8, "label": "USB Type-C"},
    "micro_usb": {"width": 8.0, "height": 3.5, "label": "Micro USB"},
    "mini_usb": {"width": 8.5, "height": 4.5, "label": "Mini USB"},
    "hdmi": {"width": 16.0, "height": 7.5, "label": "HDMI (full)"},
    "mini_hdmi": {"width": 11.5, "height": 5.5, "label": "Mini HDMI"},
    "jack_3_5": {"width": 6.5, "height": 6.5, "label": "3.5mm Jack (round)"},
    "barrel_jack": {"width": 8.5, "height": 8.5, "label": "Barrel Jack 5.5mm"},
    "rj45": {"width": 16.5, "height": 13.5, "label": "RJ45 (Ethernet)"},
    "sd_card": {"width": 12.5, "height": 2.5, "label": "SD card"},
}


def get_profile(connector_type: str) -> dict:
    """Get the opening profile for a connector type."""
    profile = CONNECTOR_PROFILES.get(connector_type)
    if not profile:
        raise ValueError(f"Unknown connector type: {connector_type}. Available: {list(CONNECTOR_PROFILES.keys())}")
    return profile


def list_connectors() -> list:
    """List all available connector types with labels."""
    return [
        {"type": key, "label": val["label"]}
        for key, val in CONNECTOR_PROFILES.items()
    ]


def connector_slot(connector_type: str, side: Side, center, rotated: bool = False) -> Slot:
    """
    Slot for a connector whose opening is centred on *center*.

    *center* is given in the plane of *side* (see Slot). The profile's width
    runs along the first plane axis unless *rotated*.
    """
    profile = get_profile(connector_type)
    w, h = profile["width"], profile["height"]
    if rotated:
        w, h = h, w
    u, v = center
    return Slot(
        side=Side(side),
        corner1=(u - w / 2, v - h / 2),
        corner2=(u + w / 2, v + h / 2),
        label=profile["label"],
    )
