"""
PCBCase - Command line entry point.

    pcbcase params.json --out ./output --separated --backend cadquery

params.json holds an EnclosureRequestSchema; only pcb_dimensions is required.
"""
import argparse
import logging
import sys
from pathlib import Path

from .engine.generator import generate_enclosure
from .engine.importers import load_component_bbox
from .engine.models import ExportMode
from .render.scad import export_stl, write_scad
from .schemas import EnclosureRequestSchema, config_from_schema

BACKENDS = ("scad", "openscad", "cadquery")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pcbcase", description="Snap-fit PCB enclosure generator")
    p.add_argument("params", help="Path to the parameter JSON file")
    p.add_argument("--out", default="./output", help="Output directory")
    p.add_argument("--prefix", default="enclosure", help="File name prefix")
    p.add_argument("--backend", choices=BACKENDS, default="scad",
                   help="scad: write .scad only; openscad: compile to STL with openscad; "
                        "cadquery: evaluate and export STL with CadQuery")
    p.add_argument("--export", choices=[m.value for m in ExportMode], default=ExportMode.ALL.value,
                   help="Parts to emit")
    p.add_argument("--separated", action="store_true",
                   help="Lay the parts out for printing instead of assembled")
    p.add_argument("--components", default=None,
                   help="STEP/STL model of the populated board; replaces pcb_components_bb")
    p.add_argument("--components-at", nargs=3, type=float, default=(0.0, 0.0, 0.0),
                   metavar=("X", "Y", "Z"), help="Offset of the component model from the PCB origin")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def load_request(args) -> EnclosureRequestSchema:
    request = EnclosureRequestSchema.model_validate_json(Path(args.params).read_text())
    if args.components:
        bbox = load_component_bbox(args.components, tuple(args.components_at))
        request = request.model_copy(update={"pcb_components_bb": list(bbox)})
    return request


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    # pydantic ValidationError and InvalidConfiguration are both ValueErrors
    try:
        config = config_from_schema(load_request(args))
        parts = generate_enclosure(config, assembled=not args.separated, export=args.export)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.backend == "scad":
        result = write_scad(parts, args.out, args.prefix)
    elif args.backend == "openscad":
        result = export_stl(parts, args.out, args.prefix)
    else:
        from .render.cadquery_backend import export_parts
        result = export_parts(parts, args.out, args.prefix)

    for name, path in result.items():
        print(f"   {name}: {path}")
    return 0 if result else 1


if __name__ == "__main__":
    raise SystemExit(main())
