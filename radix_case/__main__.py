"""
radix-case — command line entry point.

Usage:
    python -m radix_case --part bottom-shell
    python -m radix_case --part top-shell --set display_tilt=20 --stl
    python -m radix_case --part button-cap --config my_case.json --out build/
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from radix_case.config import ConfigurationError, load_parameters, parameters_to_dict
from radix_case.parts import PARTS, build_part
from radix_case.scad import GeometryError, OpenScadNotFound, export_part

log = logging.getLogger(__name__)

EXIT_CONFIG = 2
EXIT_GEOMETRY = 3
EXIT_NO_OPENSCAD = 4


def _parse_override(text: str) -> tuple[str, str]:
    key, sep, value = text.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected key=value, got '{text}'")
    return key.strip(), value.strip()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="radix_case",
        description="Parametric CSG enclosure for the Delta Radix calculator → OpenSCAD",
    )
    p.add_argument("--part", required=True, choices=list(PARTS), help="Part to build")
    p.add_argument("--config", type=Path, default=None,
                   help="Parameter file (default: bundled delta_radix.json)")
    p.add_argument("--set", dest="overrides", type=_parse_override, action="append",
                   default=[], metavar="KEY=VALUE",
                   help="Override one measurement, e.g. display_tilt=20 or tessellation.hole=64")
    p.add_argument("--out", type=Path, default=Path("build"), help="Output directory")
    p.add_argument("--stl", action="store_true", help="Also render an STL with OpenSCAD")
    p.add_argument("--print-params", action="store_true",
                   help="Print primary and derived measurements as JSON")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        table = load_parameters(args.config, dict(args.overrides))
        if args.print_params:
            print(json.dumps(parameters_to_dict(table), indent=2))
        solid = build_part(args.part, table)
        scad_path, stl_path = export_part(args.part, solid, args.out, stl=args.stl)
    except ConfigurationError as e:
        log.error("%s", e)
        return EXIT_CONFIG
    except GeometryError as e:
        log.error("%s", e)
        return EXIT_GEOMETRY
    except OpenScadNotFound as e:
        log.error("%s", e)
        return EXIT_NO_OPENSCAD

    print(f"✅ Generated {args.part}: {scad_path}" + (f", {stl_path}" if stl_path else ""))
    return 0


if __name__ == "__main__":
    sys.exit(main())
