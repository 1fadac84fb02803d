# rollermesh/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .construct import make_pattern_roller
from .errors import RollerMeshError
from .image import image_to_radii, load_image, resize_image
from .params import MAX_STACK, RollerParameters, derive_dimensions

logger = logging.getLogger(__name__)

_DEF_HELP = """
Examples:
  rollermesh pattern.png -d 30 --out roller.stl
  rollermesh pattern.png -l 80 -g 0.2 --sh 2 --sv 3
  rollermesh pattern.png -d 30 --pd 5 --pl 8 -o pinned.stl
  rollermesh pattern.png -d 30 --cd 8 -i
"""


def _stack_count(value: str) -> int:
    n = int(value)
    if not 1 <= n <= MAX_STACK:
        raise argparse.ArgumentTypeError(f"should be within 1..{MAX_STACK}")
    return n


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="rollermesh",
        description=(
            "Generate a binary STL of a cylindrical pattern roller with the input image etched onto its "
            "surface. Either length or diameter of the roller should be given; the other dimension follows "
            "from the image aspect ratio and stacking. Ends are flat, pinned or bored through."
        ),
        epilog=_DEF_HELP,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("filename", metavar="IMGFILE", help="Input image used as pattern")
    dims = p.add_mutually_exclusive_group(required=True)
    dims.add_argument("-d", "--diameter", dest="diameter", type=float, metavar="DIAM",
                      help="Roller body external diameter (length is auto calculated)")
    dims.add_argument("-l", "--length", dest="length", type=float, metavar="LEN",
                      help="Roller body length (diameter is auto calculated)")
    p.add_argument("-g", "--grid-step", dest="grid_step", type=float, metavar="STEP",
                   help="Distance between vertices on roller surface (input image is resized accordingly)")
    p.add_argument("-e", "--embossment-depth", dest="relief_depth", type=float, metavar="DEPTH",
                   help="Maximum depth of surface pattern")
    p.add_argument("--pin-diameter", "--pd", dest="pin_diameter", type=float, metavar="PDIAM",
                   help="Pin diameter (pins at both ends)")
    p.add_argument("--pin-length", "--pl", dest="pin_length", type=float, metavar="PLEN",
                   help="Pin length (pins at both ends)")
    p.add_argument("--channel-diameter", "--cd", dest="channel_diameter", type=float, metavar="CDIAM",
                   help="Channel diameter (coaxial cylindrical hole)")
    p.add_argument("-o", "--output", dest="output", metavar="STLFILE",
                   help="Output STL filename (default: IMGFILE.stl)")
    p.add_argument("--stack-vertical", "--sv", dest="stack_vertical", type=_stack_count, default=1,
                   metavar="SVTIMES", help="Stack copies of image vertically")
    p.add_argument("--stack-horizontal", "--sh", dest="stack_horizontal", type=_stack_count, default=1,
                   metavar="SHTIMES", help="Stack copies of image horizontally")
    p.add_argument("-p", "--pixelated", action="store_true",
                   help="Nearest-neighbor interpolation for image resize (requires --grid-step)")
    p.add_argument("-i", "--inverted", action="store_true", help="Invert image colors")
    p.add_argument("-v", "--verbose", action="store_true", help="Log generation details")
    return p


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = build_parser()
    args = p.parse_args(argv)
    if not args.filename:
        p.error("IMGFILE should not be empty")
    if args.output == "":
        p.error("STLFILE should not be empty")
    if (args.pin_diameter is None) != (args.pin_length is None):
        p.error("--pin-diameter and --pin-length should be given together")
    if args.pin_diameter is not None and args.channel_diameter is not None:
        p.error("--channel-diameter cannot be combined with pins")
    if args.pixelated and args.grid_step is None:
        p.error("--pixelated requires --grid-step")
    return args


def parameters_from_args(args: argparse.Namespace) -> RollerParameters:
    image = load_image(args.filename)
    dims = derive_dimensions(
        image.width,
        image.height,
        diameter=args.diameter,
        length=args.length,
        grid_step=args.grid_step,
        relief_depth=args.relief_depth,
        pin_diameter=args.pin_diameter,
        pin_length=args.pin_length,
        channel_diameter=args.channel_diameter,
        stack_horizontal=args.stack_horizontal,
        stack_vertical=args.stack_vertical,
    )
    if dims.resample:
        image = resize_image(image, dims.grid_width, dims.grid_height, args.pixelated)
    grid = image_to_radii(image, dims.min_radius, dims.max_radius, inverted=args.inverted)
    return dims.with_grid(grid)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s: %(message)s")
    output = args.output or args.filename + ".stl"
    try:
        params = parameters_from_args(args)
        print(params.summary())
        make_pattern_roller(params, output)
    except RollerMeshError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    logger.debug("saved roller STL to %s", output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
