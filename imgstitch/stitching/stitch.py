#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from .core import stitch
from .defaults import VERSION
from .errors import StitchError
from .validate import validate_args


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="stitch",
        description="Stitch images together onto one canvas at the given offsets.",
    )
    ap.add_argument(
        "-x", "-X", dest="x", action="append", metavar="X",
        help="X-coordinate of the next image (repeat once per image, default 0)",
    )
    ap.add_argument(
        "-y", "-Y", dest="y", action="append", metavar="Y",
        help="Y-coordinate of the next image (repeat once per image, default 0)",
    )
    ap.add_argument(
        "-o", "--output", default=None,
        help="Path of the created image. Defaults to the input paths joined with '-and-'.",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    ap.add_argument("images", nargs="+", metavar="IMAGE", help="Image to place, in paint order")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_parser()
    # -x/-y may be interleaved with the image paths they belong to
    args = ap.parse_intermixed_args(argv)

    try:
        request = validate_args(x_values=args.x, y_values=args.y, output=args.output, images=args.images)
        result = stitch(request)
    except StitchError as e:
        print(f"error[{e.kind.value}]: {e.message}", file=sys.stderr)
        return 1

    for placed in result.placed:
        w, h = placed.size
        print(f"{placed.path}\t{w}×{h} at ({placed.placement.x}, {placed.placement.y})")
    cw, ch = result.canvas_size
    print(f"Saved: {result.output_path}")
    print(f"Canvas: {cw}×{ch}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
