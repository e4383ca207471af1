# imgstitch/stitching/validate.py
from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from PIL import Image, UnidentifiedImageError

from imgstitch.stitching.core import default_output_path
from imgstitch.stitching.defaults import DEFAULT_COORDINATE, MAX_COORDINATE
from imgstitch.stitching.errors import CommandLineError, ImageFormatError, ParsingError
from imgstitch.stitching.request import Placement, StitchItem, StitchRequest

_UNSIGNED = re.compile(r"\+?[0-9]+", re.ASCII)


def parse_coordinate(raw: str, flag: str) -> int:
    """Parse one coordinate as an unsigned 64-bit integer."""
    if not _UNSIGNED.fullmatch(raw):
        raise ParsingError(f"invalid value '{raw}' for {flag}: expected a non-negative integer")
    value = int(raw)
    if value > MAX_COORDINATE:
        raise ParsingError(f"invalid value '{raw}' for {flag}: number too large (max {MAX_COORDINATE})")
    return value


def _coordinates(values: Optional[Sequence[str]], flag: str, expected: int) -> List[int]:
    # Omitting the flag entirely puts every image at 0 on that axis; an omitted
    # flag is never reported as "specified 0 times".
    if values is None:
        values = [DEFAULT_COORDINATE] * expected

    if len(values) != expected:
        raise CommandLineError(f"{flag} specified {len(values)} times, expected {expected}")

    return [parse_coordinate(v, flag) for v in values]


def probe_image(path: str | Path) -> Tuple[int, int]:
    """
    Check that `path` is an existing file Pillow can identify; return its size.
    Only the header is read here, the pixels are decoded later by the compositor.
    """
    p = Path(path)
    if not p.is_file():
        raise CommandLineError(f"file does not exist: '{path}'")
    try:
        with Image.open(p) as img:
            return img.size
    except UnidentifiedImageError as e:
        raise ImageFormatError(str(e)) from e
    except (OSError, Image.DecompressionBombError) as e:
        raise ImageFormatError(f"cannot read image file '{path}': {e}") from e


def validate_args(
    *,
    x_values: Optional[Sequence[str]],
    y_values: Optional[Sequence[str]],
    output: Optional[str],
    images: Sequence[str],
) -> StitchRequest:
    """
    Turn raw command-line values into a StitchRequest.

    Order of checks (first failure wins):
      1. -x count, 2. -x values, 3. -y count, 4. -y values,
      5. each image exists and is decodable, in input order.

    x[i] and y[i] belong to images[i]; the pairing is by index only.
    """
    expected = len(images)
    xs = _coordinates(x_values, "-x", expected)
    ys = _coordinates(y_values, "-y", expected)

    for path in images:
        probe_image(path)

    items = tuple(
        StitchItem(path=str(path), placement=Placement(x=x, y=y))
        for path, x, y in zip(images, xs, ys)
    )
    output_path = output if output is not None else default_output_path(images)
    return StitchRequest(items=items, output_path=output_path)
