# imgstitch/stitching/defaults.py
from __future__ import annotations

from typing import Final, Tuple

VERSION: Final = "1.0.0"

# Separator used when deriving the output path from the input paths.
OUTPUT_JOINER: Final = "-and-"

# Canvas pixels are always 8-bit RGBA.
CANVAS_MODE: Final = "RGBA"
CANVAS_CHANNELS: Final = 4
TRANSPARENT: Final[Tuple[int, int, int, int]] = (0, 0, 0, 0)

# Value a coordinate flag takes when it is omitted entirely.
DEFAULT_COORDINATE: Final = "0"

# Coordinates are unsigned 64-bit.
MAX_COORDINATE: Final = 2**64 - 1

# Largest canvas side the encoders take (signed 32-bit dimension fields).
MAX_CANVAS_SIDE: Final = 2**31 - 1
