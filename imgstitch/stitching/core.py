from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from imgstitch.io.atomic_write import atomic_write_with
from imgstitch.stitching.defaults import CANVAS_CHANNELS, CANVAS_MODE, MAX_CANVAS_SIDE, OUTPUT_JOINER
from imgstitch.stitching.errors import CommandLineError, ImageFormatError, OutputIOError
from imgstitch.stitching.request import PlacedImage, Placement, StitchRequest, StitchResult

Size = Tuple[int, int]


def default_output_path(image_paths: Iterable[str | Path]) -> str:
    return OUTPUT_JOINER.join(str(p) for p in image_paths)


def decode_image(path: str | Path) -> Image.Image:
    """Fully decode `path` into an 8-bit RGBA image."""
    try:
        with Image.open(path) as img:
            img.load()
            return img.convert(CANVAS_MODE) if img.mode != CANVAS_MODE else img.copy()
    except FileNotFoundError as e:
        raise CommandLineError(f"file does not exist: '{path}'") from e
    except UnidentifiedImageError as e:
        raise ImageFormatError(str(e)) from e
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageFormatError(f"cannot decode image file '{path}': {e}") from e


def canvas_size(sizes: Sequence[Size], placements: Sequence[Placement]) -> Size:
    """
    Tight bound of all placed images:
      width  = max(x + w)
      height = max(y + h)
    No images -> (0, 0).
    """
    if len(sizes) != len(placements):
        raise ValueError(f"{len(sizes)} sizes for {len(placements)} placements")

    width = max((p.x + w for (w, _), p in zip(sizes, placements)), default=0)
    height = max((p.y + h for (_, h), p in zip(sizes, placements)), default=0)
    return width, height


def new_canvas(size: Size) -> np.ndarray:
    w, h = size
    if w > MAX_CANVAS_SIDE or h > MAX_CANVAS_SIDE:
        raise OutputIOError(f"canvas {w}×{h} is too large (max side {MAX_CANVAS_SIDE})")
    try:
        return np.zeros((h, w, CANVAS_CHANNELS), dtype=np.uint8)
    except (ValueError, MemoryError) as e:
        raise OutputIOError(f"cannot allocate a {w}×{h} canvas: {e}") from e


def _bounds_check(canvas: np.ndarray, rect: Tuple[int, int, int, int]) -> None:
    h, w = canvas.shape[:2]
    left, top, right, bottom = rect
    if left < 0 or top < 0 or right > w or bottom > h:
        raise ValueError(f"Rect out of bounds: {rect} for canvas size {w}×{h}")


def paint(canvas: np.ndarray, image: Image.Image, placement: Placement) -> None:
    """
    Copy every pixel of `image` into `canvas` at `placement`, channels verbatim.
    Whatever was there before is overwritten, alpha included (no blending).
    """
    if image.mode != CANVAS_MODE:
        image = image.convert(CANVAS_MODE)
    w, h = image.size
    left, top = placement.x, placement.y
    _bounds_check(canvas, (left, top, left + w, top + h))

    canvas[top:top + h, left:left + w] = np.asarray(image, dtype=np.uint8)


def composite(images: Sequence[Image.Image], placements: Sequence[Placement]) -> np.ndarray:
    """Paint `images` onto a fresh transparent canvas in order; the last one drawn wins."""
    size = canvas_size([img.size for img in images], placements)
    canvas = new_canvas(size)
    for img, placement in zip(images, placements):
        paint(canvas, img, placement)
    return canvas


def to_image(canvas: np.ndarray) -> Image.Image:
    h, w = canvas.shape[:2]
    if canvas.size == 0:
        return Image.new(CANVAS_MODE, (w, h))
    # (h, w, 4) uint8 maps to RGBA
    return Image.fromarray(canvas)


def output_format(path: str | Path) -> str:
    """Pillow format name for the extension of `path`, e.g. ".png" -> "PNG"."""
    ext = Path(path).suffix.lower()
    fmt = Image.registered_extensions().get(ext)
    if fmt is None or fmt not in Image.SAVE:
        raise OutputIOError(f"cannot determine output format from extension of '{path}'")
    return fmt


def save_canvas(canvas: np.ndarray, path: str | Path) -> None:
    fmt = output_format(path)
    h, w = canvas.shape[:2]
    if w == 0 or h == 0:
        raise OutputIOError(f"cannot encode an empty {w}×{h} canvas to '{path}'")

    img = to_image(canvas)
    try:
        atomic_write_with(path, lambda tmp: img.save(tmp, format=fmt))
    except (OSError, ValueError) as e:
        raise OutputIOError(f"cannot write '{path}': {e}") from e


def stitch(request: StitchRequest) -> StitchResult:
    """
    Decode, composite and save every image of `request`.

    An empty request composites to a 0×0 canvas, which no Pillow encoder can
    write: that raises OutputIOError and leaves no file. Use `composite([], [])`
    directly to get the empty canvas.
    """
    images = [decode_image(path) for path in request.image_paths]
    canvas = composite(images, request.placements)
    save_canvas(canvas, request.output_path)

    h, w = canvas.shape[:2]
    placed = tuple(
        PlacedImage(path=item.path, size=img.size, placement=item.placement)
        for item, img in zip(request.items, images)
    )
    return StitchResult(output_path=request.output_path, canvas_size=(w, h), placed=placed)
