from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Placement:
    """Top-left offset of one image on the canvas."""

    x: int
    y: int


@dataclass(frozen=True)
class StitchItem:
    path: str
    placement: Placement


@dataclass(frozen=True)
class StitchRequest:
    # items are in paint order: a later item overwrites an earlier one
    items: Tuple[StitchItem, ...]
    output_path: str

    @property
    def image_paths(self) -> Tuple[str, ...]:
        return tuple(item.path for item in self.items)

    @property
    def placements(self) -> Tuple[Placement, ...]:
        return tuple(item.placement for item in self.items)


@dataclass(frozen=True)
class PlacedImage:
    path: str
    size: Tuple[int, int]
    placement: Placement


@dataclass(frozen=True)
class StitchResult:
    output_path: str
    canvas_size: Tuple[int, int]
    placed: Tuple[PlacedImage, ...]
