from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from PIL import ImageDraw

from asciicanvas.charsets import DENSITY
from asciicanvas.colour import DEFAULT_BG, DEFAULT_FG, Colour
from asciicanvas.sampling import CHUNK_SIZE


@dataclass(frozen=True)
class RenderConfig:
    fg: Colour = DEFAULT_FG
    bg: Colour = DEFAULT_BG
    ramp: str = DENSITY
    chunk_size: int = CHUNK_SIZE

    def __post_init__(self):
        if not self.ramp:
            raise ValueError("ramp must contain at least one character")
        if len(set(self.ramp)) != len(self.ramp):
            raise ValueError(f"ramp characters must be distinct: {self.ramp!r}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")


class GlyphRasterizer(Protocol):
    ascent: int  # distance from the top of a glyph cell to its baseline

    def draw(self, canvas: ImageDraw.ImageDraw, origin: tuple[int, int], char: str, fill: Colour) -> None:
        """Paint a single character with its baseline starting at ``origin``."""
        ...
