import threading
from pathlib import Path

from PIL import ImageDraw, ImageFont

from asciicanvas.colour import Colour

DEFAULT_FONT_SIZE = 12


class BitmapFont:
    """Glyph rasterizer backed by a Pillow font.

    Uses the font bundled with Pillow unless ``font_path`` names a TrueType/OpenType
    file. Each thread loads its own font object so concurrent renders never share
    a FreeType face.
    """

    def __init__(self, font_path: str | Path | None = None, font_size: int = DEFAULT_FONT_SIZE):
        self.font_path = Path(font_path) if font_path is not None else None
        self.font_size = font_size
        self._local = threading.local()
        # Load once up front so a bad font path fails before any work starts
        self.ascent = _ascent(self.font)

    @property
    def font(self) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        font = getattr(self._local, "font", None)
        if font is None:
            font = self._load()
            self._local.font = font
        return font

    def _load(self):
        if self.font_path is None:
            return ImageFont.load_default(size=self.font_size)
        return ImageFont.truetype(str(self.font_path), self.font_size)

    def draw(self, canvas: ImageDraw.ImageDraw, origin: tuple[int, int], char: str, fill: Colour) -> None:
        x, baseline = origin
        canvas.text((x, baseline - self.ascent), char, fill=tuple(fill), font=self.font)


def _ascent(font) -> int:
    if hasattr(font, "getmetrics"):
        return font.getmetrics()[0]
    # Bitmap fonts have no metrics; treat the bottom of "M" as the baseline
    return font.getbbox("M")[3]
