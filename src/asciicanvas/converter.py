import logging
from pathlib import Path

from PIL import Image, ImageDraw

from asciicanvas.charsets import select_glyph
from asciicanvas.codec import read_image, write_image
from asciicanvas.engine import GlyphRasterizer, RenderConfig
from asciicanvas.sampling import pixel_array, sample_grid

log = logging.getLogger(__name__)

DEFAULT_CONFIG = RenderConfig()


def image_to_glyphs(image: Image.Image, config: RenderConfig = DEFAULT_CONFIG) -> list[str]:
    """Pick one glyph per block. Returns one string per block row."""
    brightness = sample_grid(pixel_array(image), config.chunk_size)
    return ["".join(select_glyph(int(value), config.ramp) for value in row) for row in brightness]


def render(
    image: Image.Image,
    rasterizer: GlyphRasterizer,
    config: RenderConfig = DEFAULT_CONFIG,
) -> Image.Image:
    """Draw the glyph matrix of ``image`` onto a new canvas of the same size."""
    glyphs = image_to_glyphs(image, config)
    log.debug("rendering %dx%d image as %d block rows", image.width, image.height, len(glyphs))

    canvas = Image.new("RGBA", image.size, tuple(config.bg))
    draw = ImageDraw.Draw(canvas)
    cs = config.chunk_size
    for row, line in enumerate(glyphs):
        for col, char in enumerate(line):
            # Text is positioned by its baseline, not its top-left corner
            rasterizer.draw(draw, (col * cs, row * cs + rasterizer.ascent), char, config.fg)
    return canvas


def convert_file(
    input_path: str | Path,
    output_path: str | Path,
    rasterizer: GlyphRasterizer,
    config: RenderConfig = DEFAULT_CONFIG,
) -> Path:
    image = read_image(input_path)
    canvas = render(image, rasterizer, config)
    return write_image(canvas, output_path)
