from PIL import Image


class RecordingRasterizer:
    """Glyph rasterizer stub that records every draw call instead of painting."""

    def __init__(self, ascent=13):
        self.ascent = ascent
        self.calls = []

    def draw(self, canvas, origin, char, fill):
        self.calls.append((origin, char, fill))


def solid_image(width, height, colour=(128, 128, 128), mode="RGB"):
    return Image.new(mode, (width, height), colour)


def save_solid(path, width=20, height=20, colour=(200, 200, 200)):
    solid_image(width, height, colour).save(path)
    return path
