import math

# Glyph ramps ordered from lightest (index 0) to densest
DENSITY = ".:coPO@$"

# Same ramp led by a blank so the darkest blocks leave the background untouched.
# Not selectable from the command line; pass it as RenderConfig.ramp.
DENSITY_SPACED = " " + DENSITY


def glyph_index(brightness: int, ramp_length: int) -> int:
    """Bucket a 0-255 brightness into one of ``ramp_length`` slots.

    Brightness 255 would land one past the end without the clamp.
    """
    if not 0 <= brightness <= 255:
        raise ValueError(f"brightness out of range [0, 255]: {brightness}")
    if ramp_length < 1:
        raise ValueError("ramp must contain at least one character")
    bucket = math.floor(brightness / 256 * ramp_length)
    return min(bucket, ramp_length - 1)


def select_glyph(brightness: int, ramp: str = DENSITY) -> str:
    return ramp[glyph_index(brightness, len(ramp))]
