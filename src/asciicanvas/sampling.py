import math

import numpy as np
from PIL import Image

# Perceptual weights for R, G, B
LUMA = (0.299, 0.587, 0.114)
LUMA_WEIGHTS = np.array(LUMA)

# Channels are held at 16 bits (8-bit value * 257); dividing by this maps back to 0-255
CHANNEL_SCALE = 256

CHUNK_SIZE = 10


def luminance(r: float, g: float, b: float) -> float:
    wr, wg, wb = LUMA
    return r * wr + g * wg + b * wb


def block_counts(width: int, height: int, chunk_size: int = CHUNK_SIZE) -> tuple[int, int]:
    """Return (rows, cols) of blocks covering a width x height grid, edge blocks included."""
    return math.ceil(height / chunk_size), math.ceil(width / chunk_size)


def pixel_array(image: Image.Image) -> np.ndarray:
    """Convert an image to a (H, W, 3) float64 array of 16-bit channel values.

    Colours are alpha-premultiplied, so fully transparent pixels read as black.
    """
    premultiplied = image.convert("RGBA").convert("RGBa")
    arr = np.asarray(premultiplied, dtype=np.float64)[:, :, :3]
    return arr * 257


def sample_block(arr: np.ndarray, row_chunk: int, col_chunk: int, chunk_size: int = CHUNK_SIZE) -> int:
    """Average brightness of one block, truncated to 0-255.

    Blocks on the bottom and right edges only average the pixels that exist.
    """
    height, width = arr.shape[:2]
    y0 = row_chunk * chunk_size
    x0 = col_chunk * chunk_size
    if row_chunk < 0 or col_chunk < 0 or y0 >= height or x0 >= width:
        raise IndexError(f"block ({row_chunk}, {col_chunk}) is outside a {width}x{height} grid")

    total = 0.0
    count = 0
    for y in range(y0, min(y0 + chunk_size, height)):
        for x in range(x0, min(x0 + chunk_size, width)):
            r, g, b = arr[y, x]
            total += luminance(r, g, b)
            count += 1
    return int(total / CHANNEL_SCALE / count)


def sample_grid(arr: np.ndarray, chunk_size: int = CHUNK_SIZE) -> np.ndarray:
    """Sample every block at once. Returns uint8 array of shape (rows, cols)."""
    height, width = arr.shape[:2]
    if height == 0 or width == 0:
        return np.zeros((0, 0), dtype=np.uint8)

    lum = arr @ LUMA_WEIGHTS  # (H, W)
    row_starts = np.arange(0, height, chunk_size)
    col_starts = np.arange(0, width, chunk_size)

    sums = np.add.reduceat(np.add.reduceat(lum, row_starts, axis=0), col_starts, axis=1)
    row_sizes = np.diff(np.append(row_starts, height))
    col_sizes = np.diff(np.append(col_starts, width))
    counts = np.outer(row_sizes, col_sizes)

    return (sums / CHANNEL_SCALE / counts).astype(np.uint8)
