from pathlib import Path

from PIL import Image, UnidentifiedImageError

from asciicanvas.errors import DecodeError, EncodeError

# Extension -> Pillow format used when encoding
FORMATS = {
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".png": "PNG",
}
ALLOWED_FORMATS = tuple(FORMATS)

# Pillow formats that can't store an alpha channel
_OPAQUE_FORMATS = {"JPEG"}


def is_allowed_format(path: str | Path) -> bool:
    return Path(path).suffix.lower() in FORMATS


def read_image(path: str | Path) -> Image.Image:
    """Decode an image file into RGBA, detecting the format from its contents."""
    path = Path(path)
    try:
        with Image.open(path) as image:
            return image.convert("RGBA")
    except UnidentifiedImageError as exc:
        raise DecodeError(path, "unrecognised image data") from exc
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(path, str(exc)) from exc


def write_image(image: Image.Image, path: str | Path) -> Path:
    """Encode an image in the format selected by the extension of ``path``."""
    path = Path(path)
    fmt = FORMATS.get(path.suffix.lower())
    if fmt is None:
        allowed = " | ".join(ALLOWED_FORMATS)
        raise EncodeError(path, f"format '{path.suffix}' is not an allowed output format, allowed formats: {allowed}")
    if fmt in _OPAQUE_FORMATS and image.mode != "RGB":
        image = image.convert("RGB")
    try:
        image.save(path, format=fmt)
    except (OSError, ValueError) as exc:
        raise EncodeError(path, str(exc)) from exc
    return path
