from pathlib import Path


class AsciiCanvasError(Exception):
    """Base class for errors raised by asciicanvas."""


class ArgumentError(AsciiCanvasError, ValueError):
    """Missing, conflicting or disallowed command line arguments."""


class DirectoryError(AsciiCanvasError, OSError):
    """An input directory can't be read or an output directory can't be created."""


class ImageError(AsciiCanvasError):
    """Reading or writing a single image failed."""

    action = "process"

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"failed to {self.action} image '{self.path}': {reason}")


class DecodeError(ImageError):
    action = "decode"


class EncodeError(ImageError):
    action = "encode"
