import re
from typing import NamedTuple

# Width of "invalid input '" so the caret line lines up with the quoted input
_CARET_INDENT = 15

_RGB_PATTERN = re.compile(r"^(rgba?)\((.*)\)$", re.DOTALL)
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_HEX_DIGITS = "0123456789abcdefABCDEF"


class Colour(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 255


DEFAULT_FG = Colour(0xFF, 0xCF, 0x75)
DEFAULT_BG = Colour(0x00, 0x00, 0x00)


class ColourParseError(ValueError):
    """A colour string that couldn't be parsed.

    ``offset`` and ``length`` locate the offending substring of ``text``;
    ``offset`` is -1 when the error isn't tied to a position.
    """

    def __init__(self, text: str, message: str, offset: int = -1, length: int = 0):
        self.text = text
        self.message = message
        self.offset = offset
        self.length = length
        super().__init__(self.render())

    @property
    def span(self) -> tuple[int, int] | None:
        if self.offset < 0:
            return None
        return (self.offset, self.length)

    def render(self) -> str:
        """Message with a caret line pointing at the offending span."""
        if not self.text:
            return self.message
        header = f"invalid input '{self.text}': {self.message}"
        if self.offset < 0:
            return header
        pointer = " " * (_CARET_INDENT + self.offset) + "^" * max(self.length, 1)
        return f"{header}\n{pointer}"


def parse_colour(text: str) -> Colour:
    """Parse ``#RGB``, ``#RRGGBB``, ``rgb(r, g, b)`` or ``rgba(r, g, b, a)``."""
    if not text:
        raise ColourParseError(text, "empty color string")
    if text.startswith("rgb"):
        return parse_rgb(text)
    return parse_hex(text)


def parse_hex(text: str) -> Colour:
    if not text:
        raise ColourParseError(text, "empty color string")
    if text[0] != "#":
        raise ColourParseError(text, "hex color string has to start with '#'", 0, 1)
    if len(text) not in (4, 7):
        raise ColourParseError(text, "hex color string length has to be 3 or 6", 0, len(text))

    for i, char in enumerate(text[1:], start=1):
        if char not in _HEX_DIGITS:
            raise ColourParseError(text, f"invalid hex digit '{char}'", i, 1)

    if len(text) == 4:
        r, g, b = (int(nibble, 16) * 17 for nibble in text[1:])
    else:
        r, g, b = (int(text[i : i + 2], 16) for i in (1, 3, 5))
    return Colour(r, g, b, 255)


def parse_rgb(text: str) -> Colour:
    match = _RGB_PATTERN.match(text)
    if match is None:
        raise ColourParseError(text, "expected 'rgb(r, g, b)' or 'rgba(r, g, b, a)'", 0, len(text))

    content_start = match.start(2)
    content = match.group(2)
    tokens = content.split(",")
    if len(tokens) not in (3, 4):
        raise ColourParseError(
            text,
            f"expected 3 or 4 comma separated values, got {len(tokens)}",
            content_start,
            len(content),
        )

    values = []
    position = content_start
    for name, token in zip(("red", "green", "blue", "alpha"), tokens):
        stripped = token.strip()
        offset = position + len(token) - len(token.lstrip())
        position += len(token) + 1
        if not _INT_PATTERN.fullmatch(stripped):
            raise ColourParseError(text, f"invalid value '{stripped}' for {name}", offset, len(stripped))
        # More than three significant digits is out of range; int() also refuses very long strings
        if len(stripped.lstrip("+-").lstrip("0")) > 3:
            raise ColourParseError(text, f"value for {name} out of range [0, 255]", offset, len(stripped))
        value = int(stripped)
        if not 0 <= value <= 255:
            raise ColourParseError(
                text, f"value {value} for {name} out of range [0, 255]", offset, len(stripped)
            )
        values.append(value)

    return Colour(*values)
