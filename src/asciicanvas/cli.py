import argparse
import functools
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from asciicanvas.batch import DEFAULT_WORKERS, discover_jobs, ensure_output_dir, format_outcome, run_batch
from asciicanvas.codec import ALLOWED_FORMATS, is_allowed_format
from asciicanvas.colour import DEFAULT_BG, DEFAULT_FG, Colour, ColourParseError, parse_colour
from asciicanvas.converter import convert_file
from asciicanvas.engine import RenderConfig
from asciicanvas.errors import ArgumentError, AsciiCanvasError, DirectoryError
from asciicanvas.font import DEFAULT_FONT_SIZE, BitmapFont

log = logging.getLogger(__name__)

DEFAULT_FG_STRING = "#{:02X}{:02X}{:02X}".format(*DEFAULT_FG[:3])
DEFAULT_BG_STRING = "#{:02X}{:02X}{:02X}".format(*DEFAULT_BG[:3])

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PARTIAL = 2


@dataclass
class Options:
    input_path: Path
    output_path: Path
    is_dir: bool
    config: RenderConfig
    workers: int = DEFAULT_WORKERS
    font_path: Path | None = None
    font_size: int = DEFAULT_FONT_SIZE
    strict: bool = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="asciicanvas", description="Redraw images as ASCII art")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("-f", "--file", help="Input image path")
    source.add_argument("-d", "--dir", help="Input directory; every file in it is converted")
    parser.add_argument("-o", "--output", help="Output image path (default: out.<ext> next to the input)")
    parser.add_argument(
        "-O", "--output-dir", help="Output directory, created if missing (default: the input directory)"
    )
    parser.add_argument(
        "--fg", default=DEFAULT_FG_STRING, help=f"Foreground colour in HEX / RGB format (default: {DEFAULT_FG_STRING})"
    )
    parser.add_argument(
        "--bg", default=DEFAULT_BG_STRING, help=f"Background colour in HEX / RGB format (default: {DEFAULT_BG_STRING})"
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        default=DEFAULT_WORKERS,
        help=f"Parallel workers in directory mode (default: {DEFAULT_WORKERS})",
    )
    parser.add_argument("--font", default=None, help="TrueType/OpenType font file (default: Pillow's bundled font)")
    parser.add_argument(
        "--font-size", type=int, default=DEFAULT_FONT_SIZE, help=f"Font size in pixels (default: {DEFAULT_FONT_SIZE})"
    )
    parser.add_argument(
        "--strict", action="store_true", default=False, help="Exit with status 2 if any file in a directory fails"
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    return parser


def _ensure_format_allowed(path: Path, role: str) -> None:
    if not is_allowed_format(path):
        raise ArgumentError(
            f"format '{path.suffix}' is not an allowed {role} format, allowed formats: {' | '.join(ALLOWED_FORMATS)}"
        )


def resolve_options(args: argparse.Namespace) -> Options:
    """Validate parsed arguments and fill in defaults. Raises instead of exiting."""
    if args.workers < 1:
        raise ArgumentError(f"--workers must be at least 1, got {args.workers}")
    if args.font_size < 1:
        raise ArgumentError(f"--font-size must be at least 1, got {args.font_size}")

    if args.file:
        if args.output_dir:
            raise ArgumentError("--output-dir can only be used with --dir")
        input_path = Path(args.file)
        _ensure_format_allowed(input_path, "input")
        if args.output:
            output_path = Path(args.output)
            _ensure_format_allowed(output_path, "output")
        else:
            output_path = input_path.parent / f"out{input_path.suffix}"
            log.info("no output path provided, using %s as output file path", output_path)
        is_dir = False
    else:
        if args.output:
            raise ArgumentError("--output can only be used with --file")
        input_path = Path(args.dir)
        if args.output_dir:
            output_path = Path(args.output_dir)
        else:
            output_path = input_path
            log.info("no output path provided, using %s as output directory", output_path)
        is_dir = True

    fg = _parse_colour_arg(args.fg, "fg")
    bg = _parse_colour_arg(args.bg, "bg")

    return Options(
        input_path=input_path,
        output_path=output_path,
        is_dir=is_dir,
        config=RenderConfig(fg=fg, bg=bg),
        workers=args.workers,
        font_path=Path(args.font) if args.font else None,
        font_size=args.font_size,
        strict=args.strict,
    )


def _parse_colour_arg(value: str, name: str) -> Colour:
    try:
        return parse_colour(value)
    except ColourParseError as exc:
        raise ArgumentError(f"error parsing {name} color string:\n{exc}") from exc


def _load_font(options: Options) -> BitmapFont:
    try:
        return BitmapFont(options.font_path, options.font_size)
    except OSError as exc:
        raise ArgumentError(f"failed to load font '{options.font_path}': {exc}") from exc


def run_file(options: Options, font: BitmapFont) -> int:
    output_path = convert_file(options.input_path, options.output_path, font, options.config)
    log.info("processed '%s' -> wrote new image to '%s'", options.input_path, output_path)
    return EXIT_OK


def run_directory(options: Options, font: BitmapFont) -> int:
    if not options.input_path.is_dir():
        raise DirectoryError(f"input directory '{options.input_path}' does not exist or is not a directory")
    ensure_output_dir(options.output_path)
    jobs = discover_jobs(options.input_path, options.output_path)
    process = functools.partial(convert_file, rasterizer=font, config=options.config)
    outcomes = run_batch(jobs, process, workers=options.workers)

    for outcome in outcomes:
        print(format_outcome(outcome))
    failed = sum(1 for outcome in outcomes if not outcome.succeeded)
    print(f"{len(outcomes) - failed} of {len(outcomes)} images converted")

    if failed and options.strict:
        return EXIT_PARTIAL
    return EXIT_OK


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    try:
        options = resolve_options(args)
        font = _load_font(options)
        if options.is_dir:
            status = run_directory(options, font)
        else:
            status = run_file(options, font)
    except AsciiCanvasError as exc:
        log.error("%s", exc)
        sys.exit(EXIT_ERROR)
    sys.exit(status)
