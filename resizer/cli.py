from __future__ import annotations

import argparse
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import NoReturn

from loguru import logger

from . import __version__
from .batch import process_batch
from .dimensions import parse_dimensions
from .engine import process_image
from .errors import ArgumentError, ResizeError
from .log import configure_logging
from .settings import OutputSpec, ResizeRequest, SourceSpec


EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that reports bad arguments as ArgumentError (exit 1, not 2)."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        raise ArgumentError("Invalid command line arguments.", message)


def _positive_decimal(text: str) -> Decimal:
    # Decimal keeps the typed factor exact; 0.7 stays 7/10.
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid scale factor: {text!r}")
    if not value.is_finite() or value <= 0:
        raise argparse.ArgumentTypeError(f"scale factor must be a positive number, got {text!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(
        prog="image-resizer",
        description=(
            "Resizes an image file (or every image in a folder) based on dimensions or scale "
            "and optionally saves it to a new file."
        ),
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # Source
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("-i", "--input", help="Input image file path")
    src.add_argument("-b", "--batch", help="Folder of images to resize (not recursive)")

    # Output
    p.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output image file path (default: OVERWRITES the input file)",
    )
    p.add_argument(
        "--output-dir",
        default=None,
        help="Output folder for --batch (default: <batch>/resized)",
    )

    # Size
    size = p.add_mutually_exclusive_group(required=True)
    size.add_argument(
        "-s",
        "--scale",
        type=_positive_decimal,
        default=None,
        help="Scale factor as a decimal, e.g. 0.5 for half size",
    )
    size.add_argument(
        "-d",
        "--dimensions",
        default=None,
        help="Exact size in WIDTHxHEIGHT format (e.g., 800x600); aspect ratio is not kept",
    )

    p.add_argument("-v", "--verbose", action="store_true", help="Print debug details to stderr")

    return p


def build_request(args: argparse.Namespace) -> tuple[SourceSpec, OutputSpec, ResizeRequest]:
    source = SourceSpec(
        single_path=Path(args.input) if args.input is not None else None,
        batch_dir=Path(args.batch) if args.batch is not None else None,
    )

    output = OutputSpec(
        output_path=Path(args.output) if args.output is not None else None,
        output_dir=Path(args.output_dir) if args.output_dir is not None else None,
    )
    output.check_against(source)

    # Dimensions are parsed once, before any file is opened.
    target_size = parse_dimensions(args.dimensions) if args.dimensions is not None else None
    request = ResizeRequest(scale=args.scale, target_size=target_size)

    return source, output, request


def run_single(source: SourceSpec, output: OutputSpec, request: ResizeRequest) -> int:
    if source.single_path is None:
        raise ArgumentError("Provide an input file with --input.", "no input path was given")
    r = process_image(source.single_path, request, output.output_path)
    print(f"Image resized and saved: {r.src_path} -> {r.out_path}")
    return EXIT_OK


def run_batch(source: SourceSpec, output: OutputSpec, request: ResizeRequest) -> int:
    if source.batch_dir is None:
        raise ArgumentError("Provide a folder with --batch.", "no batch directory was given")
    out_dir = output.batch_destination(source.batch_dir)

    _, summary = process_batch(source.batch_dir, out_dir, request)

    print(f"Batch complete: {summary.processed} processed, {summary.skipped} skipped.")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    configure_logging()

    try:
        parser = build_parser()
        args = parser.parse_args(argv)
        configure_logging(verbose=bool(args.verbose))

        source, output, request = build_request(args)

        if source.is_batch:
            return run_batch(source, output, request)
        return run_single(source, output, request)

    except ResizeError as e:
        logger.error(e.describe())
        return EXIT_FAILURE
    except KeyboardInterrupt:
        logger.error("Interrupted.\nReason: KeyboardInterrupt")
        return EXIT_INTERRUPTED
