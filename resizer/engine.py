from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from loguru import logger
from PIL import Image, UnidentifiedImageError

from .dimensions import resolve_dimensions
from .errors import OpenError, OpenErrorKind, SaveError
from .results import ProcessResult
from .settings import ResizeRequest


# Lanczos-class filter for every resize.
RESAMPLE = Image.Resampling.LANCZOS

PathLike = Union[str, Path]


def process_image(
    src_path: PathLike,
    request: ResizeRequest,
    output_path: Optional[PathLike] = None,
) -> ProcessResult:
    """
    Open one image, resize it to the requested size and save it.

    With no output_path the source file is overwritten in place. Nothing is
    staged in a temp file, so a crash mid-write can leave a truncated file
    where the original used to be.

    Raises OpenError or SaveError; the caller decides whether that is fatal.
    """
    src_path = Path(src_path)
    out_path = Path(output_path) if output_path is not None else src_path

    with open_image(src_path) as im:
        src_size = im.size
        new_size = resolve_dimensions(src_size[0], src_size[1], request)
        logger.debug(f"{src_path}: {src_size[0]}x{src_size[1]} -> {new_size[0]}x{new_size[1]}")
        resized = resize_exact(im, new_size[0], new_size[1])

    if output_path is None:
        logger.warning(f"No output path given, overwriting the original file {src_path}")

    try:
        save_image(resized, out_path)
    finally:
        resized.close()

    return ProcessResult(
        src_path=src_path,
        out_path=out_path,
        src_size=src_size,
        out_size=new_size,
    )


@contextmanager
def open_image(path: PathLike) -> Iterator[Image.Image]:
    """
    Open and fully decode an image, closing it when the block exits.

    Failures are raised as OpenError with a kind saying what went wrong.
    """
    path = Path(path)
    try:
        im = Image.open(path)
    except UnidentifiedImageError as e:
        raise OpenError(f"Failed to open image {path}", e, kind=OpenErrorKind.UNSUPPORTED) from e
    except Image.DecompressionBombError as e:
        raise OpenError(f"Failed to open image {path}", e, kind=OpenErrorKind.DECODE) from e
    except OSError as e:
        raise OpenError(f"Failed to open image {path}", e, kind=OpenErrorKind.IO) from e

    with im:
        try:
            im.load()
        except (OSError, SyntaxError, ValueError) as e:
            raise OpenError(f"Failed to decode image {path}", e, kind=OpenErrorKind.DECODE) from e

        yield im


def resize_exact(im: Image.Image, width: int, height: int) -> Image.Image:
    """
    Resample to exactly (width, height), ignoring aspect ratio.

    Always resamples, even when the size already matches.
    """
    try:
        return im.resize((width, height), RESAMPLE)
    except (ValueError, SystemError) as e:
        # Pillow refuses degenerate sizes such as 0x0; there is nothing to save.
        raise SaveError(f"Failed to resize image to {width}x{height}", e) from e


def save_image(im: Image.Image, path: PathLike) -> None:
    """Encode to path; Pillow picks the format from the file extension."""
    path = Path(path)
    try:
        im.save(path)
    except (OSError, ValueError, KeyError, SystemError) as e:
        raise SaveError(f"Failed to save the resized image to {path}", e) from e
