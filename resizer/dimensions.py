from __future__ import annotations

import math
from decimal import Decimal
from fractions import Fraction
from typing import TYPE_CHECKING, Tuple, Union

from .errors import ArgumentError, InvalidDimensionsFormat, InvalidHeight, InvalidWidth

if TYPE_CHECKING:
    from .settings import ResizeRequest


# Pixel sizes are unsigned 32-bit values.
MAX_DIMENSION = 2**32 - 1

DIMENSIONS_HINT = "Use WIDTHxHEIGHT, e.g., 800x600."


def parse_dimensions(text: str) -> Tuple[int, int]:
    """
    Parse "WIDTHxHEIGHT" into (width, height).

    Only a single literal "x" separator is accepted, and both sides must be
    plain unsigned integers ("800x600"). A leading "+" is tolerated; "-",
    whitespace and decimals are rejected.
    """
    parts = text.split("x")
    if len(parts) != 2:
        raise InvalidDimensionsFormat(
            f"Invalid dimensions format {text!r}. {DIMENSIONS_HINT}",
            f"expected exactly one 'x' separator, found {len(parts) - 1}",
        )

    width_text, height_text = parts
    width = _parse_side(width_text)
    if width is None:
        raise InvalidWidth(
            f"Invalid width value {width_text!r} in {text!r}. {DIMENSIONS_HINT}",
            "width must be an unsigned integer",
        )

    height = _parse_side(height_text)
    if height is None:
        raise InvalidHeight(
            f"Invalid height value {height_text!r} in {text!r}. {DIMENSIONS_HINT}",
            "height must be an unsigned integer",
        )

    return width, height


def _parse_side(token: str) -> int | None:
    # An optional leading "+" is allowed; "-" never is.
    digits = token[1:] if token.startswith("+") else token
    if not digits or not (digits.isascii() and digits.isdigit()):
        return None
    value = int(digits)
    if value > MAX_DIMENSION:
        return None
    return value


def resolve_dimensions(orig_width: int, orig_height: int, request: "ResizeRequest") -> Tuple[int, int]:
    """
    Target pixel size for an image of the given native size.

    A scale factor is applied to both axes and truncated toward zero
    (floor, not round). The product is computed exactly, so 90 * 0.7 gives
    63 rather than the 62 binary floating point would. An explicit target
    size is returned verbatim.
    """
    if request.scale is not None:
        scale = exact_scale(request.scale)
        return _scale_side(orig_width, scale), _scale_side(orig_height, scale)

    if request.target_size is None:
        raise ArgumentError(
            "Provide exactly one of --scale or --dimensions.",
            "the resize request has neither a scale nor a target size",
        )
    return request.target_size


def exact_scale(scale: Union[float, Decimal]) -> Fraction:
    """
    Scale factor as an exact fraction.

    A Decimal (what the CLI parses --scale into) converts exactly. A float is
    taken at its shortest decimal repr, so 0.7 means 7/10.
    """
    if isinstance(scale, Decimal):
        return Fraction(scale)
    return Fraction(repr(float(scale)))


def _scale_side(size: int, scale: Fraction) -> int:
    value = math.floor(size * scale)
    return min(max(value, 0), MAX_DIMENSION)
