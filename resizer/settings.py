from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Optional, Tuple, Union

from .errors import ArgumentError


# Batch output lands here when no --output-dir is given.
DEFAULT_BATCH_SUBDIR = "resized"


@dataclass(frozen=True)
class ResizeRequest:
    """
    How big the output should be: a uniform scale factor OR an exact size.

    Exactly one of the two is set. The WIDTHxHEIGHT string is parsed once,
    before any file is opened; only the scale needs each image's native size.
    """

    # The CLI passes a Decimal so the factor typed on the command line stays exact.
    scale: Optional[Union[float, Decimal]] = None
    target_size: Optional[Tuple[int, int]] = None

    def __post_init__(self) -> None:
        if (self.scale is None) == (self.target_size is None):
            raise ArgumentError(
                "Provide exactly one of --scale or --dimensions.",
                "scale and target size are mutually exclusive and one is required",
            )

        if self.scale is not None and not (math.isfinite(self.scale) and self.scale > 0):
            raise ArgumentError(
                f"Invalid scale factor {self.scale}.",
                "scale must be a positive, finite decimal number",
            )


@dataclass(frozen=True)
class SourceSpec:
    single_path: Optional[Path] = None
    batch_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        if (self.single_path is None) == (self.batch_dir is None):
            raise ArgumentError(
                "Provide exactly one of --input or --batch.",
                "single-file and batch sources are mutually exclusive and one is required",
            )

    @property
    def is_batch(self) -> bool:
        return self.batch_dir is not None


@dataclass(frozen=True)
class OutputSpec:
    # Single mode only. None means overwrite the input file.
    output_path: Optional[Path] = None
    # Batch mode only. None means <batch_dir>/resized.
    output_dir: Optional[Path] = None

    def check_against(self, source: SourceSpec) -> None:
        if source.is_batch and self.output_path is not None:
            raise ArgumentError(
                "--output cannot be used with --batch.",
                "use --output-dir to choose where batch results are written",
            )
        if not source.is_batch and self.output_dir is not None:
            raise ArgumentError(
                "--output-dir cannot be used with --input.",
                "use --output to choose where the resized file is written",
            )

    def batch_destination(self, batch_dir: Path) -> Path:
        if self.output_dir is not None:
            return self.output_dir
        return Path(batch_dir) / DEFAULT_BATCH_SUBDIR
