from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple


@dataclass(frozen=True)
class ProcessResult:
    """
    Outcome of resizing a single image.

    Frozen so batch code can collect results without worrying about later edits.
    """
    src_path: Path
    out_path: Optional[Path]  # None if the file was skipped
    src_size: Optional[Tuple[int, int]] = None
    out_size: Optional[Tuple[int, int]] = None
    skipped_reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.out_path is not None

    @property
    def overwrote_source(self) -> bool:
        return self.out_path is not None and self.out_path == self.src_path
