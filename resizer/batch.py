from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from loguru import logger

from .engine import process_image
from .errors import DirectoryCreateError, DirectoryReadError, OpenError, ResizeError
from .results import ProcessResult
from .settings import ResizeRequest


@dataclass(frozen=True)
class BatchSummary:
    total_files: int
    processed: int
    skipped: int


def iter_entries(batch_dir: Path) -> List[Path]:
    """
    Regular files directly inside batch_dir, in whatever order the OS lists them.

    Subdirectories, symlinks to directories and special files are left out
    without being counted. Symlinks to regular files are kept.
    """
    batch_dir = Path(batch_dir)
    try:
        entries = list(batch_dir.iterdir())
    except OSError as e:
        raise DirectoryReadError(f"Failed to read the batch directory {batch_dir}", e) from e

    return [p for p in entries if p.is_file()]


def ensure_output_dir(output_dir: Path) -> None:
    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreateError(f"Failed to create the output directory {output_dir}", e) from e


def process_batch(
    batch_dir: Path,
    output_dir: Path,
    request: ResizeRequest,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> tuple[List[ProcessResult], BatchSummary]:
    """
    Resize every regular file in batch_dir into output_dir, keeping file names.

    A file that cannot be opened or saved is reported and skipped; the batch
    keeps going. Only an output directory that cannot be created (or a source
    directory that cannot be listed) stops the run, before any file is touched.
    """
    batch_dir = Path(batch_dir)
    output_dir = Path(output_dir)

    ensure_output_dir(output_dir)
    files = iter_entries(batch_dir)
    total = len(files)
    logger.debug(f"{total} file(s) to process in {batch_dir}")

    results: List[ProcessResult] = []
    processed = 0
    skipped = 0

    for idx, src_path in enumerate(files, start=1):
        if progress_callback:
            progress_callback(idx, total)

        r = _process_entry(src_path, output_dir, request)
        results.append(r)

        if r.ok:
            processed += 1
        else:
            skipped += 1

    summary = BatchSummary(total_files=total, processed=processed, skipped=skipped)
    return results, summary


def _process_entry(src_path: Path, output_dir: Path, request: ResizeRequest) -> ProcessResult:
    if not src_path.name:
        logger.warning(f"Skipping {src_path}: no file name to write the output under")
        return ProcessResult(src_path=src_path, out_path=None, skipped_reason="missing_file_name")

    out_path = output_dir / src_path.name

    try:
        r = process_image(src_path, request, out_path)
    except OpenError as e:
        logger.warning(f"Skipping {src_path.name}: {e.describe()}")
        return ProcessResult(src_path=src_path, out_path=None, skipped_reason=f"open_{e.kind.value}")
    except ResizeError as e:
        logger.warning(f"Skipping {src_path.name}: {e.describe()}")
        return ProcessResult(src_path=src_path, out_path=None, skipped_reason="save_failed")

    print(f"Resized {src_path} -> {r.out_path}")
    return r
