"""
Sequential batch driver: one file at a time, failures do not stop the batch.
"""

from __future__ import annotations

import glob
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Tuple

from .config import ConvertOptions
from .errors import ConversionError
from .pipeline import ConversionResult, ProgressEvent, convert_file


class BatchReporter(Protocol):
    def file_started(self, path: Path, index: int, total: int) -> None: ...
    def progress(self, event: ProgressEvent) -> None: ...
    def file_done(self, result: ConversionResult) -> None: ...
    def file_failed(self, path: Path, error: BaseException) -> None: ...


@dataclass
class BatchSummary:
    results: List[ConversionResult] = field(default_factory=list)
    failures: List[Tuple[Path, BaseException]] = field(default_factory=list)

    @property
    def original_size(self) -> int:
        return sum(r.original_size for r in self.results)

    @property
    def result_size(self) -> int:
        return sum(r.result_size for r in self.results)

    @property
    def diff_size(self) -> int:
        return self.result_size - self.original_size

    @property
    def ok(self) -> bool:
        return not self.failures


def expand_glob(pattern: str) -> List[str]:
    """Files matching ``pattern`` (``**`` allowed), in filesystem order."""
    return [p for p in glob.glob(pattern, recursive=True) if Path(p).is_file()]


def run_batch(
    files: Sequence[str | Path],
    options: ConvertOptions,
    reporter: Optional[BatchReporter] = None,
) -> BatchSummary:
    summary = BatchSummary()
    total = len(files)

    for i, f in enumerate(files):
        path = Path(f)
        if reporter is not None:
            reporter.file_started(path, i, total)
        try:
            result = convert_file(path, options, reporter.progress if reporter is not None else None)
        except (ConversionError, OSError) as exc:
            summary.failures.append((path, exc))
            if reporter is not None:
                reporter.file_failed(path, exc)
            continue
        summary.results.append(result)
        if reporter is not None:
            reporter.file_done(result)

    return summary
