"""
jpngsvg command line.

    jpngsvg "images/**/*.png" -o dist -q 80 --progressive
    jpngsvg logo.png --inline

For every input <name>.<ext> writes <output>/<name>.jpg, <name>-alpha.png and
<name>.svg (only the .svg with --inline), then prints the size difference
against the source file.
"""

from __future__ import annotations

import argparse
import math
import sys
from pathlib import Path
from typing import Optional, Sequence

from tqdm import tqdm

from .batch import expand_glob, run_batch
from .config import DEFAULT_OUTPUT, DEFAULT_QUALITY, ConvertOptions
from .encoders import DEFAULT_BUFSIZE
from .pipeline import ConversionResult, ProgressEvent, Stage

PROG = "jpngsvg"


# ============================================================
# Logging helpers
# ============================================================

BYTE_UNITS = ["B", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB"]


def format_bytes(n: int, signed: bool = False) -> str:
    """Human readable decimal size: 999 B, 1.5 kB, 12.3 MB."""
    sign = "-" if n < 0 else ("+" if signed and n > 0 else "")
    n = abs(n)
    if n < 1:
        return f"{sign}0 B"
    exp = min(int(math.floor(math.log10(n) / 3)), len(BYTE_UNITS) - 1)
    value = float(f"{n / 1000 ** exp:.3g}")
    # 999950 rounds to 1000 kB, which is 1 MB
    if value >= 1000 and exp < len(BYTE_UNITS) - 1:
        exp += 1
        value = float(f"{n / 1000 ** exp:.3g}")
    return f"{sign}{value:g} {BYTE_UNITS[exp]}"


class ConsoleReporter:
    """Prints per-file progress with a tqdm stage bar; silent when quiet."""

    def __init__(self, quiet: bool = False, stream=None):
        self.quiet = quiet
        self.stream = stream
        self.bar: Optional[tqdm] = None

    def log(self, msg: str = "") -> None:
        if self.quiet:
            return
        tqdm.write(msg, file=self.stream)

    def file_started(self, path: Path, index: int, total: int) -> None:
        self.log(f"[{index + 1}/{total}] {path.resolve()}")
        self.bar = tqdm(
            total=len(Stage),
            desc="Starting",
            unit="step",
            leave=False,
            disable=self.quiet,
            file=self.stream,
        )

    def progress(self, event: ProgressEvent) -> None:
        if self.bar is None:
            return
        if event.done:
            self.bar.update(1)
        else:
            self.bar.set_description(event.stage.value)

    def _close_bar(self) -> None:
        if self.bar is not None:
            self.bar.close()
            self.bar = None

    def file_done(self, result: ConversionResult) -> None:
        self._close_bar()
        diff = result.diff_size
        verdict = "smaller" if diff <= 0 else "larger"
        self.log(
            f"  ✓ {format_bytes(result.original_size)} -> {format_bytes(result.result_size)} "
            f"({format_bytes(diff, signed=True)}, {verdict})"
        )
        self.log()

    def file_failed(self, path: Path, error: BaseException) -> None:
        self._close_bar()
        msg = str(error)
        if str(path) not in msg:
            msg = f"{path}: {msg}"
        # failures are reported even with --quiet
        print(f"[{PROG}] Failed: {msg}", file=sys.stderr, flush=True)
        self.log()


# ============================================================
# Args
# ============================================================

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog=PROG,
        description="Split images with transparency into JPEG color + PNG alpha mask, wrapped in an SVG.",
    )
    ap.add_argument("pattern", nargs="?", default=None,
                    help="glob pattern of input images (quote it to keep the shell from expanding it)")
    ap.add_argument("-o", "--output", default=DEFAULT_OUTPUT,
                    help=f"output folder (default: {DEFAULT_OUTPUT})")
    ap.add_argument("-b", "--bufsize", type=int, default=DEFAULT_BUFSIZE,
                    help=f"JPEG write buffer size in bytes (default: {DEFAULT_BUFSIZE})")
    ap.add_argument("-p", "--progressive", action="store_true",
                    help="progressive JPEG compression")
    ap.add_argument("-q", "--quality", type=int, default=DEFAULT_QUALITY,
                    help=f"JPEG compression quality 1-100 (default: {DEFAULT_QUALITY})")
    ap.add_argument("-i", "--inline", action="store_true",
                    help="inline both images into the SVG as base64 data URLs")
    ap.add_argument("-Q", "--quiet", action="store_true",
                    help="do not log the progress")
    return ap


def options_from_args(args: argparse.Namespace) -> ConvertOptions:
    return ConvertOptions(
        output=Path(args.output),
        bufsize=args.bufsize,
        progressive=args.progressive,
        quality=args.quality,
        inline=args.inline,
        quiet=args.quiet,
    )


# ============================================================
# Main
# ============================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    options = options_from_args(args)
    reporter = ConsoleReporter(quiet=options.quiet)

    if not args.pattern:
        reporter.log("No glob pattern provided, nothing to convert.")
        reporter.log()
        ap.print_help()
        return 0

    files = expand_glob(args.pattern)
    if not files:
        reporter.log("No files found")
        return 0

    reporter.log(f"Found {len(files)} image(s):")
    reporter.log()

    summary = run_batch(files, options, reporter)

    if len(files) > 1:
        reporter.log(
            f"{len(summary.results)} converted, {len(summary.failures)} failed, "
            f"{format_bytes(summary.original_size)} -> {format_bytes(summary.result_size)} "
            f"({format_bytes(summary.diff_size, signed=True)})"
        )
    # per-file failures never change the exit code
    return 0


if __name__ == "__main__":
    sys.exit(main())
