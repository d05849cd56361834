"""
Conversion options.

One frozen ConvertOptions is built from the command line and passed to every
pipeline call; per-call tweaks go through merge(), which returns a copy.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path

from .encoders import DEFAULT_BUFSIZE, JpegOptions

DEFAULT_OUTPUT = "dist"
DEFAULT_QUALITY = 75


@dataclass(frozen=True)
class ConvertOptions:
    output: Path = Path(DEFAULT_OUTPUT)
    bufsize: int = DEFAULT_BUFSIZE
    progressive: bool = False
    quality: int = DEFAULT_QUALITY
    inline: bool = False
    quiet: bool = False

    def __post_init__(self):
        if not isinstance(self.output, Path):
            object.__setattr__(self, "output", Path(self.output))

    @property
    def jpeg(self) -> JpegOptions:
        return JpegOptions(quality=self.quality, progressive=self.progressive, bufsize=self.bufsize)

    def merge(self, **overrides) -> "ConvertOptions":
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise TypeError(f"unknown option(s): {', '.join(unknown)}")
        if not overrides:
            return self
        return replace(self, **overrides)
