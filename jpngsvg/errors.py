"""
Error kinds raised by the conversion pipeline.

Every error remembers the source file it belongs to so the batch driver can
report it and move on to the next file.
"""

from __future__ import annotations

from pathlib import Path


class ConversionError(Exception):
    def __init__(self, message: str, path: str | Path | None = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None

    def __str__(self) -> str:
        msg = super().__str__()
        if self.path is None:
            return msg
        return f"{self.path}: {msg}"


class DecodeError(ConversionError):
    """Source file is missing, unreadable, truncated or not an image."""


class EncodeError(ConversionError):
    """The JPEG or PNG encoder rejected its parameters or failed."""


class OutputError(ConversionError, OSError):
    """Creating the output directory or writing a result file failed."""
