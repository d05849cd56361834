"""
Framebuffer + image loading.

A Framebuffer is a plain RGBA pixel grid (numpy uint8, shape HxWx4). The
loader reads the source file once and hands back a fresh buffer plus the
immutable ImageInfo used later for the size report.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import DecodeError


@dataclass
class Framebuffer:
    width: int
    height: int
    pixels: np.ndarray

    @classmethod
    def from_image(cls, img: Image.Image) -> "Framebuffer":
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        w, h = img.size
        pixels = np.array(img, dtype=np.uint8)
        return cls(w, h, pixels)

    def to_image(self, mode: str = "RGBA") -> Image.Image:
        img = Image.fromarray(self.pixels)
        if mode != "RGBA":
            img = img.convert(mode)
        return img

    def __len__(self) -> int:
        return int(self.pixels.size)

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)


@dataclass(frozen=True)
class ImageInfo:
    path: Path
    width: int
    height: int
    size: int


def stem_of(path: str | Path) -> str:
    """Base name without extension, used for every output file name."""
    return Path(path).stem


def load_image(path: str | Path) -> tuple[Framebuffer, ImageInfo]:
    """
    Decode an image file into an RGBA Framebuffer.

    The file is read exactly once; the byte count of that read is the
    original size reported for the file.

    Raises:
        DecodeError: missing/unreadable file, truncated data or a format
            Pillow cannot decode, or more pixels than Pillow's bomb limit.
    """
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as exc:
        raise DecodeError(f"cannot read file ({exc.strerror or exc})", p) from exc

    try:
        with Image.open(io.BytesIO(data)) as img:
            # full decode here so truncated files fail inside this block
            img.load()
            fb = Framebuffer.from_image(img)
    except UnidentifiedImageError as exc:
        raise DecodeError("not a supported image format", p) from exc
    except Image.DecompressionBombError as exc:
        raise DecodeError(f"image too large to decode ({exc})", p) from exc
    except (OSError, ValueError, SyntaxError) as exc:
        raise DecodeError(f"failed to decode image ({exc})", p) from exc

    return fb, ImageInfo(p, fb.width, fb.height, len(data))
