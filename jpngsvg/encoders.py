"""
JPEG / PNG encoders with pluggable output sinks.

Both encoders produce the whole compressed buffer in memory first, then hand
it to the sink: ToFile streams it to disk in ``bufsize`` chunks, ToDataUrl
turns it into a base64 data URL for inlining into the SVG.
"""

from __future__ import annotations

import base64
import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .errors import EncodeError, OutputError
from .framebuffer import Framebuffer

IMAGE_JPEG = "image/jpeg"
IMAGE_PNG = "image/png"

DEFAULT_BUFSIZE = 4096


# ============================================================
# Options + sinks
# ============================================================

@dataclass(frozen=True)
class JpegOptions:
    quality: int = 75
    progressive: bool = False
    bufsize: int = DEFAULT_BUFSIZE


@dataclass(frozen=True)
class ToFile:
    path: Path


@dataclass(frozen=True)
class ToDataUrl:
    pass


OutputSink = Union[ToFile, ToDataUrl]


@dataclass(frozen=True)
class EncodedAsset:
    href: str
    path: Optional[Path]
    nbytes: int


# ============================================================
# Sinks
# ============================================================

def data_url(mime: str, data: bytes) -> str:
    return f"data:{mime};base64," + base64.b64encode(data).decode("ascii")


def stream_to_file(path: Path, data: bytes, bufsize: int = DEFAULT_BUFSIZE) -> None:
    step = max(1, int(bufsize))
    view = memoryview(data)
    try:
        with open(path, "wb") as fh:
            for off in range(0, len(view), step):
                fh.write(view[off:off + step])
    except OSError as exc:
        raise OutputError(f"cannot write file ({exc.strerror or exc})", path) from exc


def deliver(data: bytes, mime: str, sink: OutputSink, bufsize: int = DEFAULT_BUFSIZE) -> EncodedAsset:
    if isinstance(sink, ToFile):
        path = Path(sink.path)
        stream_to_file(path, data, bufsize)
        return EncodedAsset(href=path.name, path=path, nbytes=len(data))
    if isinstance(sink, ToDataUrl):
        return EncodedAsset(href=data_url(mime, data), path=None, nbytes=len(data))
    raise TypeError(f"unknown output sink: {sink!r}")


# ============================================================
# Encoders
# ============================================================

def _check_jpeg_options(options: JpegOptions) -> None:
    if isinstance(options.quality, bool) or not isinstance(options.quality, int):
        raise EncodeError(f"JPEG quality must be an integer, got {options.quality!r}")
    if not 1 <= options.quality <= 100:
        raise EncodeError(f"JPEG quality must be between 1 and 100, got {options.quality}")
    if options.bufsize <= 0:
        raise EncodeError(f"buffer size must be positive, got {options.bufsize}")


def jpeg_bytes(fb: Framebuffer, options: JpegOptions) -> bytes:
    _check_jpeg_options(options)
    buf = io.BytesIO()
    try:
        fb.to_image("RGB").save(
            buf,
            format="JPEG",
            quality=options.quality,
            progressive=bool(options.progressive),
        )
    except (OSError, ValueError) as exc:
        raise EncodeError(f"JPEG encoder failed ({exc})") from exc
    return buf.getvalue()


def png_bytes(fb: Framebuffer) -> bytes:
    """
    Lossless PNG of a mask layer.

    Only the red channel is stored, as an 8-bit L image. That is lossless for
    buffers where R == G == B and A == 255, which is what mask_layer() builds.
    """
    buf = io.BytesIO()
    try:
        img = fb.to_image("RGBA").getchannel("R")
        img.save(buf, format="PNG", optimize=True)
    except (OSError, ValueError) as exc:
        raise EncodeError(f"PNG encoder failed ({exc})") from exc
    return buf.getvalue()


def encode_jpeg(fb: Framebuffer, options: JpegOptions, sink: OutputSink) -> EncodedAsset:
    return deliver(jpeg_bytes(fb, options), IMAGE_JPEG, sink, options.bufsize)


def encode_png(fb: Framebuffer, sink: OutputSink, bufsize: int = DEFAULT_BUFSIZE) -> EncodedAsset:
    return deliver(png_bytes(fb), IMAGE_PNG, sink, bufsize)
