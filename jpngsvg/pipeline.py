"""
Per-file conversion pipeline.

    decode -> make dir -> separate -> encode (JPEG || PNG) -> write SVG -> measure

Progress is reported through ProgressEvent callbacks, one start and one end
event per Stage. Listeners never influence the result; errors propagate to
the caller (the batch driver decides whether to keep going).
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional

from .config import ConvertOptions
from .encoders import EncodedAsset, ToDataUrl, ToFile, encode_jpeg, encode_png
from .errors import OutputError
from .framebuffer import load_image, stem_of
from .layers import separate_layers
from .svg import jpeg_name, mask_name, render_svg, write_svg


class Stage(Enum):
    DECODE = "Reading image"
    MAKE_DIR = "Creating output folder"
    SEPARATE = "Separating alpha layer"
    ENCODE = "Creating images"
    WRITE = "Writing result"
    MEASURE = "Measuring result"


@dataclass(frozen=True)
class ProgressEvent:
    stage: Stage
    done: bool
    payload: Any = None


ProgressListener = Callable[[ProgressEvent], None]


@dataclass
class ConversionResult:
    source: Path
    svg_path: Path
    assets: List[Path] = field(default_factory=list)
    original_size: int = 0
    result_size: int = 0

    @property
    def diff_size(self) -> int:
        return self.result_size - self.original_size

    @property
    def files(self) -> List[Path]:
        return [self.svg_path] + list(self.assets)


# ============================================================
# Helpers
# ============================================================

def make_dir(path: Path) -> Path:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputError(f"cannot create output folder ({exc.strerror or exc})", path) from exc
    return path


def total_size(paths: Iterable[Path]) -> int:
    total = 0
    for p in paths:
        try:
            total += p.stat().st_size
        except OSError as exc:
            raise OutputError(f"cannot stat result file ({exc.strerror or exc})", p) from exc
    return total


class _Emitter:
    def __init__(self, listeners: Iterable[ProgressListener]):
        self.listeners = [fn for fn in listeners if fn is not None]

    def start(self, stage: Stage) -> None:
        self._send(ProgressEvent(stage, False))

    def end(self, stage: Stage, payload: Any = None) -> None:
        self._send(ProgressEvent(stage, True, payload))

    def _send(self, event: ProgressEvent) -> None:
        for fn in self.listeners:
            fn(event)


# ============================================================
# Pipeline
# ============================================================

def convert_file(
    path: str | Path,
    options: Optional[ConvertOptions] = None,
    on_progress: Optional[ProgressListener] = None,
) -> ConversionResult:
    """
    Convert one image into ``<name>.jpg`` + ``<name>-alpha.png`` + ``<name>.svg``
    (or a single self-contained ``<name>.svg`` when ``options.inline``).

    Raises:
        DecodeError, EncodeError, OutputError
    """
    return _run(Path(path), options or ConvertOptions(), _Emitter([on_progress]))


def _run(src: Path, options: ConvertOptions, emit: _Emitter) -> ConversionResult:
    name = stem_of(src)
    out_dir = options.output

    emit.start(Stage.DECODE)
    fb, info = load_image(src)
    emit.end(Stage.DECODE, info)

    emit.start(Stage.MAKE_DIR)
    make_dir(out_dir)
    emit.end(Stage.MAKE_DIR, out_dir)

    emit.start(Stage.SEPARATE)
    color, mask = separate_layers(fb)
    del fb
    emit.end(Stage.SEPARATE)

    emit.start(Stage.ENCODE)
    if options.inline:
        jpeg_sink, png_sink = ToDataUrl(), ToDataUrl()
    else:
        jpeg_sink = ToFile(out_dir / jpeg_name(name))
        png_sink = ToFile(out_dir / mask_name(name))

    with ThreadPoolExecutor(max_workers=2) as pool:
        jpeg_job = pool.submit(encode_jpeg, color, options.jpeg, jpeg_sink)
        png_job = pool.submit(encode_png, mask, png_sink, options.bufsize)
        # result() re-raises the worker's EncodeError/OutputError here
        image: EncodedAsset = jpeg_job.result()
        alpha: EncodedAsset = png_job.result()
    emit.end(Stage.ENCODE, (image, alpha))

    emit.start(Stage.WRITE)
    svg = render_svg(name, info.width, info.height, image.href, alpha.href)
    svg_path = write_svg(out_dir, name, svg)
    emit.end(Stage.WRITE, svg_path)

    emit.start(Stage.MEASURE)
    assets = [a.path for a in (image, alpha) if a.path is not None]
    result = ConversionResult(
        source=src,
        svg_path=svg_path,
        assets=assets,
        original_size=info.size,
    )
    result.result_size = total_size(result.files)
    emit.end(Stage.MEASURE, result)

    return result


class Converter:
    """
    Reusable converter: default options plus a set of progress listeners.

        conv = Converter(ConvertOptions(output="out"))
        conv.subscribe(print)
        conv.convert("logo.png", inline=True)
    """

    def __init__(self, options: Optional[ConvertOptions] = None):
        self.options = options or ConvertOptions()
        self._listeners: List[ProgressListener] = []

    def subscribe(self, listener: ProgressListener) -> "Converter":
        self._listeners.append(listener)
        return self

    def unsubscribe(self, listener: ProgressListener) -> None:
        self._listeners.remove(listener)

    def convert(self, path: str | Path, **overrides) -> ConversionResult:
        options = self.options.merge(**overrides)
        return _run(Path(path), options, _Emitter(self._listeners))
