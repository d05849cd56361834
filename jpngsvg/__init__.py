"""
jpngsvg: split transparent images into JPEG color + PNG alpha mask + SVG glue.
"""

from .batch import BatchSummary, expand_glob, run_batch
from .config import ConvertOptions
from .encoders import EncodedAsset, JpegOptions, ToDataUrl, ToFile, encode_jpeg, encode_png
from .errors import ConversionError, DecodeError, EncodeError, OutputError
from .framebuffer import Framebuffer, ImageInfo, load_image
from .layers import separate_layers
from .pipeline import ConversionResult, Converter, ProgressEvent, Stage, convert_file
from .svg import render_svg, write_svg

__version__ = "0.1.0"

__all__ = [
    "BatchSummary",
    "ConversionError",
    "ConversionResult",
    "ConvertOptions",
    "Converter",
    "DecodeError",
    "EncodeError",
    "EncodedAsset",
    "Framebuffer",
    "ImageInfo",
    "JpegOptions",
    "OutputError",
    "ProgressEvent",
    "Stage",
    "ToDataUrl",
    "ToFile",
    "convert_file",
    "encode_jpeg",
    "encode_png",
    "expand_glob",
    "load_image",
    "render_svg",
    "run_batch",
    "separate_layers",
    "write_svg",
]
