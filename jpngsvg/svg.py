"""
SVG wrapper that puts the JPEG color layer back under the PNG alpha mask.
"""

from __future__ import annotations

from pathlib import Path
from xml.sax.saxutils import quoteattr

from .errors import OutputError

SVG_TEMPLATE = """\
<svg preserveAspectRatio="xMinYMin" version="1.1" xmlns="http://www.w3.org/2000/svg" \
xmlns:xlink="http://www.w3.org/1999/xlink" viewBox="0 0 {width} {height}">
  <defs>
    <mask id={mask_id}>
      <image width="{width}" height="{height}" xlink:href={mask_href}></image>
    </mask>
  </defs>
  <image mask={mask_url} id={image_id} width="{width}" height="{height}" xlink:href={image_href}></image>
</svg>
"""


def jpeg_name(name: str) -> str:
    return f"{name}.jpg"


def mask_name(name: str) -> str:
    return f"{name}-alpha.png"


def svg_name(name: str) -> str:
    return f"{name}.svg"


def render_svg(name: str, width: int, height: int, image_href: str, mask_href: str) -> str:
    mask_id = f"{name}-mask"
    return SVG_TEMPLATE.format(
        width=int(width),
        height=int(height),
        mask_id=quoteattr(mask_id),
        mask_href=quoteattr(mask_href),
        mask_url=quoteattr(f"url(#{mask_id})"),
        image_id=quoteattr(name),
        image_href=quoteattr(image_href),
    )


def write_svg(output_dir: str | Path, name: str, svg: str) -> Path:
    # A later input with the same base name overwrites this one.
    path = Path(output_dir) / svg_name(name)
    try:
        path.write_text(svg, encoding="utf-8")
    except OSError as exc:
        raise OutputError(f"cannot write SVG ({exc.strerror or exc})", path) from exc
    return path
