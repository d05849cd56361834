"""
Split an RGBA framebuffer into the two layers that get encoded separately.

color: source RGB, alpha forced opaque (JPEG has no transparency)
mask:  source alpha copied into R, G and B, alpha forced opaque; white is
       opaque and black is transparent, which is what an SVG luminance mask
       expects
"""

from __future__ import annotations

import numpy as np

from .framebuffer import Framebuffer

OPAQUE = 255


def color_layer(fb: Framebuffer) -> Framebuffer:
    pixels = fb.pixels.copy()
    pixels[..., 3] = OPAQUE
    return Framebuffer(fb.width, fb.height, pixels)


def mask_layer(fb: Framebuffer) -> Framebuffer:
    pixels = np.empty_like(fb.pixels)
    pixels[..., :3] = fb.pixels[..., 3:4]
    pixels[..., 3] = OPAQUE
    return Framebuffer(fb.width, fb.height, pixels)


def separate_layers(fb: Framebuffer) -> tuple[Framebuffer, Framebuffer]:
    # Images without transparency still get a mask (all white).
    return color_layer(fb), mask_layer(fb)
