"""Image loading into RGBA framebuffers."""

import numpy as np
import pytest
from PIL import Image

from jpngsvg.errors import DecodeError
from jpngsvg.framebuffer import Framebuffer, load_image, stem_of


class TestLoadImage:
    def test_png_with_alpha(self, scenario_png):
        fb, info = load_image(scenario_png)
        assert (fb.width, fb.height) == (2, 2)
        assert len(fb) == 2 * 2 * 4
        assert fb.pixel(0, 0) == (255, 0, 0, 128)
        assert fb.pixel(1, 1) == (0, 0, 0, 255)
        assert info.size == scenario_png.stat().st_size
        assert (info.width, info.height) == (2, 2)

    def test_jpeg_source_is_opaque_rgba(self, tmp_path):
        path = tmp_path / "photo.jpg"
        Image.new("RGB", (8, 4), (10, 200, 30)).save(path, format="JPEG")
        fb, _ = load_image(path)
        assert fb.pixels.shape == (4, 8, 4)
        assert (fb.pixels[..., 3] == 255).all()

    def test_grayscale_source(self, tmp_path):
        path = tmp_path / "gray.png"
        Image.new("L", (3, 3), 90).save(path)
        fb, _ = load_image(path)
        assert fb.pixel(2, 2) == (90, 90, 90, 255)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DecodeError) as exc:
            load_image(tmp_path / "nope.png")
        assert exc.value.path == tmp_path / "nope.png"

    def test_not_an_image(self, tmp_path):
        path = tmp_path / "notes.png"
        path.write_text("definitely not pixels")
        with pytest.raises(DecodeError):
            load_image(path)

    def test_truncated_png(self, corrupt_png):
        with pytest.raises(DecodeError):
            load_image(corrupt_png)

    def test_over_pixel_limit(self, noisy_png, monkeypatch):
        # 32x24 is more than twice the limit, so Pillow refuses to open it
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 200)
        with pytest.raises(DecodeError) as exc:
            load_image(noisy_png)
        assert exc.value.path == noisy_png

    def test_info_size_is_file_size(self, noisy_png):
        _, info = load_image(noisy_png)
        assert (info.width, info.height) == (32, 24)
        assert info.size == noisy_png.stat().st_size


class TestFramebuffer:
    def test_image_round_trip(self):
        px = np.arange(2 * 3 * 4, dtype=np.uint8).reshape(2, 3, 4)
        fb = Framebuffer.from_image(Framebuffer(3, 2, px).to_image())
        assert np.array_equal(fb.pixels, px)


def test_stem_of():
    assert stem_of("a/b/logo.final.png") == "logo.final"
    assert stem_of("icon.jpeg") == "icon"
