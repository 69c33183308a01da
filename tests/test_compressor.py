import io

import numpy as np
import pytest
from PIL import Image

from imagetools.compress import CompressionOptions, compress_image, fit_within, image_dimensions

from conftest import encode_image, gradient_image, gray16_gradient_image, solid_image


def _noisy_image(width: int, height: int) -> bytes:
    rng = np.random.default_rng(0)
    return encode_image(rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8))


def test_fit_within_scales_longest_side():
    assert fit_within(400, 200, 100) == (100, 50)
    assert fit_within(200, 400, 100) == (50, 100)
    assert fit_within(80, 40, 100) == (80, 40)
    assert fit_within(400, 200, None) == (400, 200)


def test_no_max_dimension_keeps_pixel_size():
    src = gradient_image(123, 77)
    for mime in ("image/webp", "image/jpeg", "image/jpg", "image/png"):
        out = compress_image(src, CompressionOptions(target_size_mb=100.0, output_mime_type=mime, quality=0.5))
        assert image_dimensions(out) == (123, 77)


def test_max_dimension_downscales():
    out = compress_image(gradient_image(400, 200), CompressionOptions(target_size_mb=100.0, max_dimension=100, output_mime_type="image/png"))
    assert image_dimensions(out) == (100, 50)


def test_max_dimension_never_upscales():
    out = compress_image(gradient_image(60, 30), CompressionOptions(target_size_mb=100.0, max_dimension=720, output_mime_type="image/png"))
    assert image_dimensions(out) == (60, 30)


def test_output_type_is_encoded():
    out = compress_image(solid_image(20, 20), CompressionOptions(target_size_mb=1.0, output_mime_type="image/webp"))
    assert out[:4] == b"RIFF" and out[8:12] == b"WEBP"
    out = compress_image(solid_image(20, 20), CompressionOptions(target_size_mb=1.0, output_mime_type="image/jpeg"))
    assert out[:2] == b"\xff\xd8"


def test_rgba_source_can_become_jpeg():
    arr = np.zeros((10, 10, 4), dtype=np.uint8)
    arr[..., 3] = 128
    out = compress_image(encode_image(arr), CompressionOptions(target_size_mb=1.0, output_mime_type="image/jpeg"))
    assert image_dimensions(out) == (10, 10)


@pytest.mark.parametrize("mime_type", ["image/png", "image/jpeg"])
def test_16_bit_grayscale_keeps_its_tones(mime_type):
    out = compress_image(gray16_gradient_image(), CompressionOptions(target_size_mb=1.0, output_mime_type=mime_type))
    with Image.open(io.BytesIO(out)) as img:
        row = np.asarray(img.convert("L"), dtype=np.int16)[0]
    assert row.shape == (256,)
    assert np.abs(row - np.arange(256)).max() <= 8


def test_size_target_lowers_quality_but_not_dimensions():
    src = _noisy_image(200, 200)
    roomy = compress_image(src, CompressionOptions(target_size_mb=100.0, output_mime_type="image/jpeg", quality=1.0))
    tight = compress_image(src, CompressionOptions(target_size_mb=0.001, output_mime_type="image/jpeg", quality=1.0))
    assert len(tight) < len(roomy)
    assert image_dimensions(tight) == (200, 200)


def test_unsupported_type_and_garbage_rejected():
    with pytest.raises(ValueError):
        compress_image(solid_image(5, 5), CompressionOptions(target_size_mb=1.0, output_mime_type="image/tiff"))
    with pytest.raises(ValueError):
        compress_image(b"garbage", CompressionOptions(target_size_mb=1.0))
