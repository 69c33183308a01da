import pytest

from imagetools.compress import RESOLUTION_PRESETS, CompressionParams


def test_presets_map_to_fixed_pixel_values():
    assert RESOLUTION_PRESETS == {
        "Original": "original",
        "HD (720p)": 720,
        "Full HD (1080p)": 1080,
        "QHD (1440p)": 1440,
        "4K (2160p)": 2160,
    }


def test_resolve_converts_units():
    params = CompressionParams(output_format="webp", quality=50, max_size_kb=2048)
    options = params.resolve()
    assert options.quality == 0.5
    assert options.target_size_mb == 2.0
    assert options.output_mime_type == "image/webp"
    assert options.use_background_worker is True
    assert options.max_dimension is None


def test_preset_enables_and_original_disables_resize():
    params = CompressionParams()
    params.apply_preset(1080)
    assert params.resize_enabled is True
    assert params.resolve().max_dimension == 1080

    params.apply_preset("QHD (1440p)")
    assert params.resolve().max_dimension == 1440

    params.apply_preset("original")
    assert params.resize_enabled is False
    assert params.width is None
    assert params.resolve().max_dimension is None


def test_width_is_ignored_while_resize_disabled():
    params = CompressionParams(width=800)
    assert params.resolve().max_dimension is None
    params.resize_enabled = True
    assert params.resolve().max_dimension == 800


@pytest.mark.parametrize(
    "kwargs",
    [
        {"output_format": "gif"},
        {"quality": 101},
        {"quality": -1},
        {"max_size_kb": 0},
        {"max_size_kb": 50},
        {"max_size_kb": 20000},
        {"width": 10},
        {"width": 5000},
    ],
)
def test_invalid_params_rejected(kwargs):
    with pytest.raises(ValueError):
        CompressionParams(**kwargs)


@pytest.mark.parametrize("size_kb", [100, 10240, 102400])
def test_max_size_bounds_and_default_accepted(size_kb):
    assert CompressionParams(max_size_kb=size_kb).resolve().target_size_mb == size_kb / 1024
