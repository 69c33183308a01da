import io

import numpy as np
import pytest
from PIL import Image

from imagetools.files import BufferManager, InputFile


def encode_image(arr: np.ndarray, fmt: str = "PNG") -> bytes:
    buf = io.BytesIO()
    Image.fromarray(arr).save(buf, format=fmt)
    return buf.getvalue()


def solid_image(width: int, height: int, color=(200, 30, 30), fmt: str = "PNG") -> bytes:
    arr = np.zeros((height, width, 3), dtype=np.uint8)
    arr[:, :] = color
    return encode_image(arr, fmt)


def gradient_image(width: int, height: int, fmt: str = "PNG") -> bytes:
    xs = np.linspace(0, 255, width, dtype=np.float64)
    ys = np.linspace(0, 255, height, dtype=np.float64)
    arr = np.zeros((height, width, 3), dtype=np.uint8)
    arr[:, :, 0] = xs[None, :].astype(np.uint8)
    arr[:, :, 1] = ys[:, None].astype(np.uint8)
    arr[:, :, 2] = 128
    return encode_image(arr, fmt)


def gray16_gradient_image(rows: int = 16) -> bytes:
    """16-bit grayscale PNG whose columns run 0..65535 in steps of 257."""
    row = np.arange(256, dtype=np.uint16) * 257
    return encode_image(np.tile(row, (rows, 1)))


def image_file(name: str, data: bytes, mime_type: str = "image/png") -> InputFile:
    return InputFile(name=name, mime_type=mime_type, data=data)


@pytest.fixture
def buffer(tmp_path):
    manager = BufferManager(project_root=str(tmp_path))
    yield manager
    manager.cleanup()
