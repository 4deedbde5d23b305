import numpy as np
import pytest
from PIL import Image


def solid(height, width, color):
    return [[color] * width for _ in range(height)]


@pytest.fixture
def write_pillow_bmp(tmp_path):
    """Write RGB rows (top row first) to a 24-bit BMP with Pillow."""
    def _write(rows, name="in.bmp"):
        path = tmp_path / name
        arr = np.array(rows, dtype=np.uint8)
        Image.fromarray(arr).save(path, format="BMP")
        return path
    return _write


@pytest.fixture
def gradient_rows():
    # 5 wide so every scanline carries padding
    return [[((x * 40) % 256, (y * 60) % 256, (x * y * 17) % 256) for x in range(5)]
            for y in range(4)]
