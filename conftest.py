"""共用 fixture — 内存中生成 float32 TIFF 与带 EXIF 方向的 JPEG。"""
import io

import numpy as np
import pytest
import tifffile
from PIL import ExifTags, Image


def tiff_bytes(arr, **kwargs) -> bytes:
    buf = io.BytesIO()
    tifffile.imwrite(buf, np.asarray(arr), **kwargs)
    return buf.getvalue()


def jpeg_bytes(width=4, height=4, orientation=None) -> bytes:
    img = Image.new("RGB", (width, height), (90, 120, 150))
    buf = io.BytesIO()
    if orientation is None:
        img.save(buf, format="JPEG")
    else:
        exif = Image.Exif()
        exif[ExifTags.Base.Orientation] = orientation
        img.save(buf, format="JPEG", exif=exif.tobytes())
    return buf.getvalue()


@pytest.fixture
def make_tiff():
    return tiff_bytes


@pytest.fixture
def make_jpeg():
    return jpeg_bytes


@pytest.fixture
def depth_2x2():
    """row0 = [1, 2], row1 = [3, 4] (米)。"""
    return tiff_bytes(np.array([[1, 2], [3, 4]], dtype=np.float32))


@pytest.fixture
def depth_3x2():
    """W=3, H=2: row0 = [1, 2, 3], row1 = [4, 5, 6]。"""
    return tiff_bytes(np.arange(1, 7, dtype=np.float32).reshape(2, 3))
