"""
深度栅格解码 — float32 TIFF 字节流 → DepthBuffer。

容器解析交给 tifffile；本模块只校验字节数并复制样本。
"""
import io
import logging

import numpy as np
import tifffile

from readdepth.depth_buffer import DepthBuffer
from readdepth.errors import SizeMismatch, SourceUnavailable

logger = logging.getLogger(__name__)

FLOAT32_SIZE = np.dtype(np.float32).itemsize


def decode_raw(payload, width: int, height: int) -> DepthBuffer:
    """原始字节 → DepthBuffer。

    Args:
        payload: bytes-like, 本机字节序的 float32 样本, 行优先
        width, height: 声明的像素尺寸

    Raises:
        SizeMismatch: len(payload) != width * height * 4
    """
    if width < 1 or height < 1:
        raise SizeMismatch(f"invalid raster size {width}x{height}")
    length = memoryview(payload).nbytes
    expected = width * height * FLOAT32_SIZE
    if length != expected:
        raise SizeMismatch(
            f"payload is {length} bytes, {width}x{height} float32 needs {expected}")
    # 复制，不与调用方的缓冲区共享内存
    samples = np.frombuffer(payload, dtype=np.float32).copy()
    return DepthBuffer(width, height, samples)


def decode_depth_tiff(data: bytes, index: int = 0) -> DepthBuffer:
    """解码 TIFF 第 index 页为 DepthBuffer。

    页面必须是单通道 float32；其他像素格式 (含 uint32 / RGBA8 等同为 4 字节的格式)
    报 SizeMismatch。
    """
    try:
        with tifffile.TiffFile(io.BytesIO(data)) as tif:
            page = tif.pages[index]
            width, height = int(page.imagewidth), int(page.imagelength)
            channels = int(page.samplesperpixel)
            arr = page.asarray()
    except (tifffile.TiffFileError, ValueError, IndexError, OSError) as e:
        raise SourceUnavailable(f"cannot read depth TIFF: {e}") from e

    if arr is None or arr.size == 0:
        raise SourceUnavailable("depth TIFF page has no pixel data")
    if channels != 1 or arr.dtype.kind != "f" or arr.dtype.itemsize != FLOAT32_SIZE:
        raise SizeMismatch(
            f"expected single-channel float32, got {channels} x {arr.dtype}")

    native = np.ascontiguousarray(arr, dtype=arr.dtype.newbyteorder("="))
    logger.debug("TIFF page %d: %dx%d %s", index, width, height, arr.dtype)
    return decode_raw(native.tobytes(), width, height)


def read_depth_file(path) -> DepthBuffer:
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise SourceUnavailable(f"cannot open {path}: {e}") from e
    return decode_depth_tiff(data)
