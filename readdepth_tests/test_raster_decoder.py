"""RasterDecoder tests — 原始字节与 TIFF 容器解码。"""
import numpy as np
import pytest

from readdepth.errors import DecodeError, SizeMismatch, SourceUnavailable
from readdepth.raster_decoder import decode_depth_tiff, decode_raw, read_depth_file


# ============================================================
# decode_raw
# ============================================================

def test_decode_raw_row_major():
    payload = np.array([1, 2, 3, 4, 5, 6], dtype=np.float32).tobytes()
    buf = decode_raw(payload, 3, 2)
    assert (buf.width, buf.height) == (3, 2)
    assert buf.as_2d().tolist() == [[1, 2, 3], [4, 5, 6]]


def test_decode_raw_short_payload():
    w, h = 4, 3
    payload = bytes(w * h * 4 - 1)
    with pytest.raises(SizeMismatch):
        decode_raw(payload, w, h)


def test_decode_raw_long_payload():
    with pytest.raises(SizeMismatch):
        decode_raw(bytes(2 * 2 * 4 + 4), 2, 2)


def test_decode_raw_zero_size():
    with pytest.raises(SizeMismatch):
        decode_raw(b"", 0, 0)


def test_decode_raw_copies_payload():
    payload = bytearray(np.array([1, 2, 3, 4], dtype=np.float32).tobytes())
    buf = decode_raw(payload, 2, 2)
    payload[:4] = np.array([99], dtype=np.float32).tobytes()
    assert buf.samples[0] == 1.0


def test_decode_raw_keeps_non_finite():
    """非有限值不是解码错误。"""
    payload = np.array([np.nan, np.inf, -np.inf, 1.0], dtype=np.float32).tobytes()
    buf = decode_raw(payload, 2, 2)
    assert np.isnan(buf.samples[0])
    assert np.isposinf(buf.samples[1])


def test_size_mismatch_is_decode_error():
    assert issubclass(SizeMismatch, DecodeError)
    assert issubclass(SourceUnavailable, DecodeError)


# ============================================================
# decode_depth_tiff
# ============================================================

def test_decode_tiff(make_tiff):
    arr = np.array([[0.5, 1.5, 2.5], [3.5, np.nan, 5.5]], dtype=np.float32)
    buf = decode_depth_tiff(make_tiff(arr))
    assert (buf.width, buf.height) == (3, 2)
    np.testing.assert_array_equal(buf.as_2d(), arr)


def test_decode_tiff_big_endian(make_tiff):
    arr = np.array([[1.25, 2.5], [3.75, 5.0]], dtype=np.float32)
    buf = decode_depth_tiff(make_tiff(arr, byteorder=">"))
    np.testing.assert_array_equal(buf.as_2d(), arr)


def test_decode_tiff_uint16_is_size_mismatch(make_tiff):
    arr = np.full((4, 4), 1000, dtype=np.uint16)
    with pytest.raises(SizeMismatch):
        decode_depth_tiff(make_tiff(arr))


def test_decode_tiff_rgb_float_is_size_mismatch(make_tiff):
    arr = np.zeros((4, 4, 3), dtype=np.float32)
    with pytest.raises(SizeMismatch):
        decode_depth_tiff(make_tiff(arr, photometric="rgb"))


@pytest.mark.parametrize("dtype", [np.uint32, np.int32])
def test_decode_tiff_other_4_byte_type_is_size_mismatch(make_tiff, dtype):
    """同为 4 字节/像素, 字节数对得上, 仍不是 float32。"""
    with pytest.raises(SizeMismatch):
        decode_depth_tiff(make_tiff(np.ones((3, 3), dtype=dtype)))


def test_decode_tiff_rgba8_is_size_mismatch(make_tiff):
    arr = np.zeros((3, 3, 4), dtype=np.uint8)
    with pytest.raises(SizeMismatch):
        decode_depth_tiff(make_tiff(arr, photometric="rgb", extrasamples=[2]))


def test_decode_tiff_garbage():
    with pytest.raises(SourceUnavailable):
        decode_depth_tiff(b"definitely not a tiff file")


def test_decode_tiff_empty():
    with pytest.raises(SourceUnavailable):
        decode_depth_tiff(b"")


def test_decode_tiff_missing_page(make_tiff):
    data = make_tiff(np.ones((2, 2), dtype=np.float32))
    with pytest.raises(SourceUnavailable):
        decode_depth_tiff(data, index=3)


# ============================================================
# read_depth_file
# ============================================================

def test_read_depth_file(tmp_path, make_tiff):
    path = tmp_path / "depth.tiff"
    path.write_bytes(make_tiff(np.ones((3, 5), dtype=np.float32)))
    buf = read_depth_file(path)
    assert (buf.width, buf.height) == (5, 3)


def test_read_depth_file_missing(tmp_path):
    with pytest.raises(SourceUnavailable):
        read_depth_file(tmp_path / "nope.tiff")
