"""彩色图解码 + EXIF 方向读取 (外部协作方: OpenCV 解码像素, Pillow 读元数据)。"""
import io
import logging

import cv2
import numpy as np
from PIL import ExifTags, Image, UnidentifiedImageError

from readdepth.depth_buffer import OrientationTag
from readdepth.errors import SourceUnavailable

logger = logging.getLogger(__name__)


def read_orientation(data: bytes) -> OrientationTag:
    """EXIF Orientation → OrientationTag；无 EXIF 或无法解析时为 IDENTITY。"""
    try:
        with Image.open(io.BytesIO(data)) as im:
            value = im.getexif().get(ExifTags.Base.Orientation)
    except (UnidentifiedImageError, OSError) as e:
        logger.debug("no EXIF orientation: %s", e)
        return OrientationTag.IDENTITY
    return OrientationTag.from_exif(value)


def decode_color(data: bytes) -> tuple[np.ndarray, OrientationTag]:
    """彩色图字节 → (BGR 图像, 方向)。

    OpenCV 的 IMREAD_COLOR 已按 EXIF 摆正像素，返回的图像即显示方向；
    方向值留给深度图做对应校正。

    Raises:
        SourceUnavailable: 无法解码
    """
    buf = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(buf, cv2.IMREAD_COLOR) if buf.size else None
    if image is None:
        raise SourceUnavailable("cannot decode color image")
    return image, read_orientation(data)
