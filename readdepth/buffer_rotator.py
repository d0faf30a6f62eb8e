"""
深度缓冲区 90° 倍数旋转 — 纯索引置换，不检查样本值 (NaN/Inf 原样搬运)。

    180°:   dst[(H-1-y)*W + (W-1-x)] = src[y*W + x]
    90° CW: dst[x*H + (H-1-y)]       = src[y*W + x]   (新尺寸 H x W)
    90° CCW:dst[(W-1-x)*H + y]       = src[y*W + x]   (新尺寸 H x W)
"""
import numpy as np

from readdepth.depth_buffer import DepthBuffer, ManualRotation, OrientationTag


def rotate_identity(buf: DepthBuffer) -> DepthBuffer:
    return buf


def rotate_180(buf: DepthBuffer) -> DepthBuffer:
    rotated = buf.as_2d()[::-1, ::-1]
    return DepthBuffer(buf.width, buf.height, rotated.ravel())


def rotate_90_cw(buf: DepthBuffer) -> DepthBuffer:
    rotated = np.rot90(buf.as_2d(), k=-1)
    return DepthBuffer(buf.height, buf.width, rotated.ravel())


def rotate_90_ccw(buf: DepthBuffer) -> DepthBuffer:
    rotated = np.rot90(buf.as_2d(), k=1)
    return DepthBuffer(buf.height, buf.width, rotated.ravel())


_BY_ORIENTATION = {
    OrientationTag.IDENTITY: rotate_identity,
    OrientationTag.ROTATE_180: rotate_180,
    OrientationTag.ROTATE_90_CW: rotate_90_cw,
    OrientationTag.ROTATE_90_CCW: rotate_90_ccw,
}

_BY_ANGLE = {
    ManualRotation.DEG_0: rotate_identity,
    ManualRotation.DEG_90: rotate_90_cw,
    ManualRotation.DEG_180: rotate_180,
    ManualRotation.DEG_270: rotate_90_ccw,
}


def rotate_by_orientation(buf: DepthBuffer, tag) -> DepthBuffer:
    """自动方向校正 (EXIF 方向值, 未知值不旋转)。"""
    return _BY_ORIENTATION[OrientationTag.from_exif(tag)](buf)


def rotate_by_angle(buf: DepthBuffer, angle) -> DepthBuffer:
    """手动旋转 (0/90/180/270, 90 = 顺时针)。"""
    return _BY_ANGLE[ManualRotation.from_degrees(angle)](buf)
