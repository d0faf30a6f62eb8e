"""
共用可视化工具 — 深度缓冲区 → RGBA 伪彩色叠加图。
桌面查看器和 webapp 均通过此模块着色。

着色: min-max 归一化到 t∈[0,1], hue = (1 - t) * 240°, S = V = 1。
近 (t=0) = 蓝, 远 (t=1) = 红。非有限样本不参与 min/max, 输出全透明。
"""
from dataclasses import dataclass

import cv2
import numpy as np

from readdepth.config import HUE_RANGE_DEG
from readdepth.coord_mapper import fit_geometry
from readdepth.depth_buffer import DepthBuffer
from readdepth.errors import DegenerateRange


@dataclass(eq=False)
class VisualizationRaster:
    width: int
    height: int
    pixels: np.ndarray  # (H, W, 4) uint8 RGBA

    def tobytes(self) -> bytes:
        return self.pixels.tobytes()


def finite_range(samples: np.ndarray) -> tuple[float, float]:
    """有限样本的 (min, max)。

    Raises:
        DegenerateRange: 没有有限样本, 或 max <= min
    """
    finite = samples[np.isfinite(samples)]
    if finite.size == 0:
        raise DegenerateRange("no finite depth samples")
    lo, hi = float(finite.min()), float(finite.max())
    if hi <= lo:
        raise DegenerateRange(f"flat depth range [{lo}, {hi}]")
    return lo, hi


def normalize(samples: np.ndarray, lo: float, hi: float) -> np.ndarray:
    t = (samples.astype(np.float64) - lo) / (hi - lo)
    return np.clip(t, 0.0, 1.0)


def hue_for_values(t: np.ndarray) -> np.ndarray:
    """t∈[0,1] → hue∈[0, 2/3] (单位: 整圈)。"""
    return (1.0 - np.asarray(t, dtype=np.float64)) * (HUE_RANGE_DEG / 360.0)


def depth_to_rgba(buf: DepthBuffer) -> VisualizationRaster:
    """深度缓冲区 → 伪彩色 RGBA。

    Args:
        buf: 当前 (已旋转) 深度缓冲区

    Returns:
        VisualizationRaster, pixels 与 buf 同尺寸, 行优先

    Raises:
        DegenerateRange: 空缓冲区或平坦/无有限值
    """
    if len(buf) == 0:
        raise DegenerateRange("empty depth buffer")

    samples = buf.samples
    valid = np.isfinite(samples)
    lo, hi = finite_range(samples)

    t = np.where(valid, normalize(samples, lo, hi), 0.0)
    # OpenCV float HSV: H 单位为度, S/V ∈ [0, 1]
    hue_deg = hue_for_values(t) * 360.0
    hsv = np.stack([hue_deg, np.ones_like(t), np.ones_like(t)], axis=-1)
    hsv = hsv.astype(np.float32).reshape(buf.height, buf.width, 3)
    rgb = cv2.cvtColor(hsv, cv2.COLOR_HSV2RGB)

    pixels = np.zeros((buf.height, buf.width, 4), dtype=np.uint8)
    pixels[..., :3] = np.clip(np.rint(rgb * 255.0), 0, 255).astype(np.uint8)
    pixels[..., 3] = 255
    pixels[~valid.reshape(buf.height, buf.width)] = 0
    return VisualizationRaster(buf.width, buf.height, pixels)


def blend_overlay(color: np.ndarray, raster: VisualizationRaster,
                  alpha: float) -> np.ndarray:
    """伪彩色叠加到彩色图 (只在不透明像素处混合)。

    Args:
        color: (H, W, 3) BGR 或 (H, W) 灰度图
        raster: 深度叠加图, 最近邻缩放后按比例居中放入彩色图 (与 map_pointer 一致)
        alpha: 叠加透明度, 截断到 [0, 1]

    Returns:
        (H, W, 3) uint8 BGR 新图像
    """
    alpha = max(0.0, min(1.0, alpha))
    if color.ndim == 2:
        cam = cv2.cvtColor(color, cv2.COLOR_GRAY2BGR)
    else:
        cam = color.copy()
    ch, cw = cam.shape[:2]

    geo = fit_geometry((cw, ch), (raster.width, raster.height))
    if geo is None:
        return cam
    dw = max(1, min(cw, round(geo.disp_w)))
    dh = max(1, min(ch, round(geo.disp_h)))
    ox, oy = (cw - dw) // 2, (ch - dh) // 2

    overlay = np.zeros((ch, cw, 4), dtype=np.uint8)
    overlay[oy:oy + dh, ox:ox + dw] = cv2.resize(
        cv2.cvtColor(raster.pixels, cv2.COLOR_RGBA2BGRA), (dw, dh),
        interpolation=cv2.INTER_NEAREST)

    mask = overlay[..., 3] > 0
    if np.any(mask):
        cam[mask] = cv2.addWeighted(
            cam[mask], 1.0 - alpha,
            overlay[..., :3][mask], alpha, 0
        )
    return cam
