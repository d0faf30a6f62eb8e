"""深度图查看管理器 — 串行化访问 DepthModel，提供叠加图 PNG / 合成 JPEG。"""
import logging
import threading

import cv2

from readdepth.config import DEFAULT_ALPHA, DEFAULT_UNIT, JPEG_QUALITY, UNITS, VIEW_ORIGIN
from readdepth.depth_model import DepthModel
from readdepth.errors import DepthError
from readdepth.units import convert_depth, format_depth, symbol_for_unit
from readdepth.vis_utils import blend_overlay

logger = logging.getLogger(__name__)


class DepthHandler:
    """封装 DepthModel；所有模型调用都在同一把锁内完成。"""

    def __init__(self):
        self._model = DepthModel()
        self._lock = threading.Lock()
        self._alpha = DEFAULT_ALPHA
        self._unit = DEFAULT_UNIT

    def has_depth(self) -> bool:
        with self._lock:
            return self._model.has_depth

    # ---------- 加载 ----------

    def load_color(self, data: bytes) -> dict:
        with self._lock:
            try:
                self._model.load_color(data)
            except DepthError as e:
                logger.warning("color load failed: %s", e)
                return {"success": False, "error": str(e)}
            return {"success": True, "error": None,
                    "orientation": int(self._model.orientation),
                    "orientation_stale": self._model.orientation_stale}

    def load_depth(self, data: bytes) -> dict:
        with self._lock:
            try:
                self._model.load_depth(data)
            except DepthError as e:
                logger.warning("depth load failed: %s", e)
                return {"success": False, "error": str(e)}
            return {"success": True, "error": None,
                    "resolution": f"{self._model.width}x{self._model.height}"}

    # ---------- 配置 ----------

    def set_rotation(self, angle) -> dict:
        with self._lock:
            try:
                self._model.set_manual_rotation(angle)
            except (ValueError, DepthError) as e:
                return {"success": False, "error": str(e)}
            return {"success": True, "error": None}

    def set_alpha(self, alpha: float):
        self._alpha = max(0.0, min(1.0, alpha))

    def set_unit(self, unit: str) -> dict:
        if unit not in UNITS:
            return {"success": False, "error": f"unknown unit {unit!r}"}
        self._unit = unit
        return {"success": True, "error": None}

    def get_status(self) -> dict:
        with self._lock:
            m = self._model
            return {
                "depth_loaded": m.has_depth,
                "color_loaded": m.color_image is not None,
                "resolution": f"{m.width}x{m.height}",
                "rotation": int(m.rotation),
                "orientation": int(m.orientation),
                "orientation_stale": m.orientation_stale,
                "alpha": self._alpha,
                "unit": self._unit,
            }

    # ---------- 查询 ----------

    def probe(self, x: float, y: float, view_w: float, view_h: float) -> dict:
        """视图坐标 (原点左上, 视图中按比例显示彩色图) → 深度。"""
        with self._lock:
            m = self._model
            pixel = None
            depth = None
            if m.has_depth:
                pixel = m.pixel_at_pointer((view_w, view_h), (x, y), origin=VIEW_ORIGIN)
                if pixel is not None:
                    depth = m.depth_at(*pixel)

        result = {"inside": pixel is not None,
                  "pixel": list(pixel) if pixel is not None else None,
                  "depth": depth, "value": None, "label": None,
                  "unit": symbol_for_unit(self._unit)}
        if depth is not None:
            result["value"] = convert_depth(depth, self._unit)
            result["label"] = format_depth(depth, self._unit)
        return result

    # ---------- 图像输出 ----------

    def get_overlay_png(self) -> bytes | None:
        with self._lock:
            raster = self._model.visualization
            if raster is None:
                return None
            bgra = cv2.cvtColor(raster.pixels, cv2.COLOR_RGBA2BGRA)
        ok, buf = cv2.imencode('.png', bgra)
        return buf.tobytes() if ok else None

    def get_composite_jpeg(self, quality: int = JPEG_QUALITY) -> bytes | None:
        with self._lock:
            color = self._model.color_image
            raster = self._model.visualization
            if color is None:
                return None
            cam = blend_overlay(color, raster, self._alpha) if raster is not None else color
            _, buf = cv2.imencode('.jpg', cam,
                                  [cv2.IMWRITE_JPEG_QUALITY, quality])
        return buf.tobytes()
