"""
DepthModel — 持有当前深度缓冲区、方向/旋转状态和派生的叠加图。

流程: load_depth → 解码 → 按彩色图 EXIF 方向自动校正 → 按手动旋转选择旋转
      → 着色。任何一步失败, 之前的状态保持不变。

方向时序: 彩色图的方向值只作用于 *下一次* 深度加载。先加载深度再加载彩色图,
或深度加载后更换彩色图, 深度图会保持旧方向 (orientation_stale 为 True),
需要重新加载深度图。
"""
import logging

import numpy as np

from readdepth.buffer_rotator import rotate_by_angle, rotate_by_orientation
from readdepth.color_image import decode_color
from readdepth.coord_mapper import map_pointer, view_to_image
from readdepth.depth_buffer import DepthBuffer, ManualRotation, OrientationTag
from readdepth.raster_decoder import decode_depth_tiff, read_depth_file
from readdepth.vis_utils import VisualizationRaster, depth_to_rgba

logger = logging.getLogger(__name__)


class DepthModel:
    """单线程使用；跨线程调用需由宿主串行化 (见 webapp.depth_handler)。"""

    def __init__(self):
        self._oriented: DepthBuffer | None = None     # 自动校正后的缓冲区
        self._buffer: DepthBuffer | None = None       # 当前 = _oriented 再手动旋转
        self._raster: VisualizationRaster | None = None
        self._rotation = ManualRotation.DEG_0
        self._orientation = OrientationTag.IDENTITY
        self._depth_orientation = OrientationTag.IDENTITY  # 当前深度图使用的方向
        self._color: np.ndarray | None = None

    # ---------- 状态 ----------

    @property
    def has_depth(self) -> bool:
        return self._buffer is not None

    @property
    def width(self) -> int:
        return self._buffer.width if self._buffer is not None else 0

    @property
    def height(self) -> int:
        return self._buffer.height if self._buffer is not None else 0

    @property
    def buffer(self) -> DepthBuffer | None:
        return self._buffer

    @property
    def visualization(self) -> VisualizationRaster | None:
        return self._raster

    @property
    def rotation(self) -> ManualRotation:
        return self._rotation

    @property
    def orientation(self) -> OrientationTag:
        return self._orientation

    @property
    def orientation_stale(self) -> bool:
        """深度图的校正方向与最近加载的彩色图不一致。"""
        return self.has_depth and self._depth_orientation != self._orientation

    @property
    def color_image(self) -> np.ndarray | None:
        return self._color

    # ---------- 加载 ----------

    def load_color(self, data: bytes) -> None:
        image, tag = decode_color(data)
        self._color = image
        self._orientation = tag
        if self.orientation_stale:
            logger.warning(
                "color orientation %s differs from loaded depth map (%s); "
                "reload the depth map to apply it",
                tag.name, self._depth_orientation.name)
        logger.info("color image %dx%d, orientation %s",
                    image.shape[1], image.shape[0], tag.name)

    def load_depth(self, data: bytes) -> None:
        self._publish(decode_depth_tiff(data))

    def load_depth_file(self, path) -> None:
        self._publish(read_depth_file(path))

    def _publish(self, raw: DepthBuffer) -> None:
        oriented = rotate_by_orientation(raw, self._orientation)
        current = rotate_by_angle(oriented, self._rotation)
        raster = depth_to_rgba(current)
        # 全部成功后整体替换
        self._oriented = oriented
        self._buffer = current
        self._raster = raster
        self._depth_orientation = self._orientation
        logger.info("depth map %dx%d loaded (orientation %s, rotation %d)",
                    current.width, current.height,
                    self._orientation.name, int(self._rotation))

    # ---------- 旋转 ----------

    def set_manual_rotation(self, angle) -> None:
        """总是从自动校正后的缓冲区重新计算, 不累加。"""
        angle = ManualRotation.from_degrees(angle)
        if self._oriented is None:
            self._rotation = angle
            return
        current = rotate_by_angle(self._oriented, angle)
        raster = depth_to_rgba(current)
        self._rotation = angle
        self._buffer = current
        self._raster = raster

    # ---------- 查询 ----------

    def depth_at(self, x: int, y: int) -> float | None:
        """(x, y) 处深度 (米)；越界或非有限值返回 None。"""
        buf = self._buffer
        if buf is None or not (0 <= x < buf.width and 0 <= y < buf.height):
            return None
        value = float(buf.samples[y * buf.width + x])
        return value if np.isfinite(value) else None

    def pixel_at_pointer(self, view_size, point,
                         origin: str = "bottom-left") -> tuple[int, int] | None:
        """视图坐标 → 当前缓冲区像素。

        加载了彩色图时, 视图中显示的是彩色图 (按比例居中), 叠加图再按比例
        居中在彩色图内: 先映射到彩色图坐标, 再映射到缓冲区。
        """
        if self._buffer is None:
            return None
        if self._color is not None:
            ch, cw = self._color.shape[:2]
            point = view_to_image(view_size, (cw, ch), point)
            if point is None:
                return None
            view_size = (cw, ch)
        return map_pointer(view_size, (self.width, self.height), point, origin)

    def handle_pointer(self, view_size, point,
                       origin: str = "bottom-left") -> float | None:
        pixel = self.pixel_at_pointer(view_size, point, origin)
        if pixel is None:
            return None
        return self.depth_at(*pixel)
