"""
指针坐标映射 — 视图坐标 → 深度缓冲区像素 (aspect-fit 居中留边)。

始终对 *当前* (已旋转) 缓冲区尺寸做映射，不再做二次旋转换算。
"""
import math
from dataclasses import dataclass

ORIGINS = ("top-left", "bottom-left")


@dataclass(frozen=True)
class DisplayGeometry:
    """一次指针查询的显示几何 (不持久化)。"""
    disp_w: float
    disp_h: float
    offset_x: float
    offset_y: float
    scale_x: float   # 缓冲区像素 / 显示像素
    scale_y: float


def fit_geometry(view_size, image_size) -> DisplayGeometry | None:
    """图像按比例缩放并居中到视图内；尺寸非正时返回 None。"""
    view_w, view_h = view_size
    img_w, img_h = image_size
    if view_w <= 0 or view_h <= 0 or img_w <= 0 or img_h <= 0:
        return None

    image_aspect = img_w / img_h
    view_aspect = view_w / view_h
    if image_aspect > view_aspect:
        # 图像比视图宽: 上下留边
        disp_w, disp_h = float(view_w), view_w / image_aspect
    else:
        # 图像比视图高: 左右留边
        disp_w, disp_h = view_h * image_aspect, float(view_h)

    return DisplayGeometry(
        disp_w=disp_w,
        disp_h=disp_h,
        offset_x=(view_w - disp_w) / 2,
        offset_y=(view_h - disp_h) / 2,
        scale_x=img_w / disp_w,
        scale_y=img_h / disp_h,
    )


def map_pointer(view_size, image_size, point,
                origin: str = "bottom-left") -> tuple[int, int] | None:
    """视图坐标 → 缓冲区像素 (bx, by)；落在图像外返回 None。

    Args:
        view_size: (view_w, view_h)
        image_size: 缓冲区当前 (W, H)
        point: 视图中的 (px, py)
        origin: 视图纵轴原点。"bottom-left" 时 by 由 dispH - localY 翻转得到,
            "top-left" 时直接使用 localY。

    边界 localX == dispW 等会落到 W / H，结果截断到 [0, W-1] x [0, H-1]。
    """
    if origin not in ORIGINS:
        raise ValueError(f"unknown view origin {origin!r}")
    geo = fit_geometry(view_size, image_size)
    if geo is None:
        return None

    px, py = point
    local_x = px - geo.offset_x
    local_y = py - geo.offset_y
    if not (0 <= local_x <= geo.disp_w and 0 <= local_y <= geo.disp_h):
        return None

    img_w, img_h = image_size
    if origin == "bottom-left":
        local_y = geo.disp_h - local_y
    bx = math.floor(local_x * geo.scale_x)
    by = math.floor(local_y * geo.scale_y)
    return min(max(bx, 0), img_w - 1), min(max(by, 0), img_h - 1)


def view_to_image(view_size, image_size, point) -> tuple[float, float] | None:
    """视图坐标 → 按比例居中显示的图像内的连续坐标；落在留边处返回 None。

    纵轴方向不变 (显示区域上下居中, 两种原点下偏移相同)。
    """
    geo = fit_geometry(view_size, image_size)
    if geo is None:
        return None
    local_x = point[0] - geo.offset_x
    local_y = point[1] - geo.offset_y
    if not (0 <= local_x <= geo.disp_w and 0 <= local_y <= geo.disp_h):
        return None
    return local_x * geo.scale_x, local_y * geo.scale_y
