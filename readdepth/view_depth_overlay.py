"""
深度叠加查看器 — 伪彩色深度图半透明叠加在彩色照片上, 鼠标处显示深度。
R: 手动旋转  U: 切换单位  A/D: 调整透明度  Q/ESC: 退出。

用法: python -m readdepth.view_depth_overlay COLOR_IMAGE DEPTH_TIFF
彩色图需先于深度图加载 (深度图按彩色图的 EXIF 方向校正)。
"""
import argparse
import logging
import sys

import cv2

from readdepth.config import DEFAULT_ALPHA, DEFAULT_UNIT, UNITS, VIEW_ORIGIN, WINDOW_SIZE
from readdepth.depth_model import DepthModel
from readdepth.errors import DepthError
from readdepth.logging_config import setup_logging
from readdepth.units import format_depth
from readdepth.vis_utils import blend_overlay


def main(argv=None):
    parser = argparse.ArgumentParser(description="Depth map overlay viewer")
    parser.add_argument("color", help="color photograph (JPEG/PNG/HEIC...)")
    parser.add_argument("depth", help="single-channel float32 depth TIFF")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    print("=" * 50)
    print("ReadDepth 深度叠加查看器")
    print("R: 旋转  U: 单位  A/D: 透明度  Q/ESC: 退出")
    print("=" * 50)

    model = DepthModel()
    try:
        with open(args.color, "rb") as f:
            model.load_color(f.read())
        model.load_depth_file(args.depth)
    except (OSError, DepthError) as e:
        print(f"加载失败: {e}")
        return 1

    print(f"深度图: {model.width}x{model.height}  方向: {model.orientation.name}")

    win = "Depth Overlay"
    cv2.namedWindow(win, cv2.WINDOW_NORMAL)
    cv2.resizeWindow(win, *WINDOW_SIZE)

    alpha = DEFAULT_ALPHA
    unit = DEFAULT_UNIT
    pointer = {"pos": None}

    def on_mouse(event, x, y, flags, param):
        if event == cv2.EVENT_MOUSEMOVE:
            pointer["pos"] = (x, y)

    cv2.setMouseCallback(win, on_mouse)

    while True:
        key = cv2.waitKey(30) & 0xFF
        if key in (ord("q"), 27):
            break
        elif key == ord("a"):
            alpha = max(0.0, alpha - 0.1)
            print(f"深度透明度: {alpha:.1f}")
        elif key == ord("d"):
            alpha = min(1.0, alpha + 0.1)
            print(f"深度透明度: {alpha:.1f}")
        elif key == ord("u"):
            unit = UNITS[(UNITS.index(unit) + 1) % len(UNITS)]
            print(f"单位: {unit}")
        elif key == ord("r"):
            model.set_manual_rotation(model.rotation.next())
            print(f"旋转: {int(model.rotation)}°")

        cam = blend_overlay(model.color_image, model.visualization, alpha)
        ch, cw = cam.shape[:2]

        # 鼠标位置深度 (窗口坐标与图像坐标一致, 原点左上)
        if pointer["pos"] is not None:
            px, py = pointer["pos"]
            depth = model.handle_pointer((cw, ch), (px, py), origin=VIEW_ORIGIN)
            if depth is not None:
                cv2.drawMarker(cam, (px, py), (255, 255, 255),
                               cv2.MARKER_CROSS, 20, 2)
                cv2.putText(cam, format_depth(depth, unit), (px + 15, py - 10),
                            cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)

        # HUD
        cv2.putText(cam, f"Depth: {alpha:.0%}  Rot: {int(model.rotation)}", (10, 25),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 255, 0), 2)
        cv2.putText(cam, "R: rotate  U: unit  A/D: opacity  Q: quit", (10, ch - 15),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.45, (200, 200, 200), 1)
        cv2.imshow(win, cam)

    cv2.destroyAllWindows()
    print("完成。")
    return 0


if __name__ == "__main__":
    sys.exit(main())
