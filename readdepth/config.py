"""
共用配置常量 — 深度可视化、坐标映射与查看器默认值。
"""

# 深度可视化
HUE_RANGE_DEG = 240.0   # 近=红(0°), 远=蓝(240°)
DEFAULT_ALPHA = 0.5     # 叠加透明度

# 深度单位 (样本单位为米)
DEFAULT_UNIT = "mm"
UNITS = ("mm", "cm", "m")

# 指针坐标原点: "top-left" (浏览器 / OpenCV 窗口) 或 "bottom-left"
VIEW_ORIGIN = "top-left"

# 输出编码
JPEG_QUALITY = 80

# 桌面查看器窗口
WINDOW_SIZE = (1280, 800)
