"""ReadDepth — 浮点深度图 (float32 TIFF) 叠加查看核心。"""
from readdepth.depth_buffer import DepthBuffer, ManualRotation, OrientationTag
from readdepth.depth_model import DepthModel
from readdepth.errors import (
    DecodeError,
    DegenerateRange,
    DepthError,
    SizeMismatch,
    SourceUnavailable,
    VisualizationError,
)

__all__ = [
    "DepthBuffer",
    "DepthModel",
    "ManualRotation",
    "OrientationTag",
    "DepthError",
    "DecodeError",
    "SourceUnavailable",
    "SizeMismatch",
    "VisualizationError",
    "DegenerateRange",
]
