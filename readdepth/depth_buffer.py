"""
深度缓冲区与方向枚举。

DepthBuffer 是行优先 (row 0 = 顶部) 的 float32 样本序列，
长度始终等于 width * height。旋转总是生成新缓冲区，从不原地修改。
"""
from dataclasses import dataclass
from enum import IntEnum

import numpy as np


class OrientationTag(IntEnum):
    """EXIF 方向值 — 将传感器原始方向的深度图对齐到彩色图显示方向。"""
    IDENTITY = 1
    ROTATE_180 = 3
    ROTATE_90_CW = 6
    ROTATE_90_CCW = 8

    @classmethod
    def from_exif(cls, value) -> "OrientationTag":
        """未知值 (含镜像方向 2/4/5/7 和 None) 一律视为 IDENTITY。"""
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.IDENTITY


class ManualRotation(IntEnum):
    """用户选择的旋转角度 (90 = 顺时针, 270 = 逆时针)。"""
    DEG_0 = 0
    DEG_90 = 90
    DEG_180 = 180
    DEG_270 = 270

    @classmethod
    def from_degrees(cls, value) -> "ManualRotation":
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            raise ValueError(f"rotation must be one of 0, 90, 180, 270: {value!r}") from None

    def next(self) -> "ManualRotation":
        members = list(type(self))
        return members[(members.index(self) + 1) % len(members)]


@dataclass(eq=False)
class DepthBuffer:
    width: int
    height: int
    samples: np.ndarray

    def __post_init__(self):
        samples = np.array(self.samples, dtype=np.float32).reshape(-1)
        if self.width < 0 or self.height < 0:
            raise ValueError(f"negative buffer size {self.width}x{self.height}")
        if samples.size != self.width * self.height:
            raise ValueError(
                f"{samples.size} samples for a {self.width}x{self.height} buffer")
        # 只读: 旋转前后两个缓冲区不能通过共享数组互相修改
        samples.flags.writeable = False
        self.samples = samples

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "DepthBuffer":
        """(H, W) 数组 → DepthBuffer (复制)。"""
        arr = np.asarray(arr, dtype=np.float32)
        if arr.ndim != 2:
            raise ValueError(f"expected a 2-D array, got shape {arr.shape}")
        h, w = arr.shape
        return cls(w, h, arr.reshape(-1))

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def as_2d(self) -> np.ndarray:
        return self.samples.reshape(self.height, self.width)

    def __len__(self):
        return self.samples.size

    def __repr__(self):
        return f"DepthBuffer({self.width}x{self.height})"
