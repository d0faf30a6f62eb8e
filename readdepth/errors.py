"""深度管线错误类型。全部可恢复：调用方记录/显示后保留之前的有效状态。"""


class DepthError(Exception):
    """Base class for every recoverable depth pipeline error."""


class DecodeError(DepthError):
    pass


class SourceUnavailable(DecodeError):
    """Byte source could not be opened, or carries no pixel data."""


class SizeMismatch(DecodeError):
    """Payload length does not match the declared width x height floats."""


class VisualizationError(DepthError):
    pass


class DegenerateRange(VisualizationError):
    """Buffer is empty or flat; no overlay can be normalized from it."""
