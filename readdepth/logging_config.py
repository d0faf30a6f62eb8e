"""日志配置 — 查看器启动时调用, readdepth.* 日志输出到 stdout。"""
import logging
import sys

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """重复调用只调整级别, 不重复添加 handler。"""
    logger = logging.getLogger("readdepth")
    logger.setLevel(level)
    if not any(getattr(h, "_readdepth", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
        handler._readdepth = True
        logger.addHandler(handler)
    return logger
