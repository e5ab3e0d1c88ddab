"""time-elapsed 的日志工具。"""

from __future__ import annotations

import logging
from typing import Optional


def get_logger(name: str, level: str | int = "INFO") -> "logging.Logger":
    """返回配置好的 logger，计时器可将无颜色的输出行同步写入其中。

    Args:
        name: 调用模块希望使用的日志名称。
        level: 日志级别，接受 ``"DEBUG"`` 这类名称或 ``logging`` 常量。

    Returns:
        配置了基础格式化器的 :class:`logging.Logger` 实例。
    """

    logger = logging.getLogger(name)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)
    if logger.handlers:
        return logger

    handler: Optional[logging.Handler] = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
