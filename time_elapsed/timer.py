"""在函数内部度量耗时的命名计时器。

典型用法::

    from time_elapsed.timer import start

    time = start("test")
    ...
    time.log("loaded").timestamp()
    ...
    time.log("offset from the previous timestamp()")
    time.log_overall("ignores timestamps")
    time.end()
"""

from __future__ import annotations

import logging
import re
from time import perf_counter_ns
from typing import Any, Callable, Dict, Optional

from time_elapsed import render
from time_elapsed.units import nanos_to_unit, unit_of_measurement, units_of_measurement
from time_elapsed.utils.io import load_defaults

_ANSI = re.compile(r"\x1b\[[0-9;]*m")


def start(
    name: str,
    *,
    color: bool | None = None,
    logger: Optional[logging.Logger] = None,
    clock: Callable[[], int] | None = None,
    display: Dict[str, Any] | None = None,
) -> "TimeElapsed":
    """开始计时并返回已初始化的 :class:`TimeElapsed`。

    Args:
        name: 显示在每一行输出中的计时器名称。
        color: 是否输出 ANSI 颜色；为 ``None`` 时读取 ``display.color``。
        logger: 可选日志记录器，会额外收到不带颜色的输出行。
        clock: 返回纳秒的单调时钟，默认 :func:`time.perf_counter_ns`。
        display: 覆盖 ``config/defaults.yaml`` 中 ``display`` 小节的字典。

    Returns:
        已打印 ``running <name>...`` 的计时器实例。
    """

    palette = _palette_from_defaults(display, color)
    return TimeElapsed(str(name), palette=palette, logger=logger, clock=clock)


def _palette_from_defaults(display: Dict[str, Any] | None = None, color: bool | None = None) -> "render.Palette":
    """以 ``config/defaults.yaml`` 的 ``display`` 小节为基础构建着色方案。"""

    display = {**load_defaults().get("display", {}), **(display or {})}
    return render.Palette(
        enabled=bool(display.get("color", True)) if color is None else color,
        name_color=display.get("name_color", "green"),
        value_color=display.get("value_color", "magenta"),
    )


class TimeElapsed:
    """保存计时状态：名称、创建时刻与最近一次检查点时刻。

    创建时刻在构造后不再改变；检查点只由 :meth:`timestamp` 更新。
    """

    def __init__(
        self,
        name: str,
        palette: Optional[render.Palette] = None,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.name = name
        self.palette = palette or _palette_from_defaults()
        self.logger = logger
        self._clock = clock or perf_counter_ns
        self.elapsed: int | None = None
        self._emit(render.running_line(self.name))
        now = self._clock()
        self._start = now
        self._last = now

    @property
    def start_timestamp(self) -> int:
        return self._start

    @property
    def last_timestamp(self) -> int:
        return self._last

    def log(self, message: str) -> "TimeElapsed":
        """输出消息及自上一个检查点以来的耗时，返回自身以便链式调用。"""

        self._print_message(message, self._clock() - self._last)
        return self

    def log_overall(self, message: str) -> "TimeElapsed":
        """输出消息及自创建以来的耗时，忽略所有检查点。"""

        self._print_message(message, self._clock() - self._start)
        return self

    def timestamp(self) -> int:
        """将检查点更新为当前时刻并返回该时刻（纳秒）。"""

        self._last = self._clock()
        return self._last

    def end(self) -> int:
        """结束计时，打印总耗时及更精细单位下的精确计数。

        Returns:
            自创建以来的总耗时（纳秒），同时记录在 ``elapsed`` 上。
        """

        nanos = self._clock() - self._start
        units = units_of_measurement(nanos)
        values = (nanos_to_unit(nanos, units[0]), nanos_to_unit(nanos, units[1]))
        self._emit(render.summary_line(self.name, values, units, self.palette))
        self.elapsed = nanos
        return nanos

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.end()
        return False

    def __repr__(self) -> str:
        return f"TimeElapsed(name={self.name!r})"

    def _print_message(self, message: str, nanos: int) -> None:
        unit = unit_of_measurement(nanos)
        value = nanos_to_unit(nanos, unit)
        self._emit(render.message_line(self.name, str(message), value, unit, self.palette))

    def _emit(self, line: str) -> None:
        print(line)
        if self.logger is not None:
            self.logger.info(_ANSI.sub("", line))
