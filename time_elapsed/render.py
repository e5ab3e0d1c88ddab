"""计时器输出行的拼装与 ANSI 着色。"""

from __future__ import annotations

from typing import Dict

RESET = "\x1b[0m"
BOLD = "\x1b[1m"
COLORS: Dict[str, str] = {
    "black": "\x1b[30m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "white": "\x1b[37m",
}


class Palette:
    """名称与时长两种高亮颜色；``enabled`` 为假时不输出任何转义序列。"""

    def __init__(self, enabled: bool = True, name_color: str = "green", value_color: str = "magenta") -> None:
        if name_color not in COLORS or value_color not in COLORS:
            raise KeyError(f"Unsupported color, choose from {sorted(COLORS)}")
        self.enabled = enabled
        self.name_color = name_color
        self.value_color = value_color

    def name(self, text: str) -> str:
        return self._wrap(text, COLORS[self.name_color] + BOLD)

    def value(self, text: str) -> str:
        return self._wrap(text, COLORS[self.value_color] + BOLD)

    def bold(self, text: str) -> str:
        return self._wrap(text, BOLD)

    def _wrap(self, text: str, prefix: str) -> str:
        if not self.enabled:
            return text
        return f"{prefix}{text}{RESET}"


def running_line(name: str) -> str:
    """计时开始时的提示行：``running <name>...``，不着色。"""

    return f"running {name}..."


def message_line(name: str, message: str, value: int, unit: str, palette: "Palette") -> str:
    """拼装 ``(<name>) <message> -> <value> <unit>`` 形式的单行输出。"""

    return f"({palette.name(name)}) {palette.bold(message)} -> {palette.value(f'{value} {unit}')}"


def summary_line(name: str, values: tuple[int, int], units: tuple[str, str], palette: "Palette") -> str:
    """拼装结束时的总结行，括号内为更精细单位下的精确计数。

    Args:
        name: 计时器名称。
        values: 主单位与次单位下的数值。
        units: 与 ``values`` 对应的单位名称。
        palette: 着色方案。

    Returns:
        形如 ``test finished in 202 ms (202271 μs)`` 的字符串。
    """

    primary = palette.value(f"{values[0]} {units[0]}")
    return f"{palette.name(f'{name} finished')} in {primary} ({values[1]} {units[1]})"
