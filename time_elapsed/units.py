"""纳秒时长与人类可读单位之间的换算。"""

from __future__ import annotations

from typing import List, Tuple

# 从小到大排列，值为每个单位对应的纳秒数。
UNITS: List[Tuple[str, int]] = [
    ("ns", 1),
    ("μs", 1_000),
    ("ms", 1_000_000),
    ("s", 1_000_000_000),
    ("min", 60_000_000_000),
    ("hrs", 3_600_000_000_000),
]
_FACTORS = dict(UNITS)


def _check_nanos(nanos: int) -> None:
    if nanos < 0:
        raise ValueError(f"Duration must be non-negative, got {nanos} ns.")


def unit_of_measurement(nanos: int) -> str:
    """选择使显示值不小于 1 的最大单位。

    Args:
        nanos: 以纳秒表示的时长。

    Returns:
        单位名称；不足 1 ns 时退回最小单位 ``ns``。
    """

    _check_nanos(nanos)
    chosen = UNITS[0][0]
    for unit, factor in UNITS:
        if nanos < factor:
            break
        chosen = unit
    return chosen


def units_of_measurement(nanos: int) -> Tuple[str, str]:
    """返回主单位及其下一级更小的单位，供总结行使用。"""

    primary = unit_of_measurement(nanos)
    names = [unit for unit, _ in UNITS]
    index = names.index(primary)
    return primary, names[max(0, index - 1)]


def nanos_to_unit(nanos: int, unit: str) -> int:
    """将纳秒截断换算为 ``unit`` 下的整数值。

    Raises:
        KeyError: ``unit`` 不在 :data:`UNITS` 中。
        ValueError: ``nanos`` 为负数。
    """

    _check_nanos(nanos)
    if unit not in _FACTORS:
        raise KeyError(f"Unknown unit of measurement: {unit!r}")
    return int(nanos) // _FACTORS[unit]


def format_duration(nanos: int) -> str:
    """按自动单位格式化时长，例如 ``200 ms``。"""

    unit = unit_of_measurement(nanos)
    return f"{nanos_to_unit(nanos, unit)} {unit}"
