"""TimeElapsed 计时器的测试，使用可控的伪时钟。"""

from __future__ import annotations

import logging
import re

import pytest

from time_elapsed.timer import TimeElapsed, start
from time_elapsed.units import UNITS
from time_elapsed.utils.io import load_defaults

_VALUE = re.compile(r"-> (\d+) (\S+)$")


def _clock(*ticks: int):
    values = iter(ticks)
    return lambda: next(values)


def test_readme_example_output(capsys):
    """log/timestamp/log_overall/end 的输出应与 README 示例一致。"""

    clock = _clock(0, 200_000_000, 200_000_000, 202_103_000, 202_271_000, 202_271_000)
    time = start("test", color=False, clock=clock)
    time.log("log() prints a message and the time elapsed").timestamp()
    time.log("this is an offset from the previous timestamp()")
    time.log_overall("log_overall() ignores timestamps")
    total = time.end()

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "running test...",
        "(test) log() prints a message and the time elapsed -> 200 ms",
        "(test) this is an offset from the previous timestamp() -> 2 ms",
        "(test) log_overall() ignores timestamps -> 202 ms",
        "test finished in 202 ms (202271 μs)",
    ]
    assert total == 202_271_000
    assert time.elapsed == total


def test_log_returns_self_for_chaining():
    """log 与 log_overall 返回计时器自身。"""

    time = start("chain", color=False, clock=_clock(0, 5, 6, 7))
    assert time.log("a") is time
    assert time.log_overall("b") is time
    assert time.timestamp() == 7


def test_timestamp_then_log_is_near_zero(capsys):
    """timestamp 之后立即 log 得到接近零的耗时。"""

    time = start("zero", color=False, clock=_clock(0, 3_000_000_000, 3_000_000_000))
    time.timestamp()
    time.log("right after")
    assert capsys.readouterr().out.splitlines()[-1] == "(zero) right after -> 0 ns"


def _printed_nanos(line: str) -> int:
    value, unit = _VALUE.search(line).groups()
    return int(value) * dict(UNITS)[unit]


@pytest.mark.parametrize(
    "ticks",
    [
        (0, 200_000_000, 202_103_000, 202_271_000),
        (0, 10, 500_000, 900_000),
        (0, 0, 999_999, 1_000_500),
        (0, 59_000_000_000, 118_999_999_999, 119_000_000_000),
        (0, 5, 5, 5),
    ],
)
def test_log_overall_is_not_less_than_log(capsys, ticks):
    """自创建起的耗时不小于最近一次 log 的耗时。"""

    created, checkpoint, lap_at, overall_at = ticks
    time = start("t", color=False, clock=_clock(created, checkpoint, lap_at, overall_at))
    time.timestamp()
    time.log("lap")
    time.log_overall("overall")
    lap_line, overall_line = capsys.readouterr().out.splitlines()[-2:]
    assert _printed_nanos(overall_line) >= _printed_nanos(lap_line)


def test_log_overall_keeps_checkpoint():
    """log_overall 不修改检查点。"""

    time = start("t", color=False, clock=_clock(0, 10, 20, 30))
    time.timestamp()
    time.log_overall("overall")
    time.log_overall("again")
    assert time.last_timestamp == 10
    assert time.start_timestamp == 0


def test_direct_construction_reads_display_defaults():
    """直接构造 TimeElapsed 与 start() 使用相同的 defaults.yaml 颜色。"""

    display = load_defaults()["display"]
    time = TimeElapsed("x", clock=_clock(0))
    assert time.palette.enabled is bool(display["color"])
    assert time.palette.name_color == display["name_color"]
    assert time.palette.value_color == display["value_color"]


def test_running_line_is_uncolored(capsys):
    """开始提示行不带颜色转义。"""

    start("plain", color=True, clock=_clock(0))
    assert capsys.readouterr().out.splitlines()[0] == "running plain..."


def test_creation_and_checkpoint_start_equal():
    """创建时两个时刻相同。"""

    time = TimeElapsed("x", clock=_clock(42))
    assert time.start_timestamp == time.last_timestamp == 42


def test_colored_output_highlights_name_and_value(capsys):
    """着色模式下名称为绿色、时长为品红色。"""

    time = start("c", color=True, clock=_clock(0, 1_500))
    time.log("msg")
    line = capsys.readouterr().out.splitlines()[-1]
    assert "\x1b[32m\x1b[1mc\x1b[0m" in line
    assert "\x1b[35m\x1b[1m1 μs\x1b[0m" in line


def test_display_override_changes_colors(capsys):
    """display 覆盖项可替换颜色。"""

    time = start("c", color=True, clock=_clock(0, 1), display={"name_color": "cyan"})
    time.log("msg")
    assert "\x1b[36m" in capsys.readouterr().out
    with pytest.raises(KeyError):
        start("bad", display={"value_color": "ultraviolet"})


def test_context_manager_ends_timer(capsys):
    """离开 with 块时自动调用 end，且不吞掉异常。"""

    with pytest.raises(RuntimeError):
        with start("ctx", color=False, clock=_clock(0, 1_204)) as time:
            raise RuntimeError("boom")
    assert time.elapsed == 1_204
    assert capsys.readouterr().out.splitlines()[-1] == "ctx finished in 1 μs (1204 ns)"


def test_logger_receives_plain_lines(caplog):
    """logger 收到去除颜色转义的输出行。"""

    logger = logging.getLogger("time_elapsed.tests")
    with caplog.at_level(logging.INFO, logger="time_elapsed.tests"):
        time = start("log", color=True, logger=logger, clock=_clock(0, 2_000_000))
        time.log("step")
    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["running log...", "(log) step -> 2 ms"]
