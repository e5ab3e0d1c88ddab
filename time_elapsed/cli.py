"""time-elapsed 的命令行接口模块。"""

from __future__ import annotations

import argparse
import subprocess
import sys
import time
from pathlib import Path
from typing import Any, Dict

from time_elapsed.timer import start
from time_elapsed.utils.io import DEFAULTS_PATH, read_yaml
from time_elapsed.utils.logging import get_logger


def _non_negative_ms(value: str) -> float:
    """argparse 的 ``type=``：拒绝负的毫秒数。"""

    ms = float(value)
    if ms < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative number of milliseconds, got {value}")
    return ms


def _build_parser() -> "argparse.ArgumentParser":
    """构建包含 ``demo`` 与 ``run`` 子命令的解析器。"""

    parser = argparse.ArgumentParser(description="Measure and print elapsed wall-clock time")
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        type=str,
        default=str(DEFAULTS_PATH),
        help="Path to a YAML file overriding the display defaults.",
    )
    common.add_argument("--no-color", action="store_true", help="Disable ANSI colors in the output.")

    demo_parser = subparsers.add_parser("demo", parents=[common], help="Replay the timestamp/log example")
    demo_parser.add_argument("--name", type=str, default="test", help="Timer name shown in every line.")
    demo_parser.add_argument("--first-ms", type=_non_negative_ms, default=200.0, help="Sleep before the first log().")
    demo_parser.add_argument("--second-ms", type=_non_negative_ms, default=2.0, help="Sleep after timestamp().")
    demo_parser.set_defaults(func=handle_demo)

    run_parser = subparsers.add_parser("run", parents=[common], help="Time an external command")
    run_parser.add_argument("--name", type=str, default=None, help="Timer name, defaults to the command.")
    run_parser.add_argument("cmd", nargs=argparse.REMAINDER, help="Command to run, after ``--``.")
    run_parser.set_defaults(func=handle_run)

    return parser


def handle_demo(args: "argparse.Namespace") -> int:
    """处理 ``demo`` 子命令：两段休眠之间演示 log、timestamp 与 log_overall。"""

    config = _load_config(args.config)
    time_ = _start_from_config(args.name, config, args.no_color)

    time.sleep(args.first_ms / 1000)
    time_.log("log() prints a message and the time elapsed").timestamp()

    time.sleep(args.second_ms / 1000)
    time_.log("this is an offset from the previous timestamp()")
    time_.log_overall("log_overall() ignores timestamps")
    time_.end()
    return 0


def handle_run(args: "argparse.Namespace") -> int:
    """处理 ``run`` 子命令，返回被计时命令的退出码。"""

    cmd = list(args.cmd)
    if cmd and cmd[0] == "--":
        cmd = cmd[1:]
    if not cmd:
        print("No command given. Usage: time-elapsed run -- CMD [ARGS ...]", file=sys.stderr)
        return 2

    config = _load_config(args.config)
    logger = get_logger("time_elapsed.cli", config.get("logging", {}).get("level", "INFO"))
    logger.debug("Running command: %s", cmd)

    try:
        process = subprocess.Popen(cmd)
    except FileNotFoundError:
        print(f"Command not found: {cmd[0]}", file=sys.stderr)
        return 127
    except PermissionError:
        print(f"Permission denied: {cmd[0]}", file=sys.stderr)
        return 126

    with _start_from_config(args.name or " ".join(cmd), config, args.no_color):
        returncode = process.wait()
    return returncode


def main(argv: list[str] | None = None) -> int:
    """CLI 入口函数，负责拼接解析器与各个处理函数。"""

    parser = _build_parser()
    args = parser.parse_args(argv)
    handler = getattr(args, "func", None)
    if handler is None:
        parser.print_help()
        return 0
    return handler(args)


def _start_from_config(name: str, config: Dict[str, Any], no_color: bool):
    """根据合并后的配置创建计时器；``--no-color`` 优先于配置文件。"""

    display = config.get("display", {})
    color = False if no_color else bool(display.get("color", True))
    return start(name, color=color, display=display)


def _load_config(path: str) -> Dict[str, Any]:
    """加载默认配置，并合并来自 ``path`` 的可选覆盖配置。"""

    config = read_yaml(str(DEFAULTS_PATH))
    if not path:
        return config

    resolved = Path(path)
    if not resolved.exists():
        raise FileNotFoundError(f"Config file '{path}' not found.")
    if resolved.resolve() == DEFAULTS_PATH.resolve():
        return config

    return _merge_dicts(config, read_yaml(str(resolved)))


def _merge_dicts(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """递归地合并两份配置字典。"""

    merged = dict(base)
    for key, value in overrides.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


if __name__ == "__main__":
    sys.exit(main())
