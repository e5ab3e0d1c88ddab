"""读取展示默认值与用户覆盖配置的 IO 辅助函数。"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULTS_PATH = Path(__file__).resolve().parent.parent / "config" / "defaults.yaml"


def read_yaml(path: str) -> dict:
    """从 ``path`` 读取 YAML 配置。

    Args:
        path: YAML 文件路径，例如 ``time_elapsed/config/defaults.yaml``。

    Returns:
        解析后的字典；若文件不存在则返回空字典。
    """

    yaml_path = Path(path)
    if not yaml_path.exists():
        return {}
    with yaml_path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def load_defaults() -> Dict[str, Any]:
    """读取随包分发的 ``config/defaults.yaml``。"""

    return read_yaml(str(DEFAULTS_PATH))
