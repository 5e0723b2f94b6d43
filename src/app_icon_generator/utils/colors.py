"""颜色工具函数。"""

from __future__ import annotations

import re
from typing import Tuple

from app_icon_generator.core.exceptions import InvalidConfigurationError

HEX_COLOR_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def parse_hex_color(value: str) -> Tuple[int, int, int, int]:
    """将 HEX 字符串（#RGB、#RRGGBB 或 #RRGGBBAA）解析为 RGBA 四元组。"""

    if not value:
        raise InvalidConfigurationError("颜色值不能为空")

    match = HEX_COLOR_RE.match(value.strip())
    if not match:
        raise InvalidConfigurationError(f"无法解析颜色值: {value}")

    hex_value = match.group(1)
    if len(hex_value) == 3:
        hex_value = "".join(ch * 2 for ch in hex_value)
    if len(hex_value) == 6:
        hex_value += "ff"

    channels = [int(hex_value[idx : idx + 2], 16) for idx in range(0, 8, 2)]
    return channels[0], channels[1], channels[2], channels[3]
