"""日志初始化。"""

from __future__ import annotations

import logging


def setup_logging(level: int = logging.INFO) -> None:
    """初始化项目日志配置。"""

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(processName)s] %(levelname)s %(name)s: %(message)s",
    )
    # Pillow 的 PNG 插件在 DEBUG 级别会逐块输出日志
    logging.getLogger("PIL").setLevel(max(level, logging.INFO))
