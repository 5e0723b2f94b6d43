"""输出目录准备与 PNG 写入。"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PIL import Image

from app_icon_generator.core.exceptions import RenderError

LOGGER = logging.getLogger(__name__)

PNG_MODES = {"RGB", "RGBA"}


class OutputManager:
    """负责在输出根目录下创建子目录并写入图标文件。

    失败时不做清理，由调用方丢弃整个输出目录。
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir.resolve()

    def prepare_dir(self, relative: str | Path, *, platform: Optional[str] = None) -> Path:
        """确保输出子目录存在。"""

        directory = self.output_dir / relative
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise RenderError(f"无法创建输出目录: {directory}", platform=platform) from exc
        return directory

    def save_png(
        self,
        image: Image.Image,
        destination: Path,
        *,
        platform: Optional[str] = None,
    ) -> None:
        """以无损 PNG 格式保存 PIL Image。"""

        image_to_save = image
        if image.mode not in PNG_MODES:
            image_to_save = image.convert("RGBA")

        try:
            image_to_save.save(destination, format="PNG", optimize=True)
        except (OSError, ValueError) as exc:
            raise RenderError(
                f"写入文件失败: {destination}",
                platform=platform,
                pixel_size=image.width,
                filename=destination.name,
            ) from exc

        LOGGER.debug("已写入 %s (%dx%d)", destination, image.width, image.height)
