"""测试共用的源图片构造工具。"""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image, ImageDraw


def make_source(path: Path, size: tuple[int, int] = (2048, 2048), fmt: str = "PNG") -> Path:
    """生成带有渐变与色块的源图片，避免纯色图掩盖缩放问题。"""

    width, height = size
    image = Image.new("RGB", size, "white")
    draw = ImageDraw.Draw(image)
    for x in range(0, width, max(width // 64, 1)):
        shade = int(255 * x / max(width - 1, 1))
        draw.rectangle((x, 0, x + width // 64, height), fill=(shade, 80, 255 - shade))
    draw.ellipse((width // 4, height // 4, width * 3 // 4, height * 3 // 4), fill=(250, 200, 0))
    image.save(path, format=fmt)
    return path


@pytest.fixture
def source_factory(tmp_path: Path):
    def factory(name: str = "source.png", size: tuple[int, int] = (2048, 2048), fmt: str = "PNG") -> Path:
        return make_source(tmp_path / name, size, fmt)

    return factory


@pytest.fixture
def png_source(source_factory) -> Path:
    return source_factory()
