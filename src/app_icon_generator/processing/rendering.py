"""图标渲染：cover 模式缩放、圆形遮罩与背景铺底。"""

from __future__ import annotations

import logging
from typing import Tuple

from PIL import Image, ImageChops, ImageDraw, ImageOps

from app_icon_generator.core.exceptions import RenderError

LOGGER = logging.getLogger(__name__)

_RESAMPLING = getattr(Image, "Resampling", Image)

# 圆形遮罩先以更高分辨率绘制再缩小，得到平滑边缘。
MASK_SUPERSAMPLE = 4


def render_cover(image: Image.Image, pixel_size: int) -> Image.Image:
    """居中裁剪并缩放为 pixel_size x pixel_size，铺满不留边。"""

    if pixel_size <= 0:
        raise RenderError(f"无效的目标尺寸: {pixel_size}", pixel_size=pixel_size)

    try:
        return ImageOps.fit(image, (pixel_size, pixel_size), _RESAMPLING.LANCZOS, centering=(0.5, 0.5))
    except (OSError, ValueError) as exc:
        raise RenderError(f"缩放失败: {pixel_size}x{pixel_size}", pixel_size=pixel_size) from exc


def apply_round_mask(square: Image.Image) -> Image.Image:
    """在方形图标上叠加圆形 alpha 遮罩，圆外区域完全透明。"""

    rounded = square.convert("RGBA")
    mask = _round_mask(rounded.width)
    rounded.putalpha(ImageChops.multiply(rounded.getchannel("A"), mask))
    return rounded


def flatten(image: Image.Image, color: Tuple[int, int, int, int]) -> Image.Image:
    """将透明区域铺底为指定颜色，返回不含 alpha 的 RGB 图像。"""

    if image.mode != "RGBA":
        return image.convert("RGB")

    background = Image.new("RGBA", image.size, color[:3] + (255,))
    background.alpha_composite(image)
    return background.convert("RGB")


def _round_mask(size: int) -> Image.Image:
    large = size * MASK_SUPERSAMPLE
    mask = Image.new("L", (large, large), 0)
    draw = ImageDraw.Draw(mask)
    draw.ellipse((0, 0, large - 1, large - 1), fill=255)
    return mask.resize((size, size), _RESAMPLING.LANCZOS)
