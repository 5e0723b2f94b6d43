"""源图片加载、校验与基础预处理。"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Union

from PIL import Image, ImageOps, UnidentifiedImageError

from app_icon_generator.core.exceptions import InvalidImageError
from app_icon_generator.core.models import SourceImage

LOGGER = logging.getLogger(__name__)

SourceInput = Union[SourceImage, Path, str, bytes]

# Pillow 打开 16 位灰度 PNG 时使用的模式
HIGH_BIT_DEPTH_MODES = {"I", "I;16", "I;16B", "I;16L", "I;16N"}
SIXTEEN_TO_EIGHT_BIT = 1 / 256


def load_source(source: SourceInput) -> SourceImage:
    """读取源图片并确认可解码、具有有效尺寸。

    接受文件路径或原始字节；任何失败都以 InvalidImageError 抛出，此时尚未写入任何文件。
    """

    if isinstance(source, SourceImage):
        return source

    path = None
    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
    else:
        path = Path(source)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise InvalidImageError(f"无法读取源图片: {path}") from exc

    label = str(path) if path else "<bytes>"
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            image_format = img.format or "UNKNOWN"
            transposed = ImageOps.exif_transpose(img)
            width, height = transposed.size
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
        LOGGER.debug("无法识别图像文件 %s: %s", label, exc)
        raise InvalidImageError(f"无法解码源图片: {label}") from exc

    if not width or not height:
        raise InvalidImageError(f"无法读取源图片尺寸: {label}")

    LOGGER.info("源图片校验通过：%dx%d %s", width, height, image_format)
    return SourceImage(data=data, width=width, height=height, format=image_format, path=path)


def decode_source(source: SourceImage) -> Image.Image:
    """解码为新的 Image 对象，执行 EXIF 旋转与模式归一化。

    返回值为新的 Image 对象，调用者负责关闭。
    """

    try:
        with Image.open(io.BytesIO(source.data)) as img:
            img.load()
            img = ImageOps.exif_transpose(img)
            if img.mode not in {"RGB", "RGBA"}:
                img = _normalize_mode(img)
            return img.copy()
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise InvalidImageError("无法解码源图片") from exc


def _normalize_mode(img: Image.Image) -> Image.Image:
    """将任意模式图像转换为 RGB 或 RGBA，保留透明信息。"""

    if img.mode in HIGH_BIT_DEPTH_MODES:
        img = _to_8bit_grayscale(img)
    elif img.mode == "F":
        raise InvalidImageError("不支持的颜色模式: F（32 位浮点）")

    has_alpha = img.mode in {"LA", "PA", "RGBa", "La"} or "transparency" in img.info
    if has_alpha:
        return img.convert("RGBA")

    if img.mode == "CMYK":
        return img.convert("RGB")

    # 其他模式直接转换
    return img.convert("RGB")


def _to_8bit_grayscale(img: Image.Image) -> Image.Image:
    """16 位灰度线性缩放到 8 位（65535 -> 255）。"""

    wide = img if img.mode == "I" else img.convert("I")
    return wide.point(lambda value: value * SIXTEEN_TO_EIGHT_BIT).convert("L")
