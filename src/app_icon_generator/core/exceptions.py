"""项目内使用的自定义异常定义。"""

from __future__ import annotations

from typing import Optional


class IconGeneratorError(Exception):
    """基础异常类型。"""


class ValidationError(IconGeneratorError):
    """平台选择等输入参数不合法时抛出。"""


class InvalidConfigurationError(ValidationError):
    """配置不合法时抛出。"""


class InvalidImageError(IconGeneratorError):
    """源图片无法解码或缺少尺寸信息时抛出。"""


class RenderError(IconGeneratorError):
    """单个尺寸的缩放、编码或写入失败，整个任务随之中止。"""

    def __init__(
        self,
        message: str,
        *,
        platform: Optional[str] = None,
        pixel_size: Optional[int] = None,
        filename: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.platform = platform
        self.pixel_size = pixel_size
        self.filename = filename


class LowResolutionWarning(UserWarning):
    """源图片分辨率低于推荐值，不阻断生成。"""

    def __init__(self, width: int, height: int, minimum: int) -> None:
        super().__init__(f"源图片尺寸为 {width}x{height}，建议至少 {minimum}x{minimum} 以保证清晰度")
        self.width = width
        self.height = height
        self.minimum = minimum
