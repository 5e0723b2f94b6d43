"""图标生成任务的配置模型。"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(slots=True)
class IosOutputConfig:
    """iOS 资源目录结构相关配置。"""

    asset_catalog: str = "Assets.xcassets"
    icon_set: str = "AppIcon.appiconset"
    background_color: Optional[str] = None  # 设置后将透明区域铺底为该颜色

    @property
    def folder(self) -> str:
        """Contents.json 中记录的相对路径。"""

        return f"{self.asset_catalog}/{self.icon_set}/"


@dataclass(slots=True)
class AndroidOutputConfig:
    """Android mipmap 输出相关配置。"""

    res_dir: str = "android"
    round_icons: bool = True


@dataclass(slots=True)
class ValidationConfig:
    """生成后对比源图计算相似度指标。"""

    enabled: bool = False


@dataclass(slots=True)
class GenerationConfig:
    """单次图标生成任务的配置集合。"""

    min_recommended_size: int = 1024
    ios: IosOutputConfig = field(default_factory=IosOutputConfig)
    android: AndroidOutputConfig = field(default_factory=AndroidOutputConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    report_filename: Optional[str] = None
