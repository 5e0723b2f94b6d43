"""核心数据模型定义。"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from app_icon_generator.core.exceptions import LowResolutionWarning


@dataclass(slots=True, frozen=True)
class SourceImage:
    """解码校验后的源图片，原始字节保持不变。"""

    data: bytes
    width: int
    height: int
    format: str
    path: Optional[Path] = None

    @property
    def min_side(self) -> int:
        return min(self.width, self.height)


@dataclass(slots=True, frozen=True)
class RenderedIcon:
    """一次生成中实际写入磁盘的图标文件。"""

    path: Path
    filename: str
    pixel_size: int
    platform: str
    density: Optional[str] = None
    round: bool = False
    phash_distance: Optional[float] = None
    ssim: Optional[float] = None


@dataclass(slots=True, frozen=True)
class ManifestEntry:
    """Contents.json 中的一条 image 记录，对应一个逻辑槽位。"""

    size: str
    expected_size: str
    filename: str
    folder: str
    idiom: str
    scale: str
    role: Optional[str] = None
    subtype: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """按 Xcode 的字段名导出，省略空的可选字段。"""

        record: dict[str, Any] = {
            "size": self.size,
            "expected-size": self.expected_size,
            "filename": self.filename,
            "folder": self.folder,
            "idiom": self.idiom,
        }
        if self.subtype:
            record["subtype"] = self.subtype
        if self.role:
            record["role"] = self.role
        record["scale"] = self.scale
        return record


@dataclass(slots=True)
class IconSet:
    """单次生成任务的产出。"""

    output_dir: Path
    ios: list[RenderedIcon] = field(default_factory=list)
    android: list[RenderedIcon] = field(default_factory=list)
    marketing: list[RenderedIcon] = field(default_factory=list)
    manifest_path: Optional[Path] = None
    manifest: list[ManifestEntry] = field(default_factory=list)
    warnings: list[LowResolutionWarning] = field(default_factory=list)
    report_path: Optional[Path] = None

    @property
    def platforms(self) -> list[str]:
        """本次实际生成了文件的平台。"""

        names = [icon.platform for icon in (*self.ios, *self.android, *self.marketing)]
        return list(dict.fromkeys(names))

    def for_platform(self, platform: str) -> list[RenderedIcon]:
        """返回某个平台的全部文件（含商店图标）。"""

        grouped = {"ios": self.ios, "android": self.android}.get(platform, [])
        return [*grouped, *(icon for icon in self.marketing if icon.platform == platform)]

    def files(self) -> list[RenderedIcon]:
        """返回所有结果记录，方便归档或生成报告。"""

        return [*self.ios, *self.android, *self.marketing]


@dataclass(slots=True)
class ProgressUpdate:
    """生成过程中的进度信息，completed 只增不减。"""

    total: int
    completed: int
    message: Optional[str] = None
    status: str = "running"  # running | done
