"""各平台图标尺寸表。

iOS 采用 Xcode Asset Catalog 约定：每个像素尺寸只输出一个 ``<px>.png``，
Contents.json 中的多个逻辑槽位（idiom/size/scale/role）可以指向同一个文件。
表中顺序即渲染顺序与 Contents.json 的条目顺序。

Android 以 mdpi 48px 为基准，各密度像素尺寸为 ``round(48 * 倍率)``。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

IOS = "ios"
ANDROID = "android"
PLATFORMS = (IOS, ANDROID)


@dataclass(slots=True, frozen=True)
class SizeSpec:
    """尺寸表中的单个逻辑槽位。"""

    platform: str
    idiom: str
    logical_size: float
    scale: int
    role: Optional[str] = None
    subtype: Optional[str] = None

    @property
    def pixel_size(self) -> int:
        return int(round(self.logical_size * self.scale))

    @property
    def output_filename(self) -> str:
        return f"{self.pixel_size}.png"

    @property
    def size_label(self) -> str:
        value = f"{self.logical_size:g}"
        return f"{value}x{value}"

    @property
    def scale_label(self) -> str:
        return f"{self.scale}x"


@dataclass(slots=True, frozen=True)
class AndroidDensity:
    """Android 密度分档。"""

    density: str
    scale_factor: float

    @property
    def folder_name(self) -> str:
        return f"mipmap-{self.density}"

    def pixel_size(self, baseline: int) -> int:
        return int(round(baseline * self.scale_factor))


@dataclass(slots=True, frozen=True)
class MarketingSpec:
    """输出根目录下的商店图标。"""

    platform: str
    filename: str
    pixel_size: int


@dataclass(slots=True, frozen=True)
class SizeCatalog:
    """注入给生成器的只读尺寸表。"""

    ios: tuple[SizeSpec, ...]
    android: tuple[AndroidDensity, ...]
    marketing: tuple[MarketingSpec, ...]
    android_baseline: int = 48
    android_icon_name: str = "ic_launcher.png"
    android_round_icon_name: str = "ic_launcher_round.png"

    def ios_sizes(self) -> tuple[SizeSpec, ...]:
        return self.ios

    def android_densities(self) -> tuple[AndroidDensity, ...]:
        return self.android

    def ios_pixel_sizes(self) -> list[int]:
        """按首次出现顺序返回去重后的 iOS 像素尺寸。"""

        return list(dict.fromkeys(spec.pixel_size for spec in self.ios))

    def marketing_for(self, platform: str) -> Optional[MarketingSpec]:
        for spec in self.marketing:
            if spec.platform == platform:
                return spec
        return None


def _slots(idiom: str, entries: Sequence[tuple[float, int]]) -> list[SizeSpec]:
    return [SizeSpec(IOS, idiom, size, scale) for size, scale in entries]


def _watch(size: float, subtype: Optional[str], role: str, scale: int = 2) -> SizeSpec:
    return SizeSpec(IOS, "watch", size, scale, role=role, subtype=subtype)


IOS_SLOTS: tuple[SizeSpec, ...] = (
    *_slots(
        "iphone",
        [(60, 3), (40, 2), (40, 3), (60, 2), (57, 1), (29, 2), (29, 1), (29, 3), (57, 2), (20, 2), (20, 3)],
    ),
    SizeSpec(IOS, "ios-marketing", 1024, 1),
    *_slots(
        "ipad",
        [(40, 2), (72, 1), (76, 2), (50, 2), (29, 2), (76, 1), (29, 1), (50, 1), (72, 2), (40, 1), (83.5, 2), (20, 1), (20, 2)],
    ),
    _watch(86, "38mm", "quickLook"),
    _watch(40, "38mm", "appLauncher"),
    _watch(44, "40mm", "appLauncher"),
    _watch(51, "45mm", "appLauncher"),
    _watch(54, "49mm", "appLauncher"),
    _watch(46, "41mm", "appLauncher"),
    _watch(50, "44mm", "appLauncher"),
    _watch(98, "42mm", "quickLook"),
    _watch(108, "44mm", "quickLook"),
    _watch(117, "45mm", "quickLook"),
    _watch(129, "49mm", "quickLook"),
    _watch(24, "38mm", "notificationCenter"),
    _watch(27.5, "42mm", "notificationCenter"),
    _watch(33, "45mm", "notificationCenter"),
    _watch(29, None, "companionSettings", scale=3),
    _watch(29, None, "companionSettings"),
    SizeSpec(IOS, "watch-marketing", 1024, 1),
    *_slots(
        "mac",
        [(128, 1), (256, 1), (128, 2), (256, 2), (32, 1), (512, 1), (16, 1), (16, 2), (32, 2), (512, 2)],
    ),
)

ANDROID_DENSITIES: tuple[AndroidDensity, ...] = (
    AndroidDensity("mdpi", 1.0),
    AndroidDensity("hdpi", 1.5),
    AndroidDensity("xhdpi", 2.0),
    AndroidDensity("xxhdpi", 3.0),
    AndroidDensity("xxxhdpi", 4.0),
)

LDPI = AndroidDensity("ldpi", 0.75)

MARKETING: tuple[MarketingSpec, ...] = (
    MarketingSpec(IOS, "appstore.png", 1024),
    MarketingSpec(ANDROID, "playstore.png", 512),
)


def default_catalog(*, include_ldpi: bool = False) -> SizeCatalog:
    """构建默认尺寸表，可选附加 ldpi 分档。"""

    densities = (LDPI, *ANDROID_DENSITIES) if include_ldpi else ANDROID_DENSITIES
    return SizeCatalog(ios=IOS_SLOTS, android=densities, marketing=MARKETING)
