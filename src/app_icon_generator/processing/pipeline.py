"""图标生成流水线：校验输入、按尺寸表渲染、写入描述文件。

单次生成严格顺序执行；不同输出目录的多次生成之间没有共享的可变状态。
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterable, Iterator, Mapping, Optional, Tuple, Union

from PIL import Image

from app_icon_generator.core.catalog import ANDROID, IOS, PLATFORMS, SizeCatalog, default_catalog
from app_icon_generator.core.config import GenerationConfig
from app_icon_generator.core.exceptions import LowResolutionWarning, RenderError, ValidationError
from app_icon_generator.core.models import IconSet, ProgressUpdate, RenderedIcon
from app_icon_generator.core.output_manager import OutputManager
from app_icon_generator.core.report import write_csv_report
from app_icon_generator.processing.image_loader import SourceInput, decode_source, load_source
from app_icon_generator.processing.manifest import build_manifest, write_catalog_info, write_manifest
from app_icon_generator.processing.rendering import apply_round_mask, flatten, render_cover
from app_icon_generator.processing.validation import has_full_bleed, measure_icon
from app_icon_generator.utils.colors import parse_hex_color

LOGGER = logging.getLogger(__name__)


ProgressCallback = Optional[Callable[[ProgressUpdate], None]]
PlatformSelection = Union[Iterable[str], Mapping[str, object]]


def generate(
    source: SourceInput,
    platforms: PlatformSelection,
    output_dir: Path,
    *,
    catalog: Optional[SizeCatalog] = None,
    config: Optional[GenerationConfig] = None,
    progress_callback: ProgressCallback = None,
) -> IconSet:
    """从单张源图生成所选平台的全部图标。

    平台选择与源图在写入任何文件之前完成校验。任一尺寸渲染或写入失败都会以
    RenderError 中止整个任务，已写入的文件由调用方清理。
    """

    selected = normalize_platforms(platforms)
    catalog = catalog or default_catalog()
    config = config or GenerationConfig()
    background = _resolve_background(config)

    source_image = load_source(source)
    icon_set = IconSet(output_dir=Path(output_dir).resolve())

    if source_image.min_side < config.min_recommended_size:
        warning = LowResolutionWarning(source_image.width, source_image.height, config.min_recommended_size)
        LOGGER.warning("%s", warning)
        icon_set.warnings.append(warning)

    image = decode_source(source_image)
    if config.validation.enabled and not has_full_bleed(image):
        LOGGER.warning("源图片边缘存在完全透明区域，生成的图标可能看起来留有空白")

    total = _count_steps(selected, catalog, config)
    context = _RunContext(
        image=image,
        catalog=catalog,
        config=config,
        output=OutputManager(icon_set.output_dir),
        total=total,
        callback=progress_callback,
    )
    context.emit("开始生成图标")

    try:
        if IOS in selected:
            _generate_ios(context, icon_set, background)
        if ANDROID in selected:
            _generate_android(context, icon_set)
    finally:
        image.close()

    if config.report_filename:
        icon_set.report_path = write_csv_report(icon_set, icon_set.output_dir, config.report_filename)

    _emit_progress(progress_callback, total, total, "生成完成", status="done")
    LOGGER.info("生成完成：共 %d 个文件，输出目录 %s", len(icon_set.files()), icon_set.output_dir)
    return icon_set


def normalize_platforms(platforms: PlatformSelection) -> list[str]:
    """校验平台选择，返回按固定顺序排列的平台名称。"""

    if platforms is None:
        raise ValidationError("未指定平台")

    if isinstance(platforms, Mapping):
        names = [str(name) for name, enabled in platforms.items() if _is_truthy(enabled)]
    elif isinstance(platforms, str):
        names = platforms.split(",")
    else:
        names = [str(name) for name in platforms]

    requested = {name.strip().lower() for name in names if name and name.strip()}
    if not requested:
        raise ValidationError("未选择任何平台，可选值: ios, android")

    unknown = sorted(requested - set(PLATFORMS))
    if unknown:
        raise ValidationError(f"未知的平台: {', '.join(unknown)}（可选值: ios, android）")

    return [name for name in PLATFORMS if name in requested]


class _RunContext:
    """单次生成内部共享的只读参数与进度计数。"""

    __slots__ = ("image", "catalog", "config", "output", "total", "completed", "callback")

    def __init__(
        self,
        image: Image.Image,
        catalog: SizeCatalog,
        config: GenerationConfig,
        output: OutputManager,
        total: int,
        callback: ProgressCallback,
    ) -> None:
        self.image = image
        self.catalog = catalog
        self.config = config
        self.output = output
        self.total = total
        self.completed = 0
        self.callback = callback

    def emit(self, message: str) -> None:
        _emit_progress(self.callback, self.completed, self.total, message)

    def step(self, message: str) -> None:
        self.completed += 1
        self.emit(message)


def _generate_ios(context: _RunContext, icon_set: IconSet, background: Optional[Tuple[int, int, int, int]]) -> None:
    """生成 Assets.xcassets/AppIcon.appiconset 结构及 appstore.png。"""

    LOGGER.info("开始生成 iOS 图标")
    ios_config = context.config.ios
    output = context.output
    catalog_dir = output.prepare_dir(ios_config.asset_catalog, platform=IOS)
    asset_dir = output.prepare_dir(Path(ios_config.asset_catalog) / ios_config.icon_set, platform=IOS)

    rendered: dict[int, RenderedIcon] = {}
    for spec in context.catalog.ios_sizes():
        pixel_size = spec.pixel_size
        if pixel_size in rendered:
            LOGGER.debug("复用 %s：%s %s@%s", spec.output_filename, spec.idiom, spec.size_label, spec.scale_label)
            continue

        destination = asset_dir / spec.output_filename
        icon = _render_icon(context, pixel_size, destination, platform=IOS, background=background)
        rendered[pixel_size] = icon
        icon_set.ios.append(icon)
        context.step(f"iOS {spec.output_filename}")

    icon_set.manifest_path = write_manifest(asset_dir, context.catalog, ios_config.folder)
    icon_set.manifest = build_manifest(context.catalog, ios_config.folder)
    write_catalog_info(catalog_dir)

    marketing = context.catalog.marketing_for(IOS)
    if marketing is not None:
        destination = output.output_dir / marketing.filename
        icon = _render_icon(context, marketing.pixel_size, destination, platform=IOS, background=background)
        icon_set.marketing.append(icon)
        context.step(f"iOS {marketing.filename}")

    LOGGER.info("iOS 图标生成完成：%d 个文件，%d 条描述记录", len(icon_set.ios), len(icon_set.manifest))


def _generate_android(context: _RunContext, icon_set: IconSet) -> None:
    """生成 android/mipmap-<density>/ 结构及 playstore.png。"""

    LOGGER.info("开始生成 Android 图标")
    android_config = context.config.android
    output = context.output
    catalog = context.catalog

    for density in catalog.android_densities():
        pixel_size = density.pixel_size(catalog.android_baseline)
        folder = output.prepare_dir(Path(android_config.res_dir) / density.folder_name, platform=ANDROID)
        destination = folder / catalog.android_icon_name
        square = _render_square(context, pixel_size, destination, platform=ANDROID)

        try:
            icon = _write_icon(context, square, destination, platform=ANDROID, density=density.density)
            icon_set.android.append(icon)
            context.step(f"Android {density.folder_name}/{catalog.android_icon_name}")

            if android_config.round_icons:
                round_destination = folder / catalog.android_round_icon_name
                with _icon_step(ANDROID, pixel_size, round_destination, "圆形遮罩"):
                    rounded = apply_round_mask(square)
                try:
                    icon = _write_icon(
                        context, rounded, round_destination, platform=ANDROID, density=density.density, is_round=True
                    )
                finally:
                    rounded.close()
                icon_set.android.append(icon)
                context.step(f"Android {density.folder_name}/{catalog.android_round_icon_name}")
        finally:
            square.close()

    marketing = catalog.marketing_for(ANDROID)
    if marketing is not None:
        destination = output.output_dir / marketing.filename
        icon = _render_icon(context, marketing.pixel_size, destination, platform=ANDROID)
        icon_set.marketing.append(icon)
        context.step(f"Android {marketing.filename}")

    LOGGER.info("Android 图标生成完成：%d 个文件", len(icon_set.android))


def _render_icon(
    context: _RunContext,
    pixel_size: int,
    destination: Path,
    *,
    platform: str,
    background: Optional[Tuple[int, int, int, int]] = None,
) -> RenderedIcon:
    square = _render_square(context, pixel_size, destination, platform=platform)
    try:
        if background is not None:
            with _icon_step(platform, pixel_size, destination, "背景铺底"):
                flattened = flatten(square, background)
            square.close()
            square = flattened
        return _write_icon(context, square, destination, platform=platform)
    finally:
        square.close()


def _render_square(context: _RunContext, pixel_size: int, destination: Path, *, platform: str) -> Image.Image:
    with _icon_step(platform, pixel_size, destination, "渲染"):
        return render_cover(context.image, pixel_size)


@contextmanager
def _icon_step(platform: str, pixel_size: int, destination: Path, action: str) -> Iterator[None]:
    """将单个图标处理步骤中的失败统一转换为带平台、尺寸与文件名的 RenderError。"""

    try:
        yield
    except (RenderError, OSError, ValueError) as exc:
        if isinstance(exc, RenderError) and exc.platform and exc.filename:
            raise
        raise RenderError(
            f"{platform} {destination.name} {action}失败: {exc}",
            platform=platform,
            pixel_size=pixel_size,
            filename=destination.name,
        ) from exc


def _write_icon(
    context: _RunContext,
    image: Image.Image,
    destination: Path,
    *,
    platform: str,
    density: Optional[str] = None,
    is_round: bool = False,
) -> RenderedIcon:
    context.output.save_png(image, destination, platform=platform)

    phash_distance = None
    ssim = None
    if context.config.validation.enabled:
        with _icon_step(platform, image.width, destination, "质量校验"):
            metrics = measure_icon(context.image, image)
        phash_distance = metrics.phash_distance
        ssim = metrics.ssim

    LOGGER.debug("%s %s (%dx%d)", platform, destination.name, image.width, image.height)
    return RenderedIcon(
        path=destination,
        filename=destination.name,
        pixel_size=image.width,
        platform=platform,
        density=density,
        round=is_round,
        phash_distance=phash_distance,
        ssim=ssim,
    )


def _count_steps(selected: list[str], catalog: SizeCatalog, config: GenerationConfig) -> int:
    total = 0
    if IOS in selected:
        total += len(catalog.ios_pixel_sizes())
        total += 1 if catalog.marketing_for(IOS) else 0
    if ANDROID in selected:
        per_density = 2 if config.android.round_icons else 1
        total += len(catalog.android_densities()) * per_density
        total += 1 if catalog.marketing_for(ANDROID) else 0
    return total


def _resolve_background(config: GenerationConfig) -> Optional[Tuple[int, int, int, int]]:
    if not config.ios.background_color:
        return None
    return parse_hex_color(config.ios.background_color)


def _is_truthy(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _emit_progress(
    callback: ProgressCallback,
    completed: int,
    total: int,
    message: Optional[str] = None,
    status: str = "running",
) -> None:
    if not callback:
        return
    callback(ProgressUpdate(total=total, completed=completed, message=message, status=status))
