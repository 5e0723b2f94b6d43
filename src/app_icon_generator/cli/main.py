"""命令行入口。"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from app_icon_generator.core.catalog import default_catalog
from app_icon_generator.core.config import (
    AndroidOutputConfig,
    GenerationConfig,
    IosOutputConfig,
    ValidationConfig,
)
from app_icon_generator.core.exceptions import IconGeneratorError
from app_icon_generator.core.models import ProgressUpdate
from app_icon_generator.processing.pipeline import generate
from app_icon_generator.utils.logging import setup_logging

app = typer.Typer(help="从单张源图生成 iOS 与 Android 应用图标。")
console = Console()


def _build_progress_callback(progress: Progress):
    task_id: Optional[int] = None

    def callback(update: ProgressUpdate) -> None:
        nonlocal task_id
        if update.total == 0:
            return
        if task_id is None:
            task_id = progress.add_task("生成图标", total=update.total)
        progress.update(task_id, completed=update.completed)

    return callback


@app.command("generate")
def generate_cli(  # noqa: PLR0913
    source: Path = typer.Argument(..., help="源图片路径，建议 1024x1024 或更大"),
    output: Path = typer.Option(Path("app-icons"), "--output", "-o", help="输出目录"),
    platform: List[str] = typer.Option(["ios", "android"], "--platform", "-p", help="目标平台 ios / android，可重复指定"),
    round_icons: bool = typer.Option(True, "--round/--no-round", help="是否生成 Android 圆形图标"),
    include_ldpi: bool = typer.Option(False, "--ldpi", help="额外生成 ldpi 分档"),
    ios_background: Optional[str] = typer.Option(None, "--ios-background", help="iOS 图标透明区域铺底颜色 (HEX)"),
    auto_validate: bool = typer.Option(False, "--auto-validate", help="生成后对比源图计算相似度指标"),
    report: Optional[str] = typer.Option(None, "--report", help="在输出目录写入 CSV 清单的文件名"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
) -> None:
    """生成全部图标文件与 Contents.json。"""

    setup_logging(logging.DEBUG if verbose else logging.INFO)
    logging.getLogger(__name__).debug("CLI 参数解析完成")

    source_path = source.expanduser().resolve()
    if not source_path.is_file():
        console.print(f"[red]错误：找不到源图片 {escape(str(source_path))}[/red]")
        raise typer.Exit(code=1)

    output_dir = output.expanduser().resolve()
    config = GenerationConfig(
        ios=IosOutputConfig(background_color=ios_background),
        android=AndroidOutputConfig(round_icons=round_icons),
        validation=ValidationConfig(enabled=auto_validate),
        report_filename=report,
    )

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TimeElapsedColumn(),
        console=console,
    )

    try:
        with progress:
            icon_set = generate(
                source_path,
                platform,
                output_dir,
                catalog=default_catalog(include_ldpi=include_ldpi),
                config=config,
                progress_callback=_build_progress_callback(progress),
            )
    except IconGeneratorError as exc:
        console.print(f"[red]错误：{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    for warning in icon_set.warnings:
        console.print(f"[yellow]警告：{escape(str(warning))}[/yellow]")

    typer.echo(
        f"生成完成：iOS {len(icon_set.ios)} 个，Android {len(icon_set.android)} 个，商店图标 {len(icon_set.marketing)} 个。"
    )
    typer.echo(f"输出目录：{output_dir}")
    if icon_set.report_path:
        typer.echo(f"清单文件：{icon_set.report_path}")


@app.command("sizes")
def sizes_cli(
    include_ldpi: bool = typer.Option(False, "--ldpi", help="包含 ldpi 分档"),
) -> None:
    """列出尺寸表。"""

    catalog = default_catalog(include_ldpi=include_ldpi)

    ios_table = Table(title="iOS (AppIcon.appiconset)")
    for column in ("idiom", "size", "scale", "role", "subtype", "filename"):
        ios_table.add_column(column)
    for spec in catalog.ios_sizes():
        ios_table.add_row(
            spec.idiom,
            spec.size_label,
            spec.scale_label,
            spec.role or "",
            spec.subtype or "",
            spec.output_filename,
        )

    android_table = Table(title="Android (mipmap)")
    for column in ("density", "scale", "folder", "pixels"):
        android_table.add_column(column)
    for density in catalog.android_densities():
        android_table.add_row(
            density.density,
            f"{density.scale_factor:g}x",
            density.folder_name,
            str(density.pixel_size(catalog.android_baseline)),
        )

    console.print(ios_table)
    console.print(android_table)
    for spec in catalog.marketing:
        console.print(f"{spec.platform}: {spec.filename} ({spec.pixel_size}x{spec.pixel_size})")


if __name__ == "__main__":
    app()
