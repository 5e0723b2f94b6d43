"""报告生成工具。"""

from __future__ import annotations

import csv
from pathlib import Path

from app_icon_generator.core.exceptions import RenderError
from app_icon_generator.core.models import IconSet

HEADER = ["platform", "path", "pixel_size", "density", "round", "phash_distance", "ssim"]


def write_csv_report(icon_set: IconSet, output_dir: Path, filename: str) -> Path:
    """将生成的文件清单写入 CSV 报告。"""

    report_path = output_dir / filename
    try:
        with report_path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle)
            writer.writerow(HEADER)
            for icon in icon_set.files():
                writer.writerow(
                    [
                        icon.platform,
                        _relative(icon.path, output_dir),
                        icon.pixel_size,
                        icon.density or "",
                        "yes" if icon.round else "",
                        _format_phash(icon.phash_distance),
                        _format_ssim(icon.ssim),
                    ]
                )
    except OSError as exc:
        raise RenderError(f"写入报告失败: {report_path}", filename=filename) from exc
    return report_path


def _relative(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def _format_phash(value: float | None) -> str:
    if value is None:
        return ""
    return str(int(round(value)))


def _format_ssim(value: float | None) -> str:
    if value is None:
        return ""
    return f"{value:.6f}"
