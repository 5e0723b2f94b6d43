"""Xcode Asset Catalog 描述文件（Contents.json）生成。"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from app_icon_generator.core.catalog import SizeCatalog
from app_icon_generator.core.exceptions import RenderError
from app_icon_generator.core.models import ManifestEntry

LOGGER = logging.getLogger(__name__)

MANIFEST_FILENAME = "Contents.json"
DEFAULT_FOLDER = "Assets.xcassets/AppIcon.appiconset/"
XCODE_INFO = {"author": "xcode", "version": 1}


def build_manifest(catalog: SizeCatalog, folder: str = DEFAULT_FOLDER) -> list[ManifestEntry]:
    """为尺寸表中的每个逻辑槽位生成一条记录。

    多个槽位共享同一像素尺寸时会引用同一个文件名。
    """

    return [
        ManifestEntry(
            size=spec.size_label,
            expected_size=str(spec.pixel_size),
            filename=spec.output_filename,
            folder=folder,
            idiom=spec.idiom,
            scale=spec.scale_label,
            role=spec.role,
            subtype=spec.subtype,
        )
        for spec in catalog.ios_sizes()
    ]


def write_manifest(asset_directory: Path, catalog: SizeCatalog, folder: str = DEFAULT_FOLDER) -> Path:
    """在图标集目录写入 Contents.json，返回文件路径。"""

    entries = build_manifest(catalog, folder)
    contents = {"images": [entry.to_dict() for entry in entries], "info": dict(XCODE_INFO)}
    manifest_path = asset_directory / MANIFEST_FILENAME
    _write_json(manifest_path, contents)
    LOGGER.info("已写入 %s（%d 条记录）", manifest_path, len(entries))
    return manifest_path


def write_catalog_info(catalog_directory: Path) -> Path:
    """写入 .xcassets 根目录的 Contents.json，Xcode 依赖它识别资源目录。"""

    info_path = catalog_directory / MANIFEST_FILENAME
    _write_json(info_path, {"info": dict(XCODE_INFO)})
    return info_path


def _write_json(path: Path, payload: dict[str, Any]) -> None:
    try:
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except OSError as exc:
        raise RenderError(f"写入描述文件失败: {path}", platform="ios", filename=path.name) from exc
