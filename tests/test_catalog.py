"""尺寸表与 Contents.json 记录的单元测试。"""

from __future__ import annotations

import json
from pathlib import Path

from app_icon_generator.core.catalog import ANDROID, IOS, default_catalog
from app_icon_generator.processing.manifest import build_manifest, write_manifest

EXPECTED_IOS_PIXELS = [
    16, 20, 29, 32, 40, 48, 50, 55, 57, 58, 60, 64, 66, 72, 76, 80, 87, 88,
    92, 100, 102, 108, 114, 120, 128, 144, 152, 167, 172, 180, 196, 216,
    234, 256, 258, 512, 1024,
]


def test_ios_catalog_distinct_pixel_sizes() -> None:
    catalog = default_catalog()

    assert sorted(catalog.ios_pixel_sizes()) == EXPECTED_IOS_PIXELS
    assert len(catalog.ios_sizes()) == 52
    # 首次出现顺序即渲染顺序：表头是 iPhone 60pt@3x。
    assert catalog.ios_pixel_sizes()[0] == 180


def test_size_spec_labels_and_filenames() -> None:
    specs = {(s.idiom, s.size_label, s.scale_label): s for s in default_catalog().ios_sizes()}

    ipad_pro = specs[("ipad", "83.5x83.5", "2x")]
    assert ipad_pro.pixel_size == 167
    assert ipad_pro.output_filename == "167.png"

    notification = specs[("watch", "27.5x27.5", "2x")]
    assert notification.pixel_size == 55
    assert notification.role == "notificationCenter"
    assert notification.subtype == "42mm"


def test_android_densities_derive_from_baseline() -> None:
    catalog = default_catalog()
    sizes = {d.folder_name: d.pixel_size(catalog.android_baseline) for d in catalog.android_densities()}

    assert sizes == {
        "mipmap-mdpi": 48,
        "mipmap-hdpi": 72,
        "mipmap-xhdpi": 96,
        "mipmap-xxhdpi": 144,
        "mipmap-xxxhdpi": 192,
    }

    with_ldpi = default_catalog(include_ldpi=True)
    assert with_ldpi.android_densities()[0].folder_name == "mipmap-ldpi"
    assert with_ldpi.android_densities()[0].pixel_size(48) == 36


def test_marketing_specs() -> None:
    catalog = default_catalog()

    assert catalog.marketing_for(IOS).filename == "appstore.png"
    assert catalog.marketing_for(IOS).pixel_size == 1024
    assert catalog.marketing_for(ANDROID).filename == "playstore.png"
    assert catalog.marketing_for(ANDROID).pixel_size == 512
    assert catalog.marketing_for("windows") is None


def test_manifest_entries_share_files_between_slots() -> None:
    entries = build_manifest(default_catalog(), "Assets.xcassets/AppIcon.appiconset/")

    assert len(entries) == 52
    uses_80 = {(e.idiom, e.size, e.scale, e.role) for e in entries if e.filename == "80.png"}
    assert ("iphone", "40x40", "2x", None) in uses_80
    assert ("ipad", "40x40", "2x", None) in uses_80
    assert ("watch", "40x40", "2x", "appLauncher") in uses_80
    assert len({e.filename for e in entries}) == len(EXPECTED_IOS_PIXELS)


def test_manifest_record_fields() -> None:
    entries = build_manifest(default_catalog())
    records = [e.to_dict() for e in entries]

    iphone = next(r for r in records if r["idiom"] == "iphone")
    assert iphone == {
        "size": "60x60",
        "expected-size": "180",
        "filename": "180.png",
        "folder": "Assets.xcassets/AppIcon.appiconset/",
        "idiom": "iphone",
        "scale": "3x",
    }

    quick_look = next(r for r in records if r.get("role") == "quickLook")
    assert quick_look["subtype"] == "38mm"
    assert quick_look["size"] == "86x86"

    companion = [r for r in records if r.get("role") == "companionSettings"]
    assert len(companion) == 2
    assert all("subtype" not in r for r in companion)


def test_write_manifest_produces_xcode_json(tmp_path: Path) -> None:
    path = write_manifest(tmp_path, default_catalog())

    assert path == tmp_path / "Contents.json"
    contents = json.loads(path.read_text(encoding="utf-8"))
    assert contents["info"] == {"author": "xcode", "version": 1}
    assert len(contents["images"]) == 52
    assert {"ios-marketing", "watch-marketing", "mac"} <= {r["idiom"] for r in contents["images"]}
