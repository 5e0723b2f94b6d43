"""iOS 图标集生成与 Contents.json 的集成测试。"""

from __future__ import annotations

import json
from pathlib import Path

from PIL import Image

from app_icon_generator.core.config import GenerationConfig, IosOutputConfig
from app_icon_generator.processing.pipeline import generate

ASSET_DIR = Path("Assets.xcassets") / "AppIcon.appiconset"


def test_ios_generation_from_large_png(tmp_path: Path, png_source: Path) -> None:
    output = tmp_path / "output"

    icon_set = generate(png_source, ["ios"], output)

    assert icon_set.warnings == []
    assert icon_set.android == []
    assert not (output / "android").exists()
    assert not (output / "playstore.png").exists()

    asset_dir = output / ASSET_DIR
    pngs = sorted(p.name for p in asset_dir.glob("*.png"))
    assert len(pngs) == 37
    assert len(icon_set.ios) == 37

    for icon in icon_set.ios:
        assert icon.path.exists()
        with Image.open(icon.path) as img:
            assert img.size == (icon.pixel_size, icon.pixel_size)
            assert img.format == "PNG"
        assert icon.filename == f"{icon.pixel_size}.png"

    appstore = output / "appstore.png"
    with Image.open(appstore) as img:
        assert img.size == (1024, 1024)
    assert [icon.filename for icon in icon_set.marketing] == ["appstore.png"]


def test_manifest_entries_reference_generated_files(tmp_path: Path, png_source: Path) -> None:
    output = tmp_path / "output"

    icon_set = generate(png_source, {"ios": True, "android": False}, output)

    assert icon_set.manifest_path == (output / ASSET_DIR / "Contents.json").resolve()
    contents = json.loads(icon_set.manifest_path.read_text(encoding="utf-8"))
    images = contents["images"]
    produced = {icon.filename for icon in icon_set.ios}

    assert len(images) == len(icon_set.manifest) == 52
    assert len(produced) <= len(images)
    for record in images:
        assert record["filename"] in produced
        assert record["folder"] == "Assets.xcassets/AppIcon.appiconset/"
        assert int(record["expected-size"]) == int(record["filename"].split(".")[0])

    slots = [(r["idiom"], r["size"], r["scale"], r.get("role"), r.get("subtype")) for r in images]
    assert len(slots) == len(set(slots))

    catalog_info = json.loads((output / "Assets.xcassets" / "Contents.json").read_text(encoding="utf-8"))
    assert catalog_info == {"info": {"author": "xcode", "version": 1}}


def test_cover_fit_crops_instead_of_padding(tmp_path: Path) -> None:
    source = tmp_path / "wide.png"
    image = Image.new("RGBA", (400, 200), (0, 200, 0, 255))
    image.paste((255, 0, 0, 255), (0, 0, 50, 200))
    image.paste((0, 0, 255, 255), (350, 0, 400, 200))
    image.save(source)

    icon_set = generate(source, ["ios"], tmp_path / "output")

    icon = next(i for i in icon_set.ios if i.pixel_size == 120)
    with Image.open(icon.path) as img:
        assert img.size == (120, 120)
        rgba = img.convert("RGBA")
        for corner in ((0, 0), (119, 0), (0, 119), (119, 119)):
            r, g, b, a = rgba.getpixel(corner)
            assert a == 255
            assert g > 150 and r < 60 and b < 60


def test_ios_background_flattens_alpha(tmp_path: Path) -> None:
    source = tmp_path / "transparent.png"
    image = Image.new("RGBA", (256, 256), (0, 0, 0, 0))
    image.paste((0, 0, 255, 255), (64, 64, 192, 192))
    image.save(source)

    config = GenerationConfig(ios=IosOutputConfig(background_color="#ff0000"))
    icon_set = generate(source, ["ios"], tmp_path / "output", config=config)

    with Image.open(icon_set.marketing[0].path) as img:
        assert img.mode == "RGB"
        assert img.getpixel((0, 0)) == (255, 0, 0)
        r, g, b = img.getpixel((512, 512))
        assert b > 250 and r < 5 and g < 5


def test_generation_is_idempotent(tmp_path: Path, png_source: Path) -> None:
    first = generate(png_source, ["ios", "android"], tmp_path / "run-1")
    second = generate(png_source, ["android", "ios"], tmp_path / "run-2")

    def snapshot(root: Path) -> dict[str, bytes]:
        return {p.relative_to(root).as_posix(): p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()}

    assert snapshot(first.output_dir) == snapshot(second.output_dir)
    assert first.manifest == second.manifest
    assert [i.filename for i in first.files()] == [i.filename for i in second.files()]
