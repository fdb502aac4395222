#!/usr/bin/env python3
"""
Script to create all icons for the app.

Different blossom variants are overlaid on top of different background images
and saved to the output directory. You will need to have svgo, inkscape and
convert from ImageMagick installed. The macOS icon can only be packed on a
macOS machine; elsewhere this step is skipped.
"""

import sys
from pathlib import Path

import svg_tools
from recolor import recolor_svg
from svg_compositor import CompositeSpec, build, composite_svgs

ROOT = Path(__file__).resolve().parent
SOURCE_DIR = ROOT / "source"
TMP_DIR = ROOT / "tmp"
OUTPUT_DIR = ROOT / "output"

COLORS = {
    "white": "#ffffff",
    "light": "#f0cece",
    "dark": "#24272f",
    "black": "#000000",
}


def source(name):
    return SOURCE_DIR / f"{name}.svg"


def variant(name, color):
    """Path of a recolored blossom in the scratch directory."""
    return TMP_DIR / f"{name}_{color}.svg"


def create_color_variants():
    """We use these several times, so they are created once upfront."""
    for name in ("blossom_tiny", "blossom_small"):
        for color, value in COLORS.items():
            recolor_svg(source(name), variant(name, color), value)


def create_tray_icons():
    print("\nCreating tray icons...")

    # The macOS template icons are recolored by the system.
    for size, filename in [(16, "trayTemplate.png"), (32, "trayTemplate@2x.png"), (64, "trayTemplate@4x.png")]:
        svg_tools.convert_svg_to_png(source("blossom_tiny"), OUTPUT_DIR / filename, size)

    for color in COLORS:
        svg_tools.convert_svg_to_png(
            variant("blossom_tiny", color), OUTPUT_DIR / f"tray{color.capitalize()}.png", 64
        )

    tray_color = CompositeSpec(source("bg_tiny_square"), variant("blossom_tiny", "light"), 24, size=64)
    build(tray_color, OUTPUT_DIR / "trayColor.png", TMP_DIR)


def create_favicon():
    print("\nCreating favicon...")
    composite_svgs(source("bg_tiny_square"), variant("blossom_small", "light"),
                   OUTPUT_DIR / "favicon.svg", 24, tmp_dir=TMP_DIR)


def create_homepage_icon():
    print("\nCreating homepage icon...")
    composite_svgs(source("bg_square"), source("blossom_medium"),
                   OUTPUT_DIR / "web-icon.svg", 32, base_margin=16, tmp_dir=TMP_DIR)


def create_linux_icon():
    print("\nCreating Linux icon...")
    composite_svgs(source("bg_circle"), source("blossom_medium"),
                   OUTPUT_DIR / "icon.svg", 32, base_margin=16, tmp_dir=TMP_DIR)
    svg_tools.convert_svg_to_png(OUTPUT_DIR / "icon.svg", OUTPUT_DIR / "icon.png", 512)


def windows_frames():
    bg = source("bg_circle")
    return [
        (CompositeSpec(bg, variant("blossom_tiny", "light"), 20, size=16), "16.png"),
        (CompositeSpec(bg, variant("blossom_small", "light"), 20, size=32), "32.png"),
        (CompositeSpec(bg, source("blossom_medium"), 20, size=48), "48.png"),
        (CompositeSpec(bg, source("blossom_medium"), 20, size=64), "64.png"),
        (CompositeSpec(bg, source("blossom_large"), 19, size=96), "96.png"),
        (CompositeSpec(bg, source("blossom_large"), 19, size=128), "128.png"),
        (CompositeSpec(bg, source("blossom_large"), 19, size=256), "256.png"),
    ]


def create_windows_icon():
    print("\nCreating Windows icon...")
    win_dir = TMP_DIR / "win"
    win_dir.mkdir(parents=True, exist_ok=True)

    pngs = []
    for spec, filename in windows_frames():
        build(spec, win_dir / filename, TMP_DIR)
        pngs.append(win_dir / filename)

    svg_tools.pack_ico(pngs, OUTPUT_DIR / "icon.ico")


def macos_frames():
    bg = source("bg_square")
    return [
        (CompositeSpec(bg, variant("blossom_tiny", "light"), 40, 16, 16), "icon_16x16.png"),
        (CompositeSpec(bg, variant("blossom_small", "light"), 36, 16, 32), "icon_16x16@2x.png"),
        (CompositeSpec(bg, variant("blossom_small", "light"), 36, 16, 32), "icon_32x32.png"),
        (CompositeSpec(bg, source("blossom_medium"), 40, 24, 64), "icon_32x32@2x.png"),
        (CompositeSpec(bg, source("blossom_medium"), 40, 24, 128), "icon_128x128.png"),
        (CompositeSpec(bg, source("blossom_large"), 40, 24, 256), "icon_128x128@2x.png"),
        (CompositeSpec(bg, source("blossom_large"), 40, 24, 256), "icon_256x256.png"),
        (CompositeSpec(bg, source("blossom_large"), 40, 24, 512), "icon_256x256@2x.png"),
        (CompositeSpec(bg, source("blossom_large"), 40, 24, 512), "icon_512x512.png"),
        (CompositeSpec(bg, source("blossom_large"), 40, 24, 1024), "icon_512x512@2x.png"),
    ]


def create_macos_icon():
    print("\nCreating macOS icon...")
    iconset = TMP_DIR / "icon.iconset"
    iconset.mkdir(parents=True, exist_ok=True)

    for spec, filename in macos_frames():
        build(spec, iconset / filename, TMP_DIR)

    svg_tools.pack_icns(iconset, OUTPUT_DIR / "icon.icns")


def create_social_icon():
    print("\nCreating social icon...")
    composite_svgs(source("bg_full"), source("blossom_medium"),
                   OUTPUT_DIR / "social.svg", 32, tmp_dir=TMP_DIR)
    svg_tools.convert_svg_to_png(OUTPUT_DIR / "social.svg", OUTPUT_DIR / "social.png", 512)


STAGES = [
    create_tray_icons,
    create_favicon,
    create_homepage_icon,
    create_linux_icon,
    create_windows_icon,
    create_macos_icon,
    create_social_icon,
]


def main():
    try:
        svg_tools.check_dependencies()

        TMP_DIR.mkdir(parents=True, exist_ok=True)
        OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

        create_color_variants()
        for stage in STAGES:
            stage()
    except svg_tools.IconBuildError as e:
        print(f"✗ Error: {e}")
        return 1

    print(f"\n✓ Done! Icons have been created and saved to {OUTPUT_DIR}/")
    return 0


if __name__ == "__main__":
    sys.exit(main())
