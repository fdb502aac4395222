#!/usr/bin/env python3
"""
Wrappers around the external tools used to build the icons.

svgo prefixes IDs and puts every tag on its own line, inkscape renders SVGs
to PNGs, convert from ImageMagick packs PNGs into an .ico and iconutil packs
an iconset into an .icns (macOS only).
"""

import shutil
import subprocess
from pathlib import Path

from PIL import Image

REQUIRED_TOOLS = {
    "svgo": "svgo",
    "inkscape": "inkscape",
    "convert": "convert from image magick",
}

SVGO_CONFIG = """module.exports = {{
  plugins: [
    {{
      name: "preset-default",
      params: {{
        overrides: {{
          removeUnusedNS: false,
        }},
      }},
    }},
    {{
      name: "prefixIds",
      params: {{
        delim: "",
        prefix: "{prefix}",
      }},
    }},
  ],
}};
"""


class IconBuildError(Exception):
    """Base class for everything that aborts the build."""


class MissingDependencyError(IconBuildError):
    """A required external tool is not installed."""


class ToolInvocationError(IconBuildError):
    """An external tool could not be run or exited non-zero."""


class MalformedDocumentError(IconBuildError):
    """An SVG lacks the root tags needed for wrapping or merging."""


def check_dependencies(tools=REQUIRED_TOOLS):
    """Raise MissingDependencyError for the first tool not found on PATH."""
    for command, name in tools.items():
        if shutil.which(command) is None:
            raise MissingDependencyError(f"{name} is required but not installed.")


def run_tool(args):
    """
    Run an external tool and return its stdout.

    Args:
        args: Command line, the first item being the executable
    """
    try:
        result = subprocess.run(
            [str(arg) for arg in args], capture_output=True, text=True
        )
    except FileNotFoundError as e:
        raise ToolInvocationError(f"{args[0]} could not be started: {e}") from e

    if result.returncode != 0:
        raise ToolInvocationError(
            f"{args[0]} exited with status {result.returncode}: {result.stderr.strip()}"
        )
    return result.stdout


def optimize_svg(svg, tmp_dir):
    """
    Optimize an SVG file in place using svgo. All IDs get prefixed with the
    file name (without extension) and every tag ends up on its own line.
    """
    svg = Path(svg)
    config = Path(tmp_dir) / "svgo.config.js"
    config.write_text(SVGO_CONFIG.format(prefix=svg.stem), encoding="utf-8")

    try:
        run_tool([
            "svgo", "--quiet", "--pretty", "--indent", "0", "--final-newline",
            "--input", svg, "--output", svg, f"--config={config}",
        ])
    finally:
        config.unlink()


def query_width(svg):
    """Return the width of an SVG drawing as reported by inkscape."""
    output = run_tool(["inkscape", "--query-width", svg])
    try:
        return float(output.strip())
    except ValueError as e:
        raise ToolInvocationError(f"inkscape reported an invalid width for {svg}: {output!r}") from e


def convert_svg_to_png(input_svg, output_png, size):
    """Render an SVG to a square PNG of the given size."""
    run_tool(["inkscape", "-w", size, "-h", size, input_svg, "-o", output_png])

    with Image.open(output_png) as img:
        if img.size != (size, size):
            raise ToolInvocationError(
                f"inkscape rendered {output_png} at {img.size[0]}x{img.size[1]}, expected {size}x{size}"
            )
    print(f"✓ Created: {output_png}")


def pack_ico(pngs, output_ico):
    """
    Bundle PNGs into a Windows .ico file.

    Returns the set of (width, height) frames found in the written file.
    """
    run_tool(["convert", *pngs, output_ico])

    with Image.open(output_ico) as ico:
        sizes = set(ico.info.get("sizes", {ico.size}))
    print(f"✓ Created: {output_ico} ({len(sizes)} frames)")
    return sizes


def pack_icns(iconset_dir, output_icns):
    """
    Bundle an iconset directory into a macOS .icns file.

    iconutil only exists on macOS. Elsewhere a warning is printed and False is
    returned.
    """
    if shutil.which("iconutil") is None:
        print("⚠ Warning: iconutil is not available. Skipping creation of macOS icon.")
        return False

    run_tool(["iconutil", "-c", "icns", "-o", output_icns, iconset_dir])
    print(f"✓ Created: {output_icns}")
    return True
