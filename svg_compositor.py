#!/usr/bin/env python3
"""
Layering of two SVG files into one.

Simply pasting one SVG into another does not work: both files contain IDs
which will clash. Therefore both files are run through svgo which prefixes
all IDs with the file name. The overlay is then shrunk by wrapping its
content in a <g> with a translate/scale transform, and finally the lines of
both files are concatenated. All of this assumes that svgo has put every tag
on its own line.
"""

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import svg_tools

# All sources are normalized to this size before margins are applied.
CANVAS_SIZE = 256


@dataclass(frozen=True)
class Transform:
    """Translation followed by a uniform scale, as used in an SVG transform attribute."""
    translate_x: float
    translate_y: float
    scale: float

    def __str__(self):
        return f"translate({self.translate_x:g}, {self.translate_y:g}) scale({self.scale:.10g})"


@dataclass(frozen=True)
class CompositeSpec:
    """Everything needed to produce one composited artifact."""
    base: Path
    overlay: Path
    overlay_margin: float
    base_margin: float = 0
    size: Optional[int] = None   # Rasterize to a PNG of this size if set


def margin_transform(margin, canvas=CANVAS_SIZE):
    """Transform which shrinks a canvas-sized drawing into the area inside the margin."""
    return Transform(margin, margin, (canvas - 2 * margin) / canvas)


def _root_lines(text):
    """
    Split an SVG into lines, writing a self-closing root <svg .../> as an
    opening and a closing tag so that content can be placed between them.
    """
    lines = text.splitlines()
    for i, line in enumerate(lines):
        if line.startswith("<svg") and line.rstrip().endswith("/>"):
            lines[i:i + 1] = [line.rstrip()[:-2].rstrip() + ">", "</svg>"]
            break

    if not any(line.startswith("<svg") for line in lines) or not any("</svg>" in line for line in lines):
        raise svg_tools.MalformedDocumentError("SVG has no root <svg> and </svg> tags on lines of their own")
    return lines


def wrap_in_group(text, transform):
    """
    Wrap the content of an SVG in a <g> carrying the given transform.

    The group opens on the line after the root <svg> tag and closes on the line
    before the root </svg> tag.
    """
    lines = _root_lines(text)
    opening = next(i for i, line in enumerate(lines) if line.startswith("<svg"))
    closing = max(i for i, line in enumerate(lines) if "</svg>" in line)

    lines.insert(closing, "</g>")
    lines.insert(opening + 1, f'<g transform="{transform}">')
    return "\n".join(lines) + "\n"


def _wrap_file(svg, transform):
    svg = Path(svg)
    svg.write_text(wrap_in_group(svg.read_text(encoding="utf-8"), transform), encoding="utf-8")


def normalize_size(svg, tmp_dir):
    """Scale an SVG file in place so that its drawing is CANVAS_SIZE wide."""
    # This ensures that every tag is on a new line.
    svg_tools.optimize_svg(svg, tmp_dir)

    scale = CANVAS_SIZE / svg_tools.query_width(svg)
    _wrap_file(svg, Transform(0, 0, scale))


def add_margin_to_svg(svg, margin, tmp_dir):
    """
    Add a margin to an SVG file in place. The file is assumed to be
    CANVAS_SIZE x CANVAS_SIZE. A margin of zero still adds the group.
    """
    svg_tools.optimize_svg(svg, tmp_dir)
    _wrap_file(svg, margin_transform(margin))


def merge_svgs(base_text, overlay_text):
    """Append the content of the overlay SVG to the base SVG."""
    lines = [line for line in _root_lines(base_text) if "</svg>" not in line]
    lines += [line for line in _root_lines(overlay_text) if "<svg" not in line]
    return "\n".join(lines) + "\n"


def composite_svgs(base_svg, overlay_svg, output_svg, overlay_margin, base_margin=0, tmp_dir="tmp"):
    """
    Composite two SVGs into a single SVG. The first one is used as the base,
    the second one is drawn on top of it. Margins are given in pixels of the
    256x256 canvas.
    """
    tmp_dir = Path(tmp_dir)
    base = tmp_dir / "base.svg"
    overlay = tmp_dir / "overlay.svg"
    shutil.copyfile(base_svg, base)
    shutil.copyfile(overlay_svg, overlay)

    normalize_size(base, tmp_dir)
    normalize_size(overlay, tmp_dir)

    add_margin_to_svg(base, base_margin, tmp_dir)
    add_margin_to_svg(overlay, overlay_margin, tmp_dir)

    svg_tools.optimize_svg(base, tmp_dir)
    svg_tools.optimize_svg(overlay, tmp_dir)

    text = merge_svgs(base.read_text(encoding="utf-8"), overlay.read_text(encoding="utf-8"))
    Path(output_svg).write_text(text, encoding="utf-8")
    print(f"✓ Created: {output_svg}")
    return text


def composite_svgs_and_save_as_png(base_svg, overlay_svg, output_png, overlay_margin, size,
                                   base_margin=0, tmp_dir="tmp"):
    """Same as composite_svgs, but the result is rendered to a PNG of the given size."""
    tmp_svg = Path(tmp_dir) / "tmp.svg"
    composite_svgs(base_svg, overlay_svg, tmp_svg, overlay_margin, base_margin, tmp_dir)
    svg_tools.convert_svg_to_png(tmp_svg, output_png, size)
    tmp_svg.unlink()


def build(spec, output, tmp_dir="tmp"):
    """Produce the artifact described by a CompositeSpec."""
    if spec.size is None:
        composite_svgs(spec.base, spec.overlay, output, spec.overlay_margin, spec.base_margin, tmp_dir)
    else:
        composite_svgs_and_save_as_png(spec.base, spec.overlay, output, spec.overlay_margin,
                                       spec.size, spec.base_margin, tmp_dir)
