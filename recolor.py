#!/usr/bin/env python3
"""
Create color variants of the blossom SVGs.
"""

import re
from pathlib import Path

PATH_TAG = re.compile(r"<path\b[^>]*>")
FILL_ATTR = re.compile(r"""\sfill=("[^"]*"|'[^']*')""")


def recolor_svg(src, dst, color):
    """
    Write a copy of an SVG where every <path> is filled with the given color.
    A fill already set on a path is replaced.

    Args:
        src: Source SVG file
        dst: Where to write the recolored copy
        color: Any SVG color, e.g. "#f0cece"
    """
    def fill(match):
        tag = FILL_ATTR.sub("", match.group(0))
        return f'<path fill="{color}"' + tag[len("<path"):]

    text = Path(src).read_text(encoding="utf-8")
    text = PATH_TAG.sub(fill, text)
    Path(dst).write_text(text, encoding="utf-8")
    return Path(dst)
