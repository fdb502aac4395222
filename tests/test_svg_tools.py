from __future__ import annotations

import contextlib
import io
import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from PIL import Image

import svg_tools
from fake_tools import FakeTools

WINDOWS_SIZES = [16, 32, 48, 64, 96, 128, 256]


def which_without(*missing):
    return lambda command: None if command in missing else f"/usr/bin/{command}"


class DependencyTests(unittest.TestCase):
    def test_missing_optimizer_is_reported(self) -> None:
        with mock.patch.object(svg_tools.shutil, "which", which_without("svgo")):
            with self.assertRaisesRegex(svg_tools.MissingDependencyError, "svgo is required"):
                svg_tools.check_dependencies()

    def test_missing_converter_names_image_magick(self) -> None:
        with mock.patch.object(svg_tools.shutil, "which", which_without("convert")):
            with self.assertRaisesRegex(svg_tools.MissingDependencyError, "image magick"):
                svg_tools.check_dependencies()

    def test_iconutil_is_not_required(self) -> None:
        with mock.patch.object(svg_tools.shutil, "which", which_without("iconutil")):
            svg_tools.check_dependencies()


class RunToolTests(unittest.TestCase):
    def test_returns_stdout(self) -> None:
        done = subprocess.CompletedProcess(["inkscape"], 0, "256\n", "")
        with mock.patch.object(svg_tools.subprocess, "run", return_value=done) as run:
            self.assertEqual(svg_tools.run_tool(["inkscape", "--query-width", Path("a.svg")]), "256\n")
        self.assertEqual(run.call_args.args[0], ["inkscape", "--query-width", "a.svg"])

    def test_non_zero_exit_raises(self) -> None:
        done = subprocess.CompletedProcess(["svgo"], 1, "", "SvgoParserError: bad input\n")
        with mock.patch.object(svg_tools.subprocess, "run", return_value=done):
            with self.assertRaisesRegex(svg_tools.ToolInvocationError, "bad input"):
                svg_tools.run_tool(["svgo"])

    def test_missing_executable_raises(self) -> None:
        with mock.patch.object(svg_tools.subprocess, "run", side_effect=FileNotFoundError("svgo")):
            with self.assertRaises(svg_tools.ToolInvocationError):
                svg_tools.run_tool(["svgo"])


class ToolWrapperTests(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.addCleanup(self._td.cleanup)
        self.tmp = Path(self._td.name)
        patcher = mock.patch("sys.stdout", new_callable=io.StringIO)
        self.stdout = patcher.start()
        self.addCleanup(patcher.stop)

    def test_optimize_uses_file_name_as_prefix(self) -> None:
        svg = self.tmp / "overlay.svg"
        svg.write_text('<svg xmlns="http://www.w3.org/2000/svg">\n<g id="petals"/>\n</svg>\n')
        seen = {}

        def fake(args):
            config = Path(args[-1].split("=", 1)[1])
            seen["config"] = config.read_text()
            seen["args"] = args
            return ""

        with mock.patch.object(svg_tools, "run_tool", fake):
            svg_tools.optimize_svg(svg, self.tmp)

        self.assertIn('prefix: "overlay"', seen["config"])
        self.assertIn('delim: ""', seen["config"])
        self.assertIn("--pretty", seen["args"])
        self.assertEqual(seen["args"][seen["args"].index("--indent") + 1], "0")
        self.assertFalse((self.tmp / "svgo.config.js").exists())

    def test_optimize_removes_config_on_failure(self) -> None:
        svg = self.tmp / "base.svg"
        svg.write_text("<svg/>\n")
        with mock.patch.object(svg_tools, "run_tool", side_effect=svg_tools.ToolInvocationError("boom")):
            with self.assertRaises(svg_tools.ToolInvocationError):
                svg_tools.optimize_svg(svg, self.tmp)
        self.assertFalse((self.tmp / "svgo.config.js").exists())

    def test_distinct_files_get_disjoint_ids(self) -> None:
        text = '<svg xmlns="http://www.w3.org/2000/svg">\n<g id="a"/>\n<g id="b"/>\n</svg>\n'
        first, second = self.tmp / "bg_circle.svg", self.tmp / "blossom_tiny.svg"
        first.write_text(text)
        second.write_text(text)
        with mock.patch.object(svg_tools, "run_tool", FakeTools()):
            svg_tools.optimize_svg(first, self.tmp)
            svg_tools.optimize_svg(second, self.tmp)
        self.assertIn('id="bg_circlea"', first.read_text())
        self.assertIn('id="blossom_tinya"', second.read_text())

    def test_query_width(self) -> None:
        with mock.patch.object(svg_tools, "run_tool", return_value="31.999\n"):
            self.assertAlmostEqual(svg_tools.query_width("a.svg"), 31.999)
        with mock.patch.object(svg_tools, "run_tool", return_value="WARNING\n"):
            with self.assertRaises(svg_tools.ToolInvocationError):
                svg_tools.query_width("a.svg")

    def test_rasterize_checks_size(self) -> None:
        with mock.patch.object(svg_tools, "run_tool", FakeTools()):
            svg_tools.convert_svg_to_png("icon.svg", self.tmp / "icon.png", 64)
        self.assertIn("✓ Created:", self.stdout.getvalue())

        with mock.patch.object(svg_tools, "run_tool", FakeTools(render_size=60)):
            with self.assertRaisesRegex(svg_tools.ToolInvocationError, "expected 64x64"):
                svg_tools.convert_svg_to_png("icon.svg", self.tmp / "icon.png", 64)

    def test_pack_ico_reports_frames(self) -> None:
        pngs = []
        for size in WINDOWS_SIZES:
            Image.new("RGBA", (size, size), (0, 0, 0, 255)).save(self.tmp / f"{size}.png")
            pngs.append(self.tmp / f"{size}.png")

        tools = FakeTools()
        with mock.patch.object(svg_tools, "run_tool", tools):
            sizes = svg_tools.pack_ico(pngs, self.tmp / "icon.ico")

        self.assertEqual(sizes, {(s, s) for s in WINDOWS_SIZES})
        self.assertEqual(tools.calls[0][1:-1], [str(p) for p in pngs])

    def test_pack_icns_is_skipped_without_iconutil(self) -> None:
        with mock.patch.object(svg_tools.shutil, "which", return_value=None), \
                mock.patch.object(svg_tools, "run_tool") as run:
            self.assertFalse(svg_tools.pack_icns(self.tmp, self.tmp / "icon.icns"))
        run.assert_not_called()
        self.assertIn("iconutil is not available", self.stdout.getvalue())

    def test_pack_icns(self) -> None:
        tools = FakeTools()
        with mock.patch.object(svg_tools.shutil, "which", return_value="/usr/bin/iconutil"), \
                mock.patch.object(svg_tools, "run_tool", tools):
            self.assertTrue(svg_tools.pack_icns(self.tmp / "icon.iconset", self.tmp / "icon.icns"))
        self.assertEqual(tools.calls[0][:3], ["iconutil", "-c", "icns"])
        self.assertTrue((self.tmp / "icon.icns").exists())


@unittest.skipUnless(shutil.which("convert"), "convert from image magick is required")
class RealConvertTests(unittest.TestCase):
    def test_seven_frames_end_up_in_ico(self) -> None:
        with tempfile.TemporaryDirectory() as td, contextlib.redirect_stdout(io.StringIO()):
            tmp = Path(td)
            pngs = []
            for size in WINDOWS_SIZES:
                Image.new("RGBA", (size, size), (240, 206, 206, 255)).save(tmp / f"{size}.png")
                pngs.append(tmp / f"{size}.png")

            sizes = svg_tools.pack_ico(pngs, tmp / "icon.ico")
            self.assertEqual(sizes, {(s, s) for s in WINDOWS_SIZES})


if __name__ == "__main__":
    unittest.main()
