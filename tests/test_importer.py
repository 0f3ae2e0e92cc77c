"""Tests for the end-to-end G-code importer.

Validates comments, normalized vertices, aspect ratio, config plumbing,
the completion callback, and error propagation.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from gcode_preview import EmptyPathError, GCodeImporter, ImportResult, import_gcode_file
from gcode_preview.motion.events import Vector2
from gcode_preview.motion.reader import GCodeParseError
from gcode_preview.utils import logging_config
from gcode_preview.utils.validators import PreviewConfigV1

RECTANGLE = """\
; Rectangle 10 x 5
; units: mm
G21 G90
G0 X0 Y0
G1 X10 Y0
G1 X10 Y5
G1 X0 Y5
G1 X0 Y0
"""

ARC_PROGRAM = """\
G0 X0 Y0
G1 X10 Y0
G3 X0 Y10 I-10 J0
G1 X0 Y0
"""


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def rectangle() -> ImportResult:
    return GCodeImporter("rect.nc", RECTANGLE).load()


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class TestImportResult:
    def test_metadata(self, rectangle: ImportResult) -> None:
        assert rectangle.file_name == "rect.nc"
        assert rectangle.label == "Gcode"
        assert rectangle.comments == ("; Rectangle 10 x 5", "; units: mm")
        assert rectangle.event_count == 5

    def test_vertices_normalized(self, rectangle: ImportResult) -> None:
        # Rapid to the origin is a no-op and contributes nothing
        expected = [(1.0, -1.0), (1.0, 1.0), (-1.0, 1.0), (-1.0, -1.0)]
        assert len(rectangle.vertices) == len(expected)
        for v, (x, y) in zip(rectangle.vertices, expected):
            assert v.x == pytest.approx(x)
            assert v.y == pytest.approx(y)

    def test_aspect_ratio(self, rectangle: ImportResult) -> None:
        # scale_x = 1/5, scale_y = 1/2.5
        assert rectangle.original_aspect_ratio == pytest.approx(0.5)
        assert rectangle.bounds.max_x == 10.0
        assert rectangle.bounds.max_y == 5.0

    def test_arc_program_bounded(self) -> None:
        result = GCodeImporter("arc.nc", ARC_PROGRAM).load()
        assert len(result.vertices) > 10
        for v in result.vertices:
            assert -1.0 - 1e-9 <= v.x <= 1.0 + 1e-9
            assert -1.0 - 1e-9 <= v.y <= 1.0 + 1e-9
        assert result.vertices[-1] == Vector2(-1.0, -1.0)


# ---------------------------------------------------------------------------
# Config and callback
# ---------------------------------------------------------------------------


class TestConfigAndCallback:
    def test_resolution_from_config(self) -> None:
        coarse = PreviewConfigV1(tessellation={"arc_resolution_mm": 5.0})
        fine = PreviewConfigV1(tessellation={"arc_resolution_mm": 0.1})
        n_coarse = len(GCodeImporter("a.nc", ARC_PROGRAM, coarse).load().vertices)
        n_fine = len(GCodeImporter("a.nc", ARC_PROGRAM, fine).load().vertices)
        assert n_fine > n_coarse

    def test_callback_receives_result(self) -> None:
        calls = []
        importer = GCodeImporter("rect.nc", RECTANGLE)
        result = importer.load(callback=lambda imp, res: calls.append((imp, res)))
        assert calls == [(importer, result)]

    def test_context_popped_after_load(self, rectangle: ImportResult) -> None:
        assert "file" not in logging_config._context_var.get()


# ---------------------------------------------------------------------------
# Files and errors
# ---------------------------------------------------------------------------


class TestFilesAndErrors:
    def test_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "rect.gcode"
        path.write_text(RECTANGLE)
        result = import_gcode_file(path)
        assert result.file_name == "rect.gcode"
        assert len(result.vertices) == 4

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            GCodeImporter.from_file(tmp_path / "missing.nc")

    def test_no_motion_raises_empty_path(self) -> None:
        with pytest.raises(EmptyPathError):
            GCodeImporter("empty.nc", "; nothing here\nG21\nG1 Z5\n").load()

    def test_empty_path_does_not_call_callback(self) -> None:
        calls = []
        with pytest.raises(EmptyPathError):
            GCodeImporter("empty.nc", "").load(callback=lambda *a: calls.append(a))
        assert calls == []
        assert "file" not in logging_config._context_var.get()

    def test_strict_reader(self) -> None:
        config = PreviewConfigV1(reader={"strict": True})
        with pytest.raises(GCodeParseError):
            GCodeImporter("bad.nc", "G1 X1\nG2 X2 Y2\n", config).load()
