"""G-code importer -- program text to a normalized preview path.

Pipeline::

    text ──► extract_leading_comments ─────────────────────────┐
      └────► GCodeReader.read ──► accumulate_path ──► normalize ─┴─► ImportResult

The importer owns the only I/O (``from_file``); everything downstream is
a pure, synchronous transform.  An empty path (no move with XY
displacement) surfaces as ``EmptyPathError``; no partial result is
returned.

Usage::

    from gcode_preview.importer import GCodeImporter

    result = GCodeImporter.from_file("part.nc").load()
    print(result.original_aspect_ratio, len(result.vertices))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from gcode_preview.motion.events import Vector2
from gcode_preview.motion.reader import GCodeReader, extract_leading_comments
from gcode_preview.toolpath.accumulator import accumulate_path
from gcode_preview.toolpath.normalize import BoundingBox, normalize
from gcode_preview.utils import fs
from gcode_preview.utils.logging_config import pop_context, push_context
from gcode_preview.utils.validators import PreviewConfigV1

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ImportResult:
    """Everything a renderer needs from one program.

    Parameters
    ----------
    file_name : str
        Name the program was imported under.
    label : str
        Importer label (``"Gcode"``).
    comments : tuple[str, ...]
        Leading comment lines, as written.
    vertices : tuple[Vector2, ...]
        Normalized path in ``[-1, 1]`` per axis.
    original_aspect_ratio : float
        Factor restoring true proportions (``scale_x / scale_y``).
    bounds : BoundingBox
        Source bounding box in mm.
    event_count : int
        Number of decoded motion events.
    """

    file_name: str
    label: str
    comments: tuple[str, ...]
    vertices: tuple[Vector2, ...]
    original_aspect_ratio: float
    bounds: BoundingBox
    event_count: int


class GCodeImporter:
    """Import one G-code program.

    Parameters
    ----------
    file_name : str
        Display name of the program.
    text : str
        Program text.
    config : PreviewConfigV1, optional
        Tessellation and reader settings; defaults apply when omitted.
    """

    label = "Gcode"

    def __init__(self, file_name: str, text: str, config: PreviewConfigV1 | None = None) -> None:
        self.file_name = file_name
        self.text = text
        self.config = config if config is not None else PreviewConfigV1()

    @classmethod
    def from_file(cls, path: str | Path, config: PreviewConfigV1 | None = None) -> GCodeImporter:
        """Read a program from disk.

        Raises
        ------
        FileNotFoundError
            If ``path`` doesn't exist.
        """
        path = Path(path)
        return cls(path.name, fs.read_text(path), config)

    def load(
        self,
        callback: Callable[[GCodeImporter, ImportResult], None] | None = None,
    ) -> ImportResult:
        """Run the full pipeline.

        Parameters
        ----------
        callback : callable, optional
            Called with ``(importer, result)`` once the result is ready.

        Returns
        -------
        ImportResult

        Raises
        ------
        EmptyPathError
            If the program contains no move with XY displacement.
        GCodeParseError
            In strict reader mode, on a malformed motion line.
        """
        tess = self.config.tessellation
        push_context(file=self.file_name)
        try:
            comments = extract_leading_comments(self.text)
            events = GCodeReader(self.text, strict=self.config.reader.strict).read()
            path = accumulate_path(
                events,
                resolution=tess.arc_resolution_mm,
                full_circle_tol=tess.full_circle_tol_mm,
            )
            normalized = normalize(path)
            logger.info(
                f"Imported {len(events)} events -> {len(normalized.vertices)} vertices, "
                f"aspect ratio {normalized.original_aspect_ratio:.4f}"
            )
        finally:
            pop_context(keys=["file"])

        result = ImportResult(
            file_name=self.file_name,
            label=self.label,
            comments=tuple(comments),
            vertices=normalized.vertices,
            original_aspect_ratio=normalized.original_aspect_ratio,
            bounds=normalized.bounds,
            event_count=len(events),
        )
        if callback is not None:
            callback(self, result)
        return result


def import_gcode_file(path: str | Path, config: PreviewConfigV1 | None = None) -> ImportResult:
    """Import a G-code file in one call."""
    return GCodeImporter.from_file(path, config).load()
