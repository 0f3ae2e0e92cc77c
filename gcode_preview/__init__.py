"""G-code toolpath preview.

Turns decoded G-code motion (straight moves and circular arcs in the XY
plane) into one ordered polyline, then normalizes it into a centered
``[-1, 1]`` square for rendering at any scale.

Architecture layers (one-way dependency):
    importer -> toolpath/ -> motion/ -> utils/

Key invariants:
    - Geometry in machine millimetres until normalization
    - Path order is traversal order; only zero-displacement moves are dropped
    - Arcs follow the commanded direction (G2 clockwise, G3 counter-clockwise)
    - Per-axis scaling; ``original_aspect_ratio`` restores proportions

Usage:
    from gcode_preview import GCodeImporter
    result = GCodeImporter.from_file("part.nc").load()
"""

from gcode_preview.importer import GCodeImporter, ImportResult, import_gcode_file
from gcode_preview.toolpath.normalize import EmptyPathError, NormalizedPath

__version__ = "0.1.0"

__all__ = [
    "EmptyPathError",
    "GCodeImporter",
    "ImportResult",
    "NormalizedPath",
    "import_gcode_file",
]
