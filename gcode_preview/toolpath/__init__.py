"""
Toolpath module.

Tessellates arcs, accumulates motion events into one vertex path, and
normalizes that path into the centered [-1, 1] square.
"""

from gcode_preview.toolpath.accumulator import accumulate_path, event_vertices
from gcode_preview.toolpath.arcs import ARC_RESOLUTION, FULL_CIRCLE_TOL, tessellate_arc
from gcode_preview.toolpath.normalize import (
    BoundingBox,
    EmptyPathError,
    NormalizedPath,
    compute_bounds,
    normalize,
)

__all__ = [
    "ARC_RESOLUTION",
    "FULL_CIRCLE_TOL",
    "BoundingBox",
    "EmptyPathError",
    "NormalizedPath",
    "accumulate_path",
    "compute_bounds",
    "event_vertices",
    "normalize",
    "tessellate_arc",
]
