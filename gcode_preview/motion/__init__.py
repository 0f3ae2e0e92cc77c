"""
Motion event module.

Defines decoded G-code moves as immutable dataclasses and the reader that
produces them from program text.

All coordinates are XY in machine millimetres.
"""

from gcode_preview.motion.events import (
    ArcEvent,
    LineEvent,
    MotionEvent,
    MotionMode,
    Vector2,
    Vertex,
)
from gcode_preview.motion.reader import (
    GCodeParseError,
    GCodeReader,
    extract_leading_comments,
)

__all__ = [
    "ArcEvent",
    "GCodeParseError",
    "GCodeReader",
    "LineEvent",
    "MotionEvent",
    "MotionMode",
    "Vector2",
    "Vertex",
    "extract_leading_comments",
]
