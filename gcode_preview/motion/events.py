"""Motion events -- the vocabulary between a G-code interpreter and the toolpath.

Every decoded move is an immutable, slotted dataclass.  Coordinates are
**machine units** (millimetres once the reader has applied ``G20``
scaling) in the XY plane only; Z words never reach this layer.

Two event kinds exist and the set is closed:

``LineEvent``
    Straight move (``G0``/``G1``) from ``start`` to ``end``.
``ArcEvent``
    Circular move (``G2``/``G3``) from ``start`` to ``end`` around
    ``center``.

Consumers dispatch over ``MotionEvent`` with ``isinstance``; there is no
callback object and no subclass hierarchy to extend.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union

# ---------------------------------------------------------------------------
# Coordinates
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Vector2:
    """Point in the XY plane.

    Parameters
    ----------
    x, y : float
        Coordinates in machine units.  Must be finite.
    """

    x: float
    y: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise ValueError(
                f"Vector2 coordinates must be finite, got ({self.x!r}, {self.y!r})"
            )

    def distance_to(self, other: Vector2) -> float:
        """Euclidean distance to ``other``."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


Vertex = Vector2
"""A path entry; its index encodes traversal order."""


# ---------------------------------------------------------------------------
# Modal motion
# ---------------------------------------------------------------------------


class MotionMode(Enum):
    """Motion type in effect for an event."""

    LINEAR = "G1"
    ARC_CLOCKWISE = "G2"
    ARC_COUNTER_CLOCKWISE = "G3"

    @classmethod
    def from_gcode(cls, word: str) -> MotionMode:
        """Map a modal motion word (``G0``, ``G01``, ``G2``...) to a mode.

        Raises
        ------
        ValueError
            If ``word`` is not a motion command.
        """
        normalized = word.strip().upper()
        if normalized in ("G0", "G00", "G1", "G01"):
            return cls.LINEAR
        if normalized in ("G2", "G02"):
            return cls.ARC_CLOCKWISE
        if normalized in ("G3", "G03"):
            return cls.ARC_COUNTER_CLOCKWISE
        raise ValueError(f"Not a motion command: {word!r}")

    @property
    def is_arc(self) -> bool:
        return self is not MotionMode.LINEAR


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LineEvent:
    """Straight move.

    Parameters
    ----------
    mode : MotionMode
        Modal state of the move, normally ``MotionMode.LINEAR``.
    start, end : Vector2
        Endpoints in machine units.
    """

    mode: MotionMode
    start: Vector2
    end: Vector2

    @property
    def is_noop(self) -> bool:
        """``True`` when the move has no XY displacement (exact compare)."""
        return self.start == self.end


@dataclass(frozen=True, slots=True)
class ArcEvent:
    """Circular move around a fixed center.

    Parameters
    ----------
    mode : MotionMode
        ``ARC_CLOCKWISE`` or ``ARC_COUNTER_CLOCKWISE``.  The sweep always
        follows this direction, never the geometrically shorter one.
    start, end : Vector2
        Endpoints in machine units.
    center : Vector2
        Center of curvature (absolute, not an I/J offset).
    """

    mode: MotionMode
    start: Vector2
    end: Vector2
    center: Vector2

    def __post_init__(self) -> None:
        if not self.mode.is_arc:
            raise ValueError(
                f"ArcEvent requires an arc mode, got {self.mode.name}"
            )

    @property
    def radius(self) -> float:
        return self.end.distance_to(self.center)

    @property
    def is_noop(self) -> bool:
        return self.start == self.end


MotionEvent = Union[LineEvent, ArcEvent]
"""Closed set of decoded moves."""
