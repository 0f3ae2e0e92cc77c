"""Bounding-box normalization of a vertex path.

Maps every vertex into ``[-1, 1]`` per axis around the bounding-box
center.  The axes are scaled **independently**, so a non-square box comes
out square; ``NormalizedPath.original_aspect_ratio`` (``scale_x /
scale_y``) lets a renderer restore true proportions.

Degenerate axis:
    A zero-extent axis would need an infinite scale.  Every output on that
    axis is ``0.0`` instead, and the aspect ratio is reported as ``1.0``.

Empty path:
    No bounding box exists; ``normalize`` raises ``EmptyPathError``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from gcode_preview.motion.events import Vector2

logger = logging.getLogger(__name__)


class EmptyPathError(ValueError):
    """Raised when normalizing a path with no vertices."""

    pass


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned extent of a path in machine units."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def center(self) -> Vector2:
        return Vector2((self.max_x + self.min_x) / 2.0, (self.max_y + self.min_y) / 2.0)

    @property
    def half_width(self) -> float:
        return self.max_x - self.center.x

    @property
    def half_height(self) -> float:
        return self.max_y - self.center.y


@dataclass(frozen=True, slots=True)
class NormalizedPath:
    """Path mapped into the centered ``[-1, 1]`` square.

    Parameters
    ----------
    vertices : tuple[Vector2, ...]
        Normalized vertices, same order and count as the input path.
    original_aspect_ratio : float
        ``scale_x / scale_y`` of the transform; ``1.0`` for a degenerate
        box.
    bounds : BoundingBox
        Source bounding box in machine units.
    """

    vertices: tuple[Vector2, ...]
    original_aspect_ratio: float
    bounds: BoundingBox

    def as_array(self) -> np.ndarray:
        """Vertices as an ``(N, 2)`` float64 array."""
        return np.array([v.as_tuple() for v in self.vertices], dtype=np.float64).reshape(-1, 2)

    def __len__(self) -> int:
        return len(self.vertices)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compute_bounds(path: Sequence[Vector2]) -> BoundingBox:
    """Reduce a path to its bounding box.

    Raises
    ------
    EmptyPathError
        If ``path`` has no vertices.
    """
    if len(path) == 0:
        raise EmptyPathError("Cannot compute bounds of an empty path")

    points = np.array([v.as_tuple() for v in path], dtype=np.float64)
    mins = points.min(axis=0)
    maxs = points.max(axis=0)
    return BoundingBox(float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1]))


def _axis_scale(half_extent: float, axis: str) -> float | None:
    """``1 / half_extent``, or ``None`` for a zero-extent axis."""
    # Subnormal extents overflow 1/h, so they count as zero too
    if half_extent == 0.0 or not math.isfinite(1.0 / half_extent):
        logger.debug(f"Degenerate {axis} axis (zero extent); mapping all {axis} to 0")
        return None
    return 1.0 / half_extent


def normalize(path: Sequence[Vector2]) -> NormalizedPath:
    """Center and scale a path into ``[-1, 1]`` per axis.

    Parameters
    ----------
    path : Sequence[Vector2]
        Vertices in machine units.

    Returns
    -------
    NormalizedPath
        Normalized vertices plus the aspect-ratio correction factor.

    Raises
    ------
    EmptyPathError
        If ``path`` is empty.
    """
    bounds = compute_bounds(path)
    offset = bounds.center
    scale_x = _axis_scale(bounds.half_width, "x")
    scale_y = _axis_scale(bounds.half_height, "y")

    if scale_x is None or scale_y is None:
        aspect_ratio = 1.0
    else:
        aspect_ratio = scale_x / scale_y

    points = np.array([v.as_tuple() for v in path], dtype=np.float64)
    out = np.zeros_like(points)
    if scale_x is not None:
        out[:, 0] = scale_x * (points[:, 0] - offset.x)
    if scale_y is not None:
        out[:, 1] = scale_y * (points[:, 1] - offset.y)

    vertices = tuple(Vector2(float(x), float(y)) for x, y in out)
    logger.debug(
        f"Normalized {len(vertices)} vertices: bounds=({bounds.min_x:.3f}, {bounds.min_y:.3f})"
        f"..({bounds.max_x:.3f}, {bounds.max_y:.3f}), aspect={aspect_ratio:.4f}"
    )
    return NormalizedPath(vertices=vertices, original_aspect_ratio=aspect_ratio, bounds=bounds)
