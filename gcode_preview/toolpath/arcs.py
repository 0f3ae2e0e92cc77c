"""Arc tessellation at a fixed maximum chord length.

A ``G2``/``G3`` move cannot be handed to a renderer as a native arc: the
sweep must follow the *commanded* rotation even when the other way round
is shorter.  ``tessellate_arc`` therefore resolves the sweep direction
from the motion mode, then walks the angle in equal steps sized so every
chord is approximately ``resolution`` machine units long.

The exact end point is always appended last, so floating-point drift in
the stepped angle never leaves a gap at the end of the arc.
"""

from __future__ import annotations

import logging
import math

from gcode_preview.motion.events import MotionMode, Vector2

logger = logging.getLogger(__name__)

ARC_RESOLUTION = 0.5
"""Target chord length in machine units (mm)."""

FULL_CIRCLE_TOL = 1e-9
"""Absolute per-axis tolerance below which start and end are the same point."""

_TWO_PI = 2.0 * math.pi


def _same_point(a: Vector2, b: Vector2, tol: float) -> bool:
    return abs(a.x - b.x) <= tol and abs(a.y - b.y) <= tol


def resolve_sweep(
    mode: MotionMode,
    start_theta: float,
    end_theta: float,
) -> tuple[float, float, float]:
    """Force the angular sweep to follow the commanded direction.

    Parameters
    ----------
    mode : MotionMode
        Commanded motion.  ``LINEAR`` applies no forcing.
    start_theta, end_theta : float
        Angles of start and end relative to the center, as returned by
        ``atan2`` (radians, in ``[-pi, pi]``).

    Returns
    -------
    tuple[float, float, float]
        ``(end_theta, delta_theta, direction)`` where ``direction`` is
        ``+1.0`` for counter-clockwise and ``-1.0`` for clockwise.
    """
    delta_theta = end_theta - start_theta
    direction = 1.0

    if mode is MotionMode.ARC_CLOCKWISE:
        if delta_theta > 0.0:
            end_theta -= _TWO_PI
            delta_theta -= _TWO_PI
        direction = -1.0
    elif mode is MotionMode.ARC_COUNTER_CLOCKWISE:
        if delta_theta < 0.0:
            end_theta += _TWO_PI
            delta_theta += _TWO_PI

    return end_theta, delta_theta, direction


def tessellate_arc(
    mode: MotionMode,
    start: Vector2,
    end: Vector2,
    center: Vector2,
    resolution: float = ARC_RESOLUTION,
    full_circle_tol: float = FULL_CIRCLE_TOL,
) -> list[Vector2]:
    """Approximate a circular arc by a polyline.

    Parameters
    ----------
    mode : MotionMode
        ``ARC_CLOCKWISE`` or ``ARC_COUNTER_CLOCKWISE``.
    start, end, center : Vector2
        Arc geometry in machine units.
    resolution : float
        Maximum chord length, default ``ARC_RESOLUTION`` (0.5 mm).
    full_circle_tol : float
        Start/end coincidence tolerance, default ``FULL_CIRCLE_TOL``.

    Returns
    -------
    list[Vector2]
        Points along the arc starting at (approximately) ``start`` and
        ending exactly at ``end``.  Empty when ``start`` and ``end``
        coincide; ``[end]`` when the radius or sweep is zero.

    Raises
    ------
    ValueError
        If ``resolution`` is not a positive finite number.

    Notes
    -----
    Radius is measured from ``end``, so an arc whose start and end sit at
    slightly different distances from the center is drawn on the end
    point's circle.
    """
    if not (math.isfinite(resolution) and resolution > 0.0):
        raise ValueError(f"resolution must be positive and finite, got {resolution!r}")

    # Full circle: treated as a no-op move, nothing is drawn
    if _same_point(start, end, full_circle_tol):
        return []

    radius = end.distance_to(center)
    start_theta = math.atan2(start.y - center.y, start.x - center.x)
    end_theta = math.atan2(end.y - center.y, end.x - center.x)
    end_theta, delta_theta, direction = resolve_sweep(mode, start_theta, end_theta)

    arc_length = abs(delta_theta) * radius
    if radius == 0.0 or arc_length == 0.0:
        logger.debug(
            f"Degenerate arc (radius={radius:.6g}, sweep={delta_theta:.6g} rad) "
            f"at center ({center.x:.4f}, {center.y:.4f}); emitting end point only"
        )
        return [end]

    theta_step = delta_theta * resolution / arc_length

    points: list[Vector2] = []
    theta = start_theta
    while direction * theta <= direction * end_theta:
        points.append(
            Vector2(center.x + radius * math.cos(theta), center.y + radius * math.sin(theta))
        )
        theta += theta_step

    # Close exactly on the commanded end point
    points.append(end)
    return points
