"""Motion events to a single ordered vertex path.

Straight moves contribute their end point; arcs contribute their
tessellation.  Moves with no XY displacement (exact coordinate equality,
including pure Z moves) are dropped.  Nothing else is filtered, merged or
reordered.
"""

from __future__ import annotations

import logging
from typing import Iterable

from gcode_preview.motion.events import ArcEvent, LineEvent, MotionEvent, Vector2
from gcode_preview.toolpath.arcs import ARC_RESOLUTION, FULL_CIRCLE_TOL, tessellate_arc

logger = logging.getLogger(__name__)


def event_vertices(
    event: MotionEvent,
    resolution: float = ARC_RESOLUTION,
    full_circle_tol: float = FULL_CIRCLE_TOL,
) -> list[Vector2]:
    """Vertices contributed by one event.

    Raises
    ------
    TypeError
        If ``event`` is neither a ``LineEvent`` nor an ``ArcEvent``.
    """
    if isinstance(event, LineEvent):
        if not event.is_noop:
            return [event.end]
        return []

    if isinstance(event, ArcEvent):
        if not event.is_noop:
            return tessellate_arc(
                event.mode,
                event.start,
                event.end,
                event.center,
                resolution=resolution,
                full_circle_tol=full_circle_tol,
            )
        return []

    raise TypeError(f"Unsupported motion event: {type(event).__name__}")


def accumulate_path(
    events: Iterable[MotionEvent],
    resolution: float = ARC_RESOLUTION,
    full_circle_tol: float = FULL_CIRCLE_TOL,
) -> list[Vector2]:
    """Concatenate the vertices of every event, in order.

    Parameters
    ----------
    events : Iterable[MotionEvent]
        Decoded moves, consumed once.
    resolution : float
        Arc chord length in machine units, default 0.5.
    full_circle_tol : float
        Tolerance for arcs whose start and end coincide.

    Returns
    -------
    list[Vector2]
        The path.  May be empty if every move was a no-op.
    """
    path: list[Vector2] = []
    dropped = 0
    count = 0

    for event in events:
        count += 1
        vertices = event_vertices(event, resolution, full_circle_tol)
        if not vertices:
            dropped += 1
        path.extend(vertices)

    logger.debug(f"Accumulated {len(path)} vertices from {count} events ({dropped} contributed none)")
    return path
