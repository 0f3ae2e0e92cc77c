"""G-code text to motion events.

Provides:
    - Leading comment extraction (the header block most slicers/CAM write)
    - A minimal modal interpreter that turns G0/G1/G2/G3 lines into
      ``LineEvent`` / ``ArcEvent`` values in absolute XY millimetres

Tracks:
    - Current XY position (Z words are ignored)
    - Modal motion mode (G0/G1/G2/G3)
    - Distance mode (G90 absolute, G91 relative)
    - Units (G21 mm, G20 inch -> converted to mm)
    - Position overrides (G92)

Non-modal words that take X/Y as arguments (G4, G10, G28, G30, G53) never
produce a move.

Arc centers come from ``I``/``J`` offsets (relative to the start point) or
from ``R`` (negative ``R`` selects the arc longer than 180 degrees).
Only the XY plane (G17) is supported; ``G18``/``G19`` are ignored with a
warning.

Usage:
    from gcode_preview.motion.reader import GCodeReader

    reader = GCodeReader(text)
    events = reader.read()
    if reader.errors:
        print(reader.errors)
"""

from __future__ import annotations

import logging
import math
import re

from gcode_preview.motion.events import ArcEvent, LineEvent, MotionEvent, MotionMode, Vector2

logger = logging.getLogger(__name__)

# Word: letter followed by a number; accepts X.5, X-1., X+2
_WORD_RE = re.compile(r"([A-Z])\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+))", re.IGNORECASE)
_PAREN_COMMENT_RE = re.compile(r"\([^)]*\)")

_MM_PER_INCH = 25.4

# Dwell, offsets, homing, machine coords, position set: X/Y are arguments, not a target
_NON_MODAL_AXIS_CODES = frozenset({4.0, 10.0, 28.0, 30.0, 53.0, 92.0})


class GCodeParseError(ValueError):
    """Raised in strict mode when a motion line cannot be decoded."""

    def __init__(self, message: str, line_no: int | None = None) -> None:
        self.line_no = line_no
        where = f"line {line_no}: " if line_no is not None else ""
        super().__init__(f"{where}{message}")


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


def is_comment(line: str) -> bool:
    """``True`` for a trimmed line starting with ``;`` or ``(``."""
    return line.startswith(";") or line.startswith("(")


def extract_leading_comments(text: str) -> list[str]:
    """Return the comment block at the top of a program.

    Blank lines are skipped; the block ends at the first line that is
    not a comment.  Lines are returned as written (not trimmed).
    """
    comments: list[str] = []
    for raw in text.split("\n"):
        line = raw.strip()
        if not line:
            continue
        if not is_comment(line):
            break
        comments.append(raw)
    return comments


def strip_comments(line: str) -> str:
    """Remove ``( ... )`` and ``;`` comments, line numbers and checksums."""
    line = _PAREN_COMMENT_RE.sub(" ", line)
    # Unclosed comment runs to end of line
    if "(" in line:
        line = line.split("(", 1)[0]
    if ";" in line:
        line = line.split(";", 1)[0]
    if "*" in line:
        line = line.split("*", 1)[0]
    return line.strip()


# ---------------------------------------------------------------------------
# Reader
# ---------------------------------------------------------------------------


class GCodeReader:
    """Modal G-code interpreter producing motion events.

    Parameters
    ----------
    text : str
        Program text (multiple lines).
    strict : bool
        Raise ``GCodeParseError`` on malformed motion lines instead of
        recording them in ``errors``, default False.

    Attributes
    ----------
    pos : Vector2
        Current XY position in mm.
    motion : MotionMode | None
        Active modal motion; ``None`` until the first G0-G3 word.
    errors : list[str]
        Messages for lines that were skipped.
    """

    def __init__(self, text: str, strict: bool = False) -> None:
        self.lines = text.splitlines()
        self.strict = strict
        self.reset()

    def reset(self) -> None:
        """Reset interpreter state to the machine origin."""
        self.pos = Vector2(0.0, 0.0)
        self.motion: MotionMode | None = None
        self.absolute_mode = True
        self.units_scale = 1.0
        self.xy_plane = True
        self.errors: list[str] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def read(self) -> list[MotionEvent]:
        """Interpret every line and return the decoded moves in order.

        Raises
        ------
        GCodeParseError
            In strict mode, on the first malformed motion line.
        """
        self.reset()
        events: list[MotionEvent] = []

        for line_no, raw in enumerate(self.lines, 1):
            try:
                event = self.execute_line(raw, line_no)
            except GCodeParseError as e:
                if self.strict:
                    raise
                self.errors.append(str(e))
                logger.warning(f"Skipping {e}")
                continue
            if event is not None:
                events.append(event)

        logger.info(f"Read {len(events)} motion events from {len(self.lines)} lines")
        if self.errors:
            logger.warning(f"{len(self.errors)} lines could not be decoded")
        return events

    def execute_line(self, raw: str, line_no: int | None = None) -> MotionEvent | None:
        """Apply one line to the interpreter state.

        Returns
        -------
        MotionEvent | None
            The move the line commands, or ``None`` for non-motion lines.
        """
        line = strip_comments(raw)
        if not line:
            return None

        words = parse_words(line, line_no)
        if not words:
            return None

        axes: dict[str, float] = {}
        non_modal: float | None = None
        for letter, value in words:
            if letter == "G":
                code = self._apply_g_word(value, line_no)
                if code is not None:
                    non_modal = code
            elif letter in ("X", "Y", "I", "J", "R"):
                axes[letter] = value

        if non_modal == 92.0:
            self._set_position(axes)
            return None
        if non_modal is not None:
            logger.debug(f"G{non_modal:g} at line {line_no} consumes its axis words; no move emitted")
            return None

        if "X" not in axes and "Y" not in axes:
            return None
        if self.motion is None:
            logger.debug(f"Coordinates without motion mode at line {line_no}; ignored")
            return None
        if not self.xy_plane:
            return None

        start = self.pos
        end = self._target(axes)

        if self.motion is MotionMode.LINEAR:
            event: MotionEvent = LineEvent(self.motion, start, end)
        else:
            # Rejected arcs leave the position unchanged
            event = ArcEvent(self.motion, start, end, self._arc_center(start, end, axes, line_no))
        self.pos = end
        return event

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply_g_word(self, value: float, line_no: int | None) -> float | None:
        """Update modal state.

        Returns the code for non-modal words that take the line's axis
        words as arguments (``G4``, ``G10``, ``G28``, ``G30``, ``G53``,
        ``G92``), otherwise ``None``.
        """
        code = round(value, 1)

        if code in (0.0, 1.0, 2.0, 3.0):
            self.motion = MotionMode.from_gcode(f"G{code:g}")
        elif code in _NON_MODAL_AXIS_CODES:
            return code
        elif code == 17.0:
            self.xy_plane = True
        elif code in (18.0, 19.0):
            self.xy_plane = False
            logger.warning(f"G{code:g} plane selection at line {line_no} not supported; moves ignored")
        elif code == 20.0:
            self.units_scale = _MM_PER_INCH
        elif code == 21.0:
            self.units_scale = 1.0
        elif code == 90.0:
            self.absolute_mode = True
        elif code == 91.0:
            self.absolute_mode = False
        return None

    def _set_position(self, axes: dict[str, float]) -> None:
        x = axes["X"] * self.units_scale if "X" in axes else self.pos.x
        y = axes["Y"] * self.units_scale if "Y" in axes else self.pos.y
        self.pos = Vector2(x, y)
        logger.debug(f"G92: position set to ({x:.4f}, {y:.4f})")

    def _target(self, axes: dict[str, float]) -> Vector2:
        if self.absolute_mode:
            x = axes["X"] * self.units_scale if "X" in axes else self.pos.x
            y = axes["Y"] * self.units_scale if "Y" in axes else self.pos.y
        else:
            x = self.pos.x + axes.get("X", 0.0) * self.units_scale
            y = self.pos.y + axes.get("Y", 0.0) * self.units_scale
        return Vector2(x, y)

    def _arc_center(
        self,
        start: Vector2,
        end: Vector2,
        axes: dict[str, float],
        line_no: int | None,
    ) -> Vector2:
        if "I" in axes or "J" in axes:
            return Vector2(
                start.x + axes.get("I", 0.0) * self.units_scale,
                start.y + axes.get("J", 0.0) * self.units_scale,
            )
        if "R" in axes:
            return radius_to_center(
                start, end, axes["R"] * self.units_scale, self.motion, line_no
            )
        raise GCodeParseError("arc move without I/J or R", line_no)


def parse_words(line: str, line_no: int | None = None) -> list[tuple[str, float]]:
    """Split a comment-free line into ``(LETTER, value)`` pairs.

    ``N`` line numbers are dropped.

    Raises
    ------
    GCodeParseError
        If a value overflows to infinity.
    """
    words: list[tuple[str, float]] = []
    for letter, text in _WORD_RE.findall(line):
        letter = letter.upper()
        if letter == "N":
            continue
        value = float(text)
        if not math.isfinite(value):
            raise GCodeParseError(f"{letter} value out of range", line_no)
        words.append((letter, value))
    return words


def radius_to_center(
    start: Vector2,
    end: Vector2,
    radius: float,
    mode: MotionMode | None,
    line_no: int | None = None,
) -> Vector2:
    """Center of an ``R``-form arc.

    Parameters
    ----------
    start, end : Vector2
        Arc endpoints in mm.
    radius : float
        Signed radius; negative selects the arc longer than a half turn.
    mode : MotionMode
        Arc direction, which decides which side of the chord the center
        lies on.

    Raises
    ------
    GCodeParseError
        If the chord is zero or longer than the diameter.
    """
    dx = end.x - start.x
    dy = end.y - start.y
    chord = math.hypot(dx, dy)
    r = abs(radius)
    if chord == 0.0:
        raise GCodeParseError("R-form arc with identical start and end", line_no)
    # Allow a little rounding slack on half-circle arcs
    if chord > 2.0 * r * (1.0 + 1e-9):
        raise GCodeParseError(f"R={radius:g} too small for chord {chord:.4f}", line_no)

    h = math.sqrt(max(r * r - (chord / 2.0) ** 2, 0.0))
    # Center sits right of the chord for a short CW arc, left for a short CCW arc
    side = -1.0 if mode is MotionMode.ARC_CLOCKWISE else 1.0
    if radius < 0.0:
        side = -side
    mid_x = (start.x + end.x) / 2.0
    mid_y = (start.y + end.y) / 2.0
    return Vector2(mid_x - side * h * dy / chord, mid_y + side * h * dx / chord)
