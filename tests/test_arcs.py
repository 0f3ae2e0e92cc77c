"""Tests for arc tessellation.

Validates commanded sweep direction, chord density, exact closure on the
end point, and the degenerate fallbacks (full circle, zero radius, zero
sweep).
"""

from __future__ import annotations

import math

import pytest

from gcode_preview.motion.events import MotionMode, Vector2
from gcode_preview.toolpath.arcs import ARC_RESOLUTION, resolve_sweep, tessellate_arc

CW = MotionMode.ARC_CLOCKWISE
CCW = MotionMode.ARC_COUNTER_CLOCKWISE
ORIGIN = Vector2(0.0, 0.0)


def _chords(points: list[Vector2]) -> list[float]:
    return [a.distance_to(b) for a, b in zip(points, points[1:])]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def cw_quarter() -> list[Vector2]:
    """Clockwise quarter turn (1,0) -> (0,-1) about the origin."""
    return tessellate_arc(CW, Vector2(1.0, 0.0), Vector2(0.0, -1.0), ORIGIN)


# ---------------------------------------------------------------------------
# Sweep direction
# ---------------------------------------------------------------------------


class TestSweepDirection:
    def test_cw_quarter_stays_in_fourth_quadrant(self, cw_quarter: list[Vector2]) -> None:
        for p in cw_quarter:
            assert p.x >= -1e-12
            assert p.y <= 1e-12

    def test_cw_quarter_angle_decreases(self, cw_quarter: list[Vector2]) -> None:
        angles = [math.atan2(p.y, p.x) for p in cw_quarter]
        assert angles[0] == pytest.approx(0.0)
        assert angles[-1] == pytest.approx(-math.pi / 2)
        assert all(b < a for a, b in zip(angles, angles[1:]))

    def test_cw_quarter_ends_exactly(self, cw_quarter: list[Vector2]) -> None:
        assert cw_quarter[-1] == Vector2(0.0, -1.0)

    def test_ccw_same_endpoints_goes_long_way(self) -> None:
        points = tessellate_arc(CCW, Vector2(1.0, 0.0), Vector2(0.0, -1.0), ORIGIN)
        # Three quarters of a turn passes through the second quadrant
        assert any(p.x < -0.5 and p.y > 0.5 for p in points)
        assert points[-1] == Vector2(0.0, -1.0)

    def test_cw_positive_delta_forced_clockwise(self) -> None:
        points = tessellate_arc(CW, Vector2(1.0, 0.0), Vector2(0.0, 1.0), ORIGIN)
        assert any(p.y < -0.5 for p in points)
        assert points[-1] == Vector2(0.0, 1.0)

    def test_ccw_short_arc(self) -> None:
        points = tessellate_arc(CCW, Vector2(1.0, 0.0), Vector2(0.0, 1.0), ORIGIN)
        assert all(p.x >= -1e-12 and p.y >= -1e-12 for p in points)

    def test_points_on_circle(self) -> None:
        center = Vector2(3.0, -2.0)
        points = tessellate_arc(CCW, Vector2(8.0, -2.0), Vector2(3.0, 3.0), center)
        for p in points:
            assert p.distance_to(center) == pytest.approx(5.0)


class TestResolveSweep:
    def test_cw_wraps_positive_delta(self) -> None:
        end, delta, direction = resolve_sweep(CW, 0.0, math.pi / 2)
        assert end == pytest.approx(-3 * math.pi / 2)
        assert delta == pytest.approx(-3 * math.pi / 2)
        assert direction == -1.0

    def test_ccw_wraps_negative_delta(self) -> None:
        end, delta, direction = resolve_sweep(CCW, 0.0, -math.pi / 2)
        assert end == pytest.approx(3 * math.pi / 2)
        assert delta == pytest.approx(3 * math.pi / 2)
        assert direction == 1.0

    def test_linear_mode_not_forced(self) -> None:
        assert resolve_sweep(MotionMode.LINEAR, 0.0, -1.0) == (-1.0, -1.0, 1.0)


# ---------------------------------------------------------------------------
# Chord density
# ---------------------------------------------------------------------------


class TestChordDensity:
    def test_intermediate_point_count(self, cw_quarter: list[Vector2]) -> None:
        expected = math.ceil((math.pi / 2 * 1.0) / ARC_RESOLUTION)
        intermediate = len(cw_quarter) - 1  # final point is forced
        assert abs(intermediate - expected) <= 1

    def test_chords_within_resolution(self, cw_quarter: list[Vector2]) -> None:
        assert max(_chords(cw_quarter)) <= ARC_RESOLUTION + 1e-9

    def test_large_radius_chords(self) -> None:
        points = tessellate_arc(CW, Vector2(0.0, 50.0), Vector2(50.0, 0.0), ORIGIN)
        chords = _chords(points)
        assert max(chords) <= ARC_RESOLUTION + 1e-9
        # Stepped chords are close to the target, not much shorter
        assert chords[0] == pytest.approx(ARC_RESOLUTION, rel=1e-3)

    def test_finer_resolution_more_points(self) -> None:
        coarse = tessellate_arc(CW, Vector2(1.0, 0.0), Vector2(0.0, -1.0), ORIGIN)
        fine = tessellate_arc(CW, Vector2(1.0, 0.0), Vector2(0.0, -1.0), ORIGIN, resolution=0.1)
        assert len(fine) > len(coarse)
        assert max(_chords(fine)) <= 0.1 + 1e-9

    @pytest.mark.parametrize("resolution", [0.0, -0.5, float("nan"), float("inf")])
    def test_invalid_resolution(self, resolution: float) -> None:
        with pytest.raises(ValueError, match="resolution"):
            tessellate_arc(CW, Vector2(1.0, 0.0), Vector2(0.0, -1.0), ORIGIN, resolution=resolution)


# ---------------------------------------------------------------------------
# Degenerate input
# ---------------------------------------------------------------------------


class TestDegenerateArcs:
    def test_full_circle_emits_nothing(self) -> None:
        assert tessellate_arc(CW, Vector2(1.0, 0.0), Vector2(1.0, 0.0), ORIGIN) == []

    def test_full_circle_within_tolerance(self) -> None:
        assert tessellate_arc(CCW, Vector2(1.0, 0.0), Vector2(1.0, 1e-12), ORIGIN) == []

    def test_full_circle_tolerance_disabled(self) -> None:
        points = tessellate_arc(
            CCW, Vector2(1.0, 0.0), Vector2(1.0, 1e-12), ORIGIN, full_circle_tol=0.0
        )
        assert points[-1] == Vector2(1.0, 1e-12)

    def test_zero_radius_emits_end_only(self) -> None:
        points = tessellate_arc(CW, Vector2(1.0, 0.0), Vector2(0.0, 0.0), ORIGIN)
        assert points == [Vector2(0.0, 0.0)]

    @pytest.mark.parametrize("mode", [CW, CCW])
    def test_zero_sweep_emits_end_only(self, mode: MotionMode) -> None:
        # Same angle, different distance from the center
        points = tessellate_arc(mode, Vector2(2.0, 0.0), Vector2(1.0, 0.0), ORIGIN)
        assert points == [Vector2(1.0, 0.0)]

    def test_outputs_finite(self) -> None:
        points = tessellate_arc(CW, Vector2(1e-300, 0.0), Vector2(0.0, -1e-300), ORIGIN)
        assert all(math.isfinite(p.x) and math.isfinite(p.y) for p in points)
